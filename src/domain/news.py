from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class NewsItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    # Rendered in UTC-3, or the feed's original text when it could not be parsed.
    published_at: str

    @model_validator(mode="after")
    def _validate_fields(self) -> NewsItem:
        if not self.title.strip():
            raise ValueError("NewsItem.title must be non-empty")
        return self


class NewsSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[NewsItem, ...] = ()
    source: str
    timestamp: datetime
    error: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        return len(self.items)


__all__ = ["NewsItem", "NewsSnapshot"]
