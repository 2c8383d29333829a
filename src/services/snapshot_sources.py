from __future__ import annotations

from typing import Protocol

from domain.news import NewsSnapshot
from domain.quotes import QuotationSnapshot


class QuotationSource(Protocol):
    def fetch_snapshot(self) -> QuotationSnapshot: ...


class NewsSource(Protocol):
    def fetch_snapshot(self) -> NewsSnapshot: ...


__all__ = ["NewsSource", "QuotationSource"]
