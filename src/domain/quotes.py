from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator

ZERO = Decimal("0")

# JSON consumers expect plain numbers, not decimal strings.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class QuoteType(StrEnum):
    OFICIAL = "oficial"
    BLUE = "blue"
    MEP = "mep"
    CCL = "ccl"
    CRIPTO = "cripto"
    TARJETA = "tarjeta"
    FREELANCE = "freelance"


SINGLE_VALUE_TYPES = frozenset({QuoteType.TARJETA, QuoteType.FREELANCE})


class QuotePair(BaseModel):
    """Two-sided quote (compra / venta)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pair"] = "pair"
    buy: Amount = ZERO
    sell: Amount = ZERO

    @model_validator(mode="after")
    def _validate_fields(self) -> QuotePair:
        if self.buy < 0 or self.sell < 0:
            raise ValueError("QuotePair buy/sell must be >= 0")
        return self

    @property
    def is_zero(self) -> bool:
        return self.buy == 0 and self.sell == 0


class SingleValueQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    value: Amount = ZERO

    @model_validator(mode="after")
    def _validate_fields(self) -> SingleValueQuote:
        if self.value < 0:
            raise ValueError("SingleValueQuote.value must be >= 0")
        return self

    @property
    def is_zero(self) -> bool:
        return self.value == 0


Quote = Annotated[QuotePair | SingleValueQuote, Field(discriminator="kind")]


def placeholder_for(quote_type: QuoteType) -> QuotePair | SingleValueQuote:
    """Zero-valued quote with the shape expected for ``quote_type``."""
    if quote_type in SINGLE_VALUE_TYPES:
        return SingleValueQuote()
    return QuotePair()


class QuotationSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    quotes: Mapping[QuoteType, Quote]
    source: str
    success: bool
    timestamp: datetime
    error: str | None = None

    @model_validator(mode="after")
    def _validate_fields(self) -> QuotationSnapshot:
        for quote_type, quote in self.quotes.items():
            expected = SingleValueQuote if quote_type in SINGLE_VALUE_TYPES else QuotePair
            if not isinstance(quote, expected):
                raise ValueError(f"{quote_type} must be stored as {expected.__name__}")
        if self.timestamp.tzinfo is None:
            raise ValueError("QuotationSnapshot.timestamp must be timezone-aware")
        return self

    def quote(self, quote_type: QuoteType) -> QuotePair | SingleValueQuote:
        return self.quotes.get(quote_type, placeholder_for(quote_type))


__all__ = [
    "Amount",
    "Quote",
    "QuotePair",
    "QuoteType",
    "QuotationSnapshot",
    "SINGLE_VALUE_TYPES",
    "SingleValueQuote",
    "placeholder_for",
]
