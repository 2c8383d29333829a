from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from domain.quotes import QuotationSnapshot, QuotePair, QuoteType, SingleValueQuote, placeholder_for

SOURCE_NAME = "dolarhoy.com"
FALLBACK_SOURCE = "valores_fallback"
HTTP_FALLBACK_SOURCE = "valores_fallback_http_error"

# Fixed 7.5% haircut on the cripto sell rate.
FREELANCE_FACTOR = Decimal("0.925")
EMPTY_EXTRACTION_ERROR = "no quotation tiles found"


def freelance_rate(cripto: QuotePair | SingleValueQuote | None) -> Decimal:
    if not isinstance(cripto, QuotePair) or cripto.sell <= 0:
        return Decimal("0")
    return (cripto.sell * FREELANCE_FACTOR).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def aggregate(
    raw_by_type: Mapping[QuoteType, QuotePair | SingleValueQuote],
    *,
    timestamp: datetime,
    source: str = SOURCE_NAME,
) -> QuotationSnapshot:
    quotes: dict[QuoteType, QuotePair | SingleValueQuote] = {}
    for quote_type in QuoteType:
        if quote_type is QuoteType.FREELANCE:
            continue
        quotes[quote_type] = raw_by_type.get(quote_type, placeholder_for(quote_type))
    quotes[QuoteType.FREELANCE] = SingleValueQuote(value=freelance_rate(raw_by_type.get(QuoteType.CRIPTO)))

    success = bool(raw_by_type)
    return QuotationSnapshot(
        quotes=quotes,
        source=source,
        success=success,
        timestamp=timestamp,
        error=None if success else EMPTY_EXTRACTION_ERROR,
    )


def failure_snapshot(error: str, *, timestamp: datetime, source: str = FALLBACK_SOURCE) -> QuotationSnapshot:
    return QuotationSnapshot(
        quotes={quote_type: placeholder_for(quote_type) for quote_type in QuoteType},
        source=source,
        success=False,
        timestamp=timestamp,
        error=error,
    )


__all__ = [
    "EMPTY_EXTRACTION_ERROR",
    "FALLBACK_SOURCE",
    "FREELANCE_FACTOR",
    "HTTP_FALLBACK_SOURCE",
    "SOURCE_NAME",
    "aggregate",
    "failure_snapshot",
    "freelance_rate",
]
