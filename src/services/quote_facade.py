from __future__ import annotations

from datetime import timedelta

from config import AppSettings, config
from domain.news import NewsSnapshot
from domain.quotes import QuotationSnapshot, QuotePair, QuoteType, SingleValueQuote

from .http_fetcher import HttpFetcher
from .news_service import AmbitoNewsSource
from .quotation_service import DolarHoySource
from .snapshot_cache import DEFAULT_TTL, NEWS_CACHE_KEY, QUOTES_CACHE_KEY, SnapshotCache
from .snapshot_sources import NewsSource, QuotationSource

VALID_QUOTE_TYPES: tuple[str, ...] = tuple(quote_type.value for quote_type in QuoteType)


class InvalidQuoteTypeError(ValueError):
    def __init__(self, requested: str) -> None:
        super().__init__(f"El tipo '{requested}' no es válido. Tipos válidos: {', '.join(VALID_QUOTE_TYPES)}")
        self.requested = requested


def parse_quote_type(value: str) -> QuoteType:
    # Exact, case-sensitive match against the tag values.
    if not isinstance(value, str) or value not in VALID_QUOTE_TYPES:
        raise InvalidQuoteTypeError(str(value))
    return QuoteType(value)


class QuoteFacade:
    def __init__(
        self,
        *,
        quotation_source: QuotationSource,
        news_source: NewsSource,
        cache: SnapshotCache | None = None,
        ttl: timedelta = DEFAULT_TTL,
    ) -> None:
        self.quotation_source = quotation_source
        self.news_source = news_source
        self.cache = cache or SnapshotCache()
        self.ttl = ttl

    def get_quotations(self) -> QuotationSnapshot:
        return self.cache.get_or_compute(QUOTES_CACHE_KEY, self.ttl, self.quotation_source.fetch_snapshot)

    def get_fresh_quotations(self) -> QuotationSnapshot:
        self.cache.invalidate(QUOTES_CACHE_KEY)
        return self.get_quotations()

    def get_quotations_by_type(self, quote_type: str) -> QuotePair | SingleValueQuote:
        parsed = parse_quote_type(quote_type)
        return self.get_quotations().quote(parsed)

    def get_news(self) -> NewsSnapshot:
        return self.cache.get_or_compute(NEWS_CACHE_KEY, self.ttl, self.news_source.fetch_snapshot)


def build_default_facade(settings: AppSettings | None = None) -> QuoteFacade:
    settings = settings or config()
    fetcher = HttpFetcher(
        timeout=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
        retry_delay_seconds=settings.http_retry_delay_ms / 1000,
        max_redirects=settings.http_max_redirects,
        verify_tls=settings.http_verify_tls,
    )
    return QuoteFacade(
        quotation_source=DolarHoySource(fetcher=fetcher, url=settings.quotes_url),
        news_source=AmbitoNewsSource(fetcher=fetcher, url=settings.news_url),
        ttl=timedelta(seconds=settings.cache_ttl_seconds),
    )


__all__ = ["InvalidQuoteTypeError", "QuoteFacade", "VALID_QUOTE_TYPES", "build_default_facade", "parse_quote_type"]
