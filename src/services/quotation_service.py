from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from config import DOLARHOY_URL
from domain.quotes import QuotationSnapshot

from .http_fetcher import HTML_ACCEPT, FetchError, HttpFetcher
from .quotation_aggregator import HTTP_FALLBACK_SOURCE, aggregate, failure_snapshot
from .quote_extractor import QuoteExtractor
from .snapshot_cache import utc_now
from .snapshot_sources import QuotationSource

logger = logging.getLogger(__name__)


class DolarHoySource(QuotationSource):
    """Fetch + extract + aggregate pipeline for the dolarhoy.com home page.

    Never raises: fetch failures and unexpected errors are folded into an
    all-zero snapshot with ``success=False``.
    """

    def __init__(
        self,
        *,
        fetcher: HttpFetcher,
        url: str = DOLARHOY_URL,
        extractor: QuoteExtractor | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.fetcher = fetcher
        self.url = url
        self.extractor = extractor or QuoteExtractor()
        self._clock = clock

    def fetch_snapshot(self) -> QuotationSnapshot:
        try:
            document = self.fetcher.fetch(self.url, headers={"Accept": HTML_ACCEPT})
            raw_quotes = self.extractor.extract(document.content)
            snapshot = aggregate(raw_quotes, timestamp=self._clock())
        except FetchError as exc:
            logger.error(
                "HTTP error scraping quotations url=%s status=%s body=%r: %s",
                exc.url,
                exc.status if exc.status is not None else "No response",
                exc.body if exc.body is not None else "No body",
                exc,
            )
            return failure_snapshot(f"Error HTTP: {exc}", timestamp=self._clock(), source=HTTP_FALLBACK_SOURCE)
        except Exception as exc:
            logger.exception("Unexpected error scraping quotations url=%s", self.url)
            return failure_snapshot(str(exc) or type(exc).__name__, timestamp=self._clock())

        logger.info(
            "Quotation scraping finished url=%s status=%d bytes=%d elapsed=%.3fs types=%s success=%s",
            self.url,
            document.status_code,
            len(document.content),
            document.elapsed,
            [str(quote_type) for quote_type in raw_quotes],
            snapshot.success,
        )
        if not snapshot.success:
            logger.warning("No quotation tiles recognised at %s; page markup may have changed", self.url)
        return snapshot


__all__ = ["DolarHoySource"]
