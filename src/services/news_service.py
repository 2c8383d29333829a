from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from config import AMBITO_ECONOMIA_RSS_URL
from domain.news import NewsSnapshot

from .http_fetcher import RSS_ACCEPT, FetchError, HttpFetcher
from .news_extractor import DEFAULT_LIMIT, FeedParseError, extract_news
from .snapshot_cache import utc_now
from .snapshot_sources import NewsSource

logger = logging.getLogger(__name__)

NEWS_SOURCE_NAME = "ambito.com"


class AmbitoNewsSource(NewsSource):
    def __init__(
        self,
        *,
        fetcher: HttpFetcher,
        url: str = AMBITO_ECONOMIA_RSS_URL,
        limit: int = DEFAULT_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.fetcher = fetcher
        self.url = url
        self.limit = limit
        self._clock = clock

    def fetch_snapshot(self) -> NewsSnapshot:
        try:
            document = self.fetcher.fetch(self.url, headers={"Accept": RSS_ACCEPT})
            items = extract_news(document.content, limit=self.limit)
        except FetchError as exc:
            logger.error(
                "HTTP error reading RSS url=%s status=%s body=%r: %s",
                exc.url,
                exc.status if exc.status is not None else "No response",
                exc.body if exc.body is not None else "No body",
                exc,
            )
            return self._empty(f"Error HTTP: {exc}")
        except FeedParseError as exc:
            logger.error("Unparsable RSS url=%s: %s", self.url, exc)
            return self._empty(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error reading RSS url=%s", self.url)
            return self._empty(str(exc) or type(exc).__name__)

        logger.info(
            "RSS processed url=%s status=%d items=%d",
            self.url,
            document.status_code,
            len(items),
        )
        return NewsSnapshot(items=tuple(items), source=NEWS_SOURCE_NAME, timestamp=self._clock())

    def _empty(self, error: str) -> NewsSnapshot:
        return NewsSnapshot(items=(), source=NEWS_SOURCE_NAME, timestamp=self._clock(), error=error)


__all__ = ["AmbitoNewsSource", "NEWS_SOURCE_NAME"]
