from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import feedparser
from bs4 import BeautifulSoup

from domain.news import NewsItem

logger = logging.getLogger(__name__)

BUENOS_AIRES_TZ = timezone(timedelta(hours=-3), "-03")
PUBLISHED_FORMAT = "%Y-%m-%d %H:%M:%S %Z"
DEFAULT_LIMIT = 5


class FeedParseError(ValueError):
    """The RSS document could not be parsed and yielded no entries."""


def normalize_pub_date(raw: str) -> str:
    """Render an RFC 2822 date in Buenos Aires time; unparsable input is returned as-is."""
    try:
        published = parsedate_to_datetime(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Error parsing pubDate %r: %s", raw, exc)
        return raw
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published.astimezone(BUENOS_AIRES_TZ).strftime(PUBLISHED_FORMAT)


def _clean_title(raw: Any) -> str:
    if not raw:
        return ""
    return BeautifulSoup(str(raw), "html.parser").get_text(" ", strip=True)


def extract_news(feed_content: bytes | str, *, limit: int = DEFAULT_LIMIT) -> list[NewsItem]:
    """Return the first ``limit`` usable feed items in document order."""
    if limit <= 0:
        raise ValueError("limit must be > 0")

    # feedparser treats str input as a possible URL or path.
    if isinstance(feed_content, str):
        feed_content = feed_content.encode("utf-8")
    feed = feedparser.parse(feed_content)
    if feed.get("bozo") and not feed.entries:
        reason = feed.get("bozo_exception")
        logger.warning("RSS feed could not be parsed: %s", reason)
        raise FeedParseError(f"RSS feed could not be parsed: {reason}")

    logger.info("RSS items found: %d", len(feed.entries))
    items: list[NewsItem] = []
    for entry in feed.entries:
        if len(items) >= limit:
            break
        title = _clean_title(entry.get("title"))
        raw_date = (entry.get("published") or "").strip()
        if not title or not raw_date:
            logger.debug("Skipping RSS item title=%r published=%r", title, raw_date)
            continue
        items.append(NewsItem(title=title, published_at=normalize_pub_date(raw_date)))
        logger.debug("News item %d: %s", len(items), title)
    return items


__all__ = ["BUENOS_AIRES_TZ", "DEFAULT_LIMIT", "FeedParseError", "extract_news", "normalize_pub_date"]
