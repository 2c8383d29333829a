from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUOTES_CACHE_KEY = "quotes"
NEWS_CACHE_KEY = "news"
DEFAULT_TTL = timedelta(minutes=2)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at


class SnapshotCache:
    """In-process TTL cache holding one whole snapshot per key.

    Entries are immutable and swapped under a lock, so readers see either the
    previous or the new entry. Misses on the same key are computed once; other
    callers wait for that result.
    """

    def __init__(self, *, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry[object]] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock()):
            return None
        return entry.value

    def get_or_compute(self, key: str, ttl: timedelta, compute: Callable[[], T]) -> T:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")

        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit key=%s", key)
            return cached  # type: ignore[return-value]

        with self._key_lock(key):
            # Another caller may have filled the entry while we waited.
            cached = self.get(key)
            if cached is not None:
                return cached  # type: ignore[return-value]

            logger.info("Cache miss key=%s, computing", key)
            value = compute()
            entry = CacheEntry(value=value, expires_at=self._clock() + ttl)
            with self._lock:
                self._entries[key] = entry
            return value

    def invalidate(self, key: str) -> None:
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            logger.info("Cache invalidated key=%s", key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _key_lock(self, key: str) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock


__all__ = ["CacheEntry", "DEFAULT_TTL", "NEWS_CACHE_KEY", "QUOTES_CACHE_KEY", "SnapshotCache", "utc_now"]
