from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from services.snapshot_cache import SnapshotCache
from tests.helpers.clock import FakeClock

TTL = timedelta(minutes=2)


def test_value_is_reused_within_ttl() -> None:
    clock = FakeClock()
    cache = SnapshotCache(clock=clock)
    calls: list[int] = []

    def compute() -> str:
        calls.append(1)
        return f"value-{len(calls)}"

    assert cache.get_or_compute("quotes", TTL, compute) == "value-1"
    clock.advance(timedelta(seconds=119))
    assert cache.get_or_compute("quotes", TTL, compute) == "value-1"
    assert len(calls) == 1


def test_value_is_recomputed_after_expiry() -> None:
    clock = FakeClock()
    cache = SnapshotCache(clock=clock)
    values = iter(["first", "second"])

    cache.get_or_compute("quotes", TTL, lambda: next(values))
    clock.advance(TTL)

    assert cache.get("quotes") is None
    assert cache.get_or_compute("quotes", TTL, lambda: next(values)) == "second"


def test_invalidate_forces_recompute() -> None:
    cache = SnapshotCache(clock=FakeClock())
    values = iter(["first", "second"])

    cache.get_or_compute("quotes", TTL, lambda: next(values))
    cache.invalidate("quotes")

    assert cache.get_or_compute("quotes", TTL, lambda: next(values)) == "second"


def test_keys_are_independent() -> None:
    cache = SnapshotCache(clock=FakeClock())

    cache.get_or_compute("quotes", TTL, lambda: "q")
    cache.get_or_compute("news", TTL, lambda: "n")
    cache.invalidate("news")

    assert cache.get("quotes") == "q"
    assert cache.get("news") is None


def test_failed_compute_leaves_no_entry() -> None:
    cache = SnapshotCache(clock=FakeClock())

    def boom() -> str:
        raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        cache.get_or_compute("quotes", TTL, boom)
    assert cache.get("quotes") is None


def test_non_positive_ttl_is_rejected() -> None:
    with pytest.raises(ValueError):
        SnapshotCache().get_or_compute("quotes", timedelta(0), lambda: "x")


def test_concurrent_misses_compute_once() -> None:
    cache = SnapshotCache(clock=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc))
    started = threading.Event()
    release = threading.Event()
    calls: list[int] = []

    def slow_compute() -> str:
        calls.append(1)
        started.set()
        release.wait(timeout=5)
        return "value"

    results: list[str] = []
    threads = [
        threading.Thread(target=lambda: results.append(cache.get_or_compute("quotes", TTL, slow_compute)))
        for _ in range(4)
    ]
    threads[0].start()
    started.wait(timeout=5)
    for thread in threads[1:]:
        thread.start()
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert results == ["value"] * 4
    assert len(calls) == 1
