from __future__ import annotations

from decimal import Decimal

import pytest

from domain.news import NewsItem, NewsSnapshot
from domain.quotes import QuotationSnapshot, QuotePair, QuoteType
from main import run_news, run_quotes
from services.quotation_aggregator import aggregate
from services.quote_facade import InvalidQuoteTypeError, QuoteFacade
from services.snapshot_cache import SnapshotCache
from tests.helpers.clock import FakeClock


class _QuotationSource:
    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.calls = 0

    def fetch_snapshot(self) -> QuotationSnapshot:
        self.calls += 1
        raw = {QuoteType.MEP: QuotePair(buy=Decimal("1150.10"), sell=Decimal("1155.90"))}
        return aggregate(raw, timestamp=self.clock())


class _NewsSource:
    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock

    def fetch_snapshot(self) -> NewsSnapshot:
        item = NewsItem(title="Reservas del BCRA", published_at="2025-03-10 12:00:00 -03")
        return NewsSnapshot(items=(item,), source="ambito.com", timestamp=self.clock())


def _facade(clock: FakeClock) -> tuple[QuoteFacade, _QuotationSource]:
    source = _QuotationSource(clock)
    facade = QuoteFacade(quotation_source=source, news_source=_NewsSource(clock), cache=SnapshotCache(clock=clock))
    return facade, source


def test_run_quotes_prints_whole_snapshot(clock: FakeClock) -> None:
    facade, source = _facade(clock)

    payload = run_quotes(facade, fresh=False, quote_type=None)
    run_quotes(facade, fresh=True, quote_type=None)

    assert payload["quotes"]["mep"]["sell"] == 1155.9
    assert payload["source"] == "dolarhoy.com"
    assert source.calls == 2


def test_run_quotes_single_type(clock: FakeClock) -> None:
    facade, _ = _facade(clock)

    payload = run_quotes(facade, fresh=False, quote_type="mep")

    assert payload == {"tipo": "mep", "cotizacion": {"kind": "pair", "buy": 1150.1, "sell": 1155.9}}


def test_run_quotes_rejects_unknown_type(clock: FakeClock) -> None:
    facade, _ = _facade(clock)

    with pytest.raises(InvalidQuoteTypeError):
        run_quotes(facade, fresh=False, quote_type="euro")


def test_run_news(clock: FakeClock) -> None:
    facade, _ = _facade(clock)

    payload = run_news(facade)

    assert payload["count"] == 1
    assert payload["items"] == [{"title": "Reservas del BCRA", "published_at": "2025-03-10 12:00:00 -03"}]
