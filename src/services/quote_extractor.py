from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Sequence

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from domain.quotes import QuotePair, QuoteType, SingleValueQuote

from .amounts import parse_amount
from .quote_classifier import classify

logger = logging.getLogger(__name__)

MAIN_CONTAINER_SELECTOR = "div.tile.dolar"
MORE_QUOTES_CONTAINER_SELECTOR = "div.modulo__more_cotizaciones div.cotizaciones_more"
TILE_SELECTOR = "div.tile.is-child"
TITLE_LINK_SELECTOR = "a.titleText"
BUY_VALUE_SELECTOR = "div.compra div.val"
SELL_VALUE_SELECTOR = "div.venta div.val"
VALUE_SELECTOR = "div.val"

ExtractedQuotes = dict[QuoteType, QuotePair | SingleValueQuote]


@dataclass(frozen=True)
class TileStrategy:
    """A region of the page holding quotation tiles."""

    name: str
    container_selector: str


DEFAULT_STRATEGIES: tuple[TileStrategy, ...] = (
    TileStrategy(name="main", container_selector=MAIN_CONTAINER_SELECTOR),
    TileStrategy(name="more_quotes", container_selector=MORE_QUOTES_CONTAINER_SELECTOR),
)


def parse_document(html: bytes | str) -> BeautifulSoup | None:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Quotation page could not be parsed: %s", exc)
        return None


class QuoteExtractor:
    """Pull quotation tiles out of the dolarhoy.com home page.

    Strategies are tried in order and the first one yielding at least one quote
    wins. A quote type already collected is never overwritten.
    """

    def __init__(
        self,
        strategies: Sequence[TileStrategy] = DEFAULT_STRATEGIES,
        *,
        classifier: Callable[[str | None], QuoteType | None] = classify,
    ) -> None:
        if not strategies:
            raise ValueError("at least one extraction strategy is required")
        self.strategies = tuple(strategies)
        self.classifier = classifier

    def extract(self, html: bytes | str) -> ExtractedQuotes:
        soup = parse_document(html)
        if soup is None:
            return {}

        found: ExtractedQuotes = {}
        for strategy in self.strategies:
            self._run_strategy(soup, strategy, found)
            if found:
                break
            logger.info("Strategy %s found no quotes, trying next", strategy.name)

        logger.info("Quotation extraction finished types=%s", [str(quote_type) for quote_type in found])
        return found

    def _run_strategy(self, soup: BeautifulSoup, strategy: TileStrategy, found: ExtractedQuotes) -> None:
        container = soup.select_one(strategy.container_selector)
        if container is None:
            logger.info("Strategy %s: container %r not present", strategy.name, strategy.container_selector)
            return

        tiles = container.select(TILE_SELECTOR)
        logger.info("Strategy %s: %d tiles", strategy.name, len(tiles))
        for index, tile in enumerate(tiles):
            link = tile.select_one(TITLE_LINK_SELECTOR)
            if link is None:
                continue
            href = link.get("href")
            href_text = href if isinstance(href, str) else None
            quote_type = self.classifier(href_text)
            logger.debug(
                "Tile %d href=%s text=%r type=%s", index, href_text, link.get_text(strip=True), quote_type
            )
            if quote_type is None or quote_type in found:
                continue

            quote = extract_tile_quote(tile, quote_type)
            if quote is not None:
                found[quote_type] = quote
                logger.debug("Tile %d stored %s: %s", index, quote_type, quote)


def extract_tile_quote(tile: Tag, quote_type: QuoteType) -> QuotePair | SingleValueQuote | None:
    buy = _read_amount(tile, BUY_VALUE_SELECTOR)
    sell = _read_amount(tile, SELL_VALUE_SELECTOR)
    has_buy = buy is not None and buy > 0
    has_sell = sell is not None and sell > 0

    if quote_type is QuoteType.TARJETA:
        if has_sell:
            return SingleValueQuote(value=sell)
        if has_buy:
            return SingleValueQuote(value=buy)
        # Some layouts show the card rate as a single unlabeled value.
        value = _read_amount(tile, VALUE_SELECTOR)
        if value is None:
            return None
        return SingleValueQuote(value=value)

    if not (has_buy or has_sell):
        return None
    return QuotePair(buy=buy or Decimal("0"), sell=sell or Decimal("0"))


def _read_amount(tile: Tag, selector: str) -> Decimal | None:
    node = tile.select_one(selector)
    if node is None:
        return None
    return parse_amount(node.get_text(" ", strip=True))


__all__ = [
    "DEFAULT_STRATEGIES",
    "ExtractedQuotes",
    "QuoteExtractor",
    "TileStrategy",
    "extract_tile_quote",
    "parse_document",
]
