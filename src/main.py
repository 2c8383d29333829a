from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Sequence

from services.quote_facade import QuoteFacade, build_default_facade

logger = logging.getLogger(__name__)


def run_quotes(facade: QuoteFacade, *, fresh: bool, quote_type: str | None) -> dict[str, Any]:
    if quote_type is not None:
        return {"tipo": quote_type, "cotizacion": facade.get_quotations_by_type(quote_type).model_dump(mode="json")}
    snapshot = facade.get_fresh_quotations() if fresh else facade.get_quotations()
    return snapshot.model_dump(mode="json")


def run_news(facade: QuoteFacade) -> dict[str, Any]:
    return facade.get_news().model_dump(mode="json")


def main(argv: Sequence[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    parser = argparse.ArgumentParser(description="Scrape Argentine dollar quotations and economy news.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    quotes_parser = subparsers.add_parser("quotes", help="Print the current dollar quotations.")
    quotes_parser.add_argument("--fresh", action="store_true", help="Bypass the cache.")
    quotes_parser.add_argument("--type", dest="quote_type", default=None, help="Only print one quote type.")

    subparsers.add_parser("news", help="Print the latest economy headlines.")

    args = parser.parse_args(argv)
    facade = build_default_facade()
    if args.command == "quotes":
        try:
            payload = run_quotes(facade, fresh=args.fresh, quote_type=args.quote_type)
        except ValueError as exc:
            parser.error(str(exc))
    else:
        payload = run_news(facade)
    print(json.dumps(payload, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
