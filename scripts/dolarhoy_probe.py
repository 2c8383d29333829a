# flake8: noqa E402
# Diagnose markup drift on dolarhoy.com, e.g.:
# python scripts/dolarhoy_probe.py
# python scripts/dolarhoy_probe.py --html saved_page.html
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Ensure the src directory is importable when the script is invoked directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import config
from services.http_fetcher import HttpFetcher
from services.quote_extractor import DEFAULT_STRATEGIES, QuoteExtractor


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run every quotation extraction strategy separately.")
    parser.add_argument("--url", default=None, help="Page to fetch (default: configured quotes_url).")
    parser.add_argument("--html", type=Path, default=None, help="Read a saved page instead of fetching.")
    parser.add_argument("--verbose", action="store_true", help="Log every tile.")
    return parser.parse_args()


def load_page(args: argparse.Namespace) -> bytes:
    if args.html is not None:
        return args.html.read_bytes()
    settings = config()
    fetcher = HttpFetcher(
        timeout=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
        retry_delay_seconds=settings.http_retry_delay_ms / 1000,
        max_redirects=settings.http_max_redirects,
        verify_tls=settings.http_verify_tls,
    )
    return fetcher.fetch(args.url or settings.quotes_url).content


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    page = load_page(args)
    payload: dict[str, Any] = {"bytes": len(page), "strategies": {}}
    for strategy in DEFAULT_STRATEGIES:
        quotes = QuoteExtractor([strategy]).extract(page)
        payload["strategies"][strategy.name] = {
            "container": strategy.container_selector,
            "quotes": {str(quote_type): quote.model_dump(mode="json") for quote_type, quote in quotes.items()},
        }
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
