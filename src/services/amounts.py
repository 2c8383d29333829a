from __future__ import annotations

import re
from decimal import Decimal

# "$ 1.234,56", "$1234", "$0,00", "$ 1234,5": '.' groups thousands, ',' marks the cents.
_NUMBER = r"(?P<units>\d{1,3}(?:\.\d{3})+|\d+)(?:,(?P<cents>\d{1,2}))?(?![\d,])"
_PRICED_AMOUNT_RE = re.compile(r"\$\s*" + _NUMBER)
_BARE_AMOUNT_RE = re.compile(r"(?<![\d.,])" + _NUMBER)


def parse_amount(text: str | None) -> Decimal | None:
    """Parse the first es-AR formatted amount found in ``text``.

    A ``$``-prefixed amount wins over bare numbers appearing earlier. Returns
    ``None`` when no amount-shaped substring is present, so callers can tell
    "not found" apart from a literal zero.
    """
    if not text:
        return None
    match = _PRICED_AMOUNT_RE.search(text) or _BARE_AMOUNT_RE.search(text)
    if match is None:
        return None
    units = match.group("units").replace(".", "")
    cents = match.group("cents")
    return Decimal(f"{units}.{cents}") if cents else Decimal(units)


__all__ = ["parse_amount"]
