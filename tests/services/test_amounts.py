from __future__ import annotations

from decimal import Decimal

import pytest

from services.amounts import parse_amount


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("$ 1.234,56", Decimal("1234.56")),
        ("$1.180,00", Decimal("1180.00")),
        ("$ 905,50", Decimal("905.50")),
        ("$0,00", Decimal("0")),
        ("1.234.567,89", Decimal("1234567.89")),
        ("$ 1234", Decimal("1234")),
        ("Venta $ 1.200,00 hoy", Decimal("1200.00")),
    ],
)
def test_parse_amount_handles_es_ar_format(text: str, expected: Decimal) -> None:
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["sin datos", "", "$ -", None])
def test_parse_amount_returns_none_without_digits(text: str | None) -> None:
    assert parse_amount(text) is None


def test_parse_amount_uses_first_amount() -> None:
    assert parse_amount("$ 10,50 / $ 20,75") == Decimal("10.50")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("$ 1234,5", Decimal("1234.5")),
        ("$ 1.234,5", Decimal("1234.5")),
        ("$9,9", Decimal("9.9")),
    ],
)
def test_parse_amount_keeps_single_digit_cents(text: str, expected: Decimal) -> None:
    assert parse_amount(text) == expected


def test_parse_amount_prefers_dollar_prefixed_amount() -> None:
    assert parse_amount("0,5% $ 1.234,56") == Decimal("1234.56")


def test_parse_amount_never_truncates_longer_fractions() -> None:
    assert parse_amount("$ 12,345") is None
