"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ledgerkit.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("100", Decimal("100.00")),
        ("123.45", Decimal("123.45")),
        ("1,234.50", Decimal("1234.50")),
        ("$99.9", Decimal("99.90")),
        (" 0.01 ", Decimal("0.01")),
    ],
)
def test_parse_amount(text, expected):
    amount = parse_amount(text)
    assert amount == expected
    assert amount.as_tuple().exponent == -2


@pytest.mark.parametrize(
    "text,message",
    [
        ("", "Empty amount"),
        ("abc", "Could not parse amount"),
        ("-5.00", "cannot be negative"),
        ("1.005", "more than two decimal places"),
        ("NaN", "Could not parse amount"),
    ],
)
def test_invalid_amount(text, message):
    with pytest.raises(ValueError, match=message):
        parse_amount(text)
