"""Tests for amount parsing and money helpers."""

import pytest
from decimal import Decimal

from contabil.domain.errors import ValidationError
from contabil.utils.amount_parser import parse_amount
from contabil.utils.money import format_amount, from_minor_units, to_decimal, to_minor_units


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("3332", Decimal("3332.00")),
        ("1,234.56", Decimal("1234.56")),
        ("1.234,56", Decimal("1234.56")),
        ("1234,56", Decimal("1234.56")),
        ("1,234", Decimal("1234.00")),
        ("123.45 lei", Decimal("123.45")),
        ("RON 1 234,50", Decimal("1234.50")),
    ],
)
def test_parse_amount(text, expected):
    """Test supported amount formats."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "-10", "(10.00)", "1.234"])
def test_parse_amount_invalid(text):
    """Test malformed, negative or sub-cent amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(text)


def test_to_decimal_rejects_float():
    """Test floats never cross into the ledger."""
    with pytest.raises(ValidationError, match="float"):
        to_decimal(0.1)


def test_to_decimal_rejects_non_finite():
    """Test NaN and infinity are rejected."""
    with pytest.raises(ValidationError):
        to_decimal("NaN")
    with pytest.raises(ValidationError):
        to_decimal("Infinity")


def test_to_decimal_normalizes_places():
    """Test integers and short decimals get two places."""
    assert str(to_decimal(5)) == "5.00"
    assert str(to_decimal("0.1")) == "0.10"


def test_minor_units():
    """Test conversion to and from integer minor units."""
    assert to_minor_units("3332.00") == 333200
    assert to_minor_units(Decimal("0.01")) == 1
    assert from_minor_units(333200) == Decimal("3332.00")
    assert from_minor_units(None) == Decimal("0.00")


def test_format_amount():
    """Test display formatting with thousands separators."""
    assert format_amount(Decimal("1234567.5")) == "1,234,567.50"
