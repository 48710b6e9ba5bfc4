"""Fixed-point money helpers.

Amounts cross the library boundary as ``Decimal`` with two places and are
stored as integer minor units (bani), so sums are exact.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from contabil.domain.errors import ValidationError

MINOR_UNITS = 100
CENT = Decimal("0.01")
# Largest single amount or entry total; leaves room for SUM() over many
# entries within a signed 64-bit column.
MAX_AMOUNT = Decimal("999999999999999.99")

AmountLike = Union[Decimal, int, str]


def to_decimal(value: AmountLike) -> Decimal:
    """Coerce an amount to a two-place Decimal without rounding.

    Raises:
        ValidationError: If the value is a float, is not a number, exceeds
            MAX_AMOUNT in magnitude, or has more than two decimal places
    """
    if isinstance(value, float):
        raise ValidationError(
            f"Amount {value!r} is a float; pass a Decimal, int or string instead"
        )
    if isinstance(value, bool):
        raise ValidationError(f"Amount {value!r} is not a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Amount '{value}' is not a number")
    if not amount.is_finite():
        raise ValidationError(f"Amount '{value}' is not a finite number")
    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"Amount {value} exceeds the maximum of {MAX_AMOUNT}")
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise ValidationError(f"Amount '{value}' is out of range")
    if quantized != amount:
        raise ValidationError(
            f"Amount {amount} has more than two decimal places"
        )
    return quantized


def to_minor_units(value: AmountLike) -> int:
    """Convert an amount to integer minor units (e.g. 12.34 -> 1234)."""
    return int(to_decimal(value) * MINOR_UNITS)


def from_minor_units(units: int | None) -> Decimal:
    """Convert integer minor units back to a two-place Decimal."""
    if units is None:
        return Decimal("0.00")
    return (Decimal(int(units)) / MINOR_UNITS).quantize(CENT)


def format_amount(amount: Decimal) -> str:
    """Format an amount for display, e.g. ``3,332.00``."""
    return f"{amount:,.2f}"
