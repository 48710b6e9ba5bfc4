"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from contabil.utils.money import to_decimal


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a two-place Decimal.

    Handles various formats:
    - "123.45"
    - "3332"
    - "1,234.56"
    - "1.234,56" (Romanian thousands/decimal separators)
    - "1234,56"
    - "123.45 lei", "RON 123.45"

    Negative amounts are rejected: journal lines carry the side, not the sign.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with two places

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Remove currency markers
    amount_str = re.sub(r"(?i)\b(ron|lei|leu)\b", "", amount_str)
    amount_str = re.sub(r"\s+", "", amount_str)

    if amount_str.startswith("-") or (amount_str.startswith("(") and amount_str.endswith(")")):
        raise ValueError(f"Amount '{amount_str}' must not be negative")

    # Work out which separator is the decimal point
    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif "," in amount_str:
        head, _, tail = amount_str.rpartition(",")
        if len(tail) == 3:
            # "1,234" reads as thousands
            amount_str = amount_str.replace(",", "")
        else:
            amount_str = f"{head.replace(',', '')}.{tail}"

    try:
        Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    return to_decimal(amount_str)
