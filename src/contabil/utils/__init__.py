"""Utility functions for contabil."""

from contabil.utils.date_parser import parse_date
from contabil.utils.amount_parser import parse_amount
from contabil.utils.money import to_minor_units, from_minor_units

__all__ = ["parse_date", "parse_amount", "to_minor_units", "from_minor_units"]
