"""Date parsing and accounting period utilities."""

import re
from datetime import date, timedelta
from typing import Iterator

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = (
    "this-month",
    "last-month",
    "this-quarter",
    "last-quarter",
    "this-year",
    "last-year",
)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-12-20"
    - Romanian day-first dates: "20.12.2024", "20/12/2024"
    - Relative dates: "today", "yesterday", "start of month", "end of last month"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "start of month": today.replace(day=1),
        "end of month": month_end(today),
        "start of year": today.replace(month=1, day=1),
        "end of last month": today.replace(day=1) - timedelta(days=1),
        "end of last year": today.replace(month=1, day=1) - timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        if _ISO_DATE.match(date_str):
            return date.fromisoformat(date_str)
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def month_end(day: date) -> date:
    """Return the last day of the month containing ``day``."""
    return day.replace(day=1) + relativedelta(months=1) - timedelta(days=1)


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return (first day, last day) of a calendar month."""
    start = date(year, month, 1)
    return start, month_end(start)


def iter_month_ranges(start_date: date, end_date: date) -> Iterator[tuple[date, date]]:
    """Yield consecutive month windows covering ``start_date``..``end_date``.

    The first and last windows are clipped to the given bounds, so the
    windows partition the range exactly.
    """
    current = start_date
    while current <= end_date:
        window_end = min(month_end(current), end_date)
        yield current, window_end
        current = window_end + timedelta(days=1)


def get_period_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for an accounting period.

    Args:
        period: One of this-month, last-month, this-quarter, last-quarter,
            this-year, last-year
        today: Reference date (defaults to today)

    Returns:
        Tuple of (start_date, end_date). Closed periods end on their last
        calendar day; current periods end on the reference date.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return today.replace(day=1), today

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        return start_date, month_end(start_date)

    elif period == "this-quarter":
        first_month = 3 * ((today.month - 1) // 3) + 1
        return today.replace(month=first_month, day=1), today

    elif period == "last-quarter":
        first_month = 3 * ((today.month - 1) // 3) + 1
        this_quarter_start = today.replace(month=first_month, day=1)
        start_date = this_quarter_start - relativedelta(months=3)
        return start_date, this_quarter_start - timedelta(days=1)

    elif period == "this-year":
        return today.replace(month=1, day=1), today

    elif period == "last-year":
        start_date = date(today.year - 1, 1, 1)
        return start_date, date(today.year - 1, 12, 31)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )
