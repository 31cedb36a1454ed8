"""Date parsing utilities for journal dates and report periods."""

from datetime import date, timedelta
from typing import Optional

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


def _quarter_start(day: date) -> date:
    return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "15 Jan 2024", "January 15, 2024"
    - Relative days: "today", "yesterday", "tomorrow"
    - Period starts: "this month", "last month", "this year", "last year",
      "this quarter", "last quarter" (first day of the period)
    - Period ends: "end of month", "end of last month", "end of year"

    Args:
        date_str: Date string
        today: Reference date for relative expressions (default: today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this quarter": _quarter_start(today),
        "last quarter": _quarter_start(today) - relativedelta(months=3),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
        "end of month": today.replace(day=1) + relativedelta(months=1, days=-1),
        "end of last month": today.replace(day=1) - timedelta(days=1),
        "end of year": today.replace(month=12, day=31),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a reporting period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    month, quarter or year.

    Args:
        period: One of ``PERIODS``
        today: Reference date (default: today)

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "last-month":
        end_date = today.replace(day=1) - timedelta(days=1)
        return end_date.replace(day=1), end_date
    if period == "this-quarter":
        return _quarter_start(today), today
    if period == "last-quarter":
        end_date = _quarter_start(today) - timedelta(days=1)
        return _quarter_start(end_date), end_date
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
