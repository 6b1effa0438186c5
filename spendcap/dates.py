"""Date utilities for spendcap.

Pure functions for calendar month ranges and year arithmetic.
"""

import calendar
from datetime import date


def month_range(year: int, month: int) -> tuple[date, date, str]:
    """Calculate the inclusive date range and label for a month.

    Args:
        year: Four digit year.
        month: Month number (1-12).

    Returns:
        Tuple of (first_day, last_day, label) where:
        - first_day: First day of the month
        - last_day: Last day of the month (inclusive)
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValueError: If month is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    return first, last, first.strftime("%B %Y")


def month_of(day: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``day``."""
    first, last, _ = month_range(day.year, day.month)
    return first, last


def shift_years(day: date, years: int) -> date:
    """Move a date by whole calendar years.

    February 29th lands on February 28th when the target year is not a leap year.
    """
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)
