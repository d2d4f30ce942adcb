"""
Calendar helpers for day-granular projections.

This module provides the date arithmetic used by the runway engine, most
importantly resolving a nominal day-of-month against the real length of a
month so that an obligation due on the 31st still lands in February.
"""

import calendar
from datetime import date, timedelta
from typing import Iterator

MIN_DUE_DAY = 1
MAX_DUE_DAY = 31


def days_in_month(year: int, month: int) -> int:
    """Get the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def effective_due_day(due_day: int, year: int, month: int) -> int:
    """
    Resolve a nominal due day against the last valid day of a month.

    Args:
        due_day: Nominal day of month (1-31)
        year: Calendar year
        month: Calendar month (1-12)

    Returns:
        The day of month the obligation is actually charged on

    Raises:
        ValueError: If due_day is outside 1-31
    """
    if not MIN_DUE_DAY <= due_day <= MAX_DUE_DAY:
        raise ValueError(
            f"Due day must be between {MIN_DUE_DAY} and {MAX_DUE_DAY}, got {due_day}"
        )
    return min(due_day, days_in_month(year, month))


def is_due_on(due_day: int, day: date) -> bool:
    """Check whether an obligation with the given due day is charged on `day`."""
    return effective_due_day(due_day, day.year, day.month) == day.day


def add_days(day: date, days: int) -> date:
    """Shift a date by a number of calendar days."""
    return day + timedelta(days=days)


def iter_days(start: date, count: int) -> Iterator[date]:
    """Yield `count` consecutive calendar days beginning at `start`."""
    for offset in range(count):
        yield start + timedelta(days=offset)


def is_within(day: date, start: date, end: date) -> bool:
    """Check whether `day` falls in the inclusive range [start, end]."""
    return start <= day <= end
