"""Local calendar-date helpers.

All dates are Python date objects (not datetime), so there is no time zone
to drift across: "2026-04-25" is always the calendar day 25 April.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterator

from anz_schedule.exceptions import InvalidDateFormatError

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

# Sunday=0 ... Saturday=6
DAY_NAMES: tuple[str, ...] = (
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
)


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string into a calendar date.

    Month and day must form a real date: "2026-02-30" is rejected rather
    than rolled over into March.

    Raises:
        InvalidDateFormatError: If the string does not match the pattern
            or names a date that does not exist.
    """
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise InvalidDateFormatError(
            f"Date must be in YYYY-MM-DD format; got {value!r}."
        )
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateFormatError(
            f"Date {value!r} is not a valid calendar date: {exc}."
        ) from exc


def format_date(d: date) -> str:
    """Format a date as zero-padded YYYY-MM-DD."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def day_of_week_index(d: date) -> int:
    """Weekday index with Sunday=0 (date.weekday() uses Monday=0)."""
    return (d.weekday() + 1) % 7


def day_of_week_name(d: date) -> str:
    return DAY_NAMES[day_of_week_index(d)]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive.

    Nothing is yielded if end is before start. Safe up to date.max.
    """
    for offset in range(days_between(start, end) + 1):
        yield start + timedelta(days=offset)


def days_between(a: date, b: date) -> int:
    """Whole calendar days from a to b (negative if b is before a)."""
    return (b - a).days
