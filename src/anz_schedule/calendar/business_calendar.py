"""ANZ business calendar — region-aware business day determination and navigation.

Design Principles:
    - A business day is a weekday (Mon-Fri) that is NOT a public holiday
      in the requested region.
    - Holiday data comes from a HolidayIndex built once at load time; this
      class holds no other state and every method is a pure function of
      its arguments.
    - All dates are Python date objects (not datetime).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from anz_schedule.calendar.dates import days_between, format_date, iter_days
from anz_schedule.calendar.holidays import HolidayIndex, PublicHoliday
from anz_schedule.exceptions import BusinessDayScanError
from anz_schedule.regions import Region

logger = logging.getLogger(__name__)

# --- Constants ---
# Weekday constants (Monday=0 ... Sunday=6)
_SATURDAY = 5

# Calendar days the forward scan walks before giving up.
MAX_SCAN_DAYS = 31

REASON_WEEKEND = "weekend"
REASON_PUBLIC_HOLIDAY = "public holiday"


@dataclass(frozen=True)
class SkippedDay:
    """A non-business weekday passed over by the forward scan."""
    date: date
    name: str
    reason: str = REASON_PUBLIC_HOLIDAY

    def to_dict(self) -> dict[str, str]:
        return {"date": format_date(self.date), "name": self.name, "reason": self.reason}


@dataclass(frozen=True)
class BusinessDayScan:
    """Result of scanning forward from a start date to the next business day."""
    start: date
    result: date
    skipped: tuple[SkippedDay, ...] = field(default_factory=tuple)

    @property
    def calendar_days_ahead(self) -> int:
        return days_between(self.start, self.result)


class ANZBusinessCalendar:
    """Business calendar for NZ and the Australian states and territories.

    This class answers:
        - Whether a given date is a weekend or a business day in a region
        - How many business days fall in an inclusive date range
        - The next business day after a date, with the holidays skipped

    Usage:
        cal = ANZBusinessCalendar(holiday_index, year=2026)
        cal.is_business_day(date(2026, 4, 27), Region.NSW)   # False (substitute)
        cal.next_business_day(date(2026, 4, 24), Region.VIC).result  # 2026-04-27
    """

    def __init__(
        self,
        holidays: HolidayIndex,
        year: Optional[int] = None,
        max_scan_days: int = MAX_SCAN_DAYS,
    ) -> None:
        """Initialise the calendar.

        Args:
            holidays: Exact-match holiday index.
            year: Year the holiday data covers. Used only to warn when a
                scan result lands outside it; None disables the warning.
            max_scan_days: Upper bound on calendar days walked by
                next_business_day().
        """
        self._holidays = holidays
        self._year = year
        self._max_scan_days = max_scan_days

    # --- Core Business Day Functions ---

    @staticmethod
    def is_weekend(d: date) -> bool:
        """True for Saturday and Sunday."""
        return d.weekday() >= _SATURDAY

    def holiday_on(self, d: date, region: Region) -> Optional[PublicHoliday]:
        """Return the public holiday observed on d in region, or None."""
        return self._holidays.lookup(d, region)

    def is_business_day(self, d: date, region: Region) -> bool:
        """Check if a date is a business day in region.

        Args:
            d: The date to check.
            region: Jurisdiction whose holidays apply.

        Returns:
            True if d is a weekday and not a public holiday in region.
        """
        if self.is_weekend(d):
            return False
        return self._holidays.lookup(d, region) is None

    def non_business_reason(self, d: date, region: Region) -> Optional[str]:
        """Return why d is not a business day, or None if it is one.

        Weekend takes precedence over a holiday falling on a weekend.
        """
        if self.is_weekend(d):
            return REASON_WEEKEND
        if self._holidays.lookup(d, region) is not None:
            return REASON_PUBLIC_HOLIDAY
        return None

    def business_days_in_range(self, start: date, end: date, region: Region) -> int:
        """Count business days in [start, end], both endpoints inclusive.

        Returns 0 if end is before start.
        """
        if end < start:
            return 0
        weekdays = sum(1 for d in iter_days(start, end) if not self.is_weekend(d))
        weekday_holidays = sum(
            1 for h in self._holidays.holidays_in_range(region, start, end)
            if not self.is_weekend(h.date)
        )
        return weekdays - weekday_holidays

    def next_business_day(self, d: date, region: Region) -> BusinessDayScan:
        """Find the first business day strictly after d.

        Weekends are passed over silently. Weekdays that are public holidays
        are recorded, in order, as SkippedDay entries. A holiday that falls
        on a weekend is treated as a weekend and not recorded.

        Args:
            d: Reference date (its own status does not matter).
            region: Jurisdiction whose holidays apply.

        Returns:
            BusinessDayScan with the result date and skipped holidays.

        Raises:
            BusinessDayScanError: If no business day is found within
                max_scan_days calendar days of d, or before date.max.
        """
        skipped: list[SkippedDay] = []
        # Never step past date.max
        span = min(self._max_scan_days, days_between(d, date.max))

        for offset in range(1, span + 1):
            candidate = d + timedelta(days=offset)
            if self.is_weekend(candidate):
                continue
            holiday = self._holidays.lookup(candidate, region)
            if holiday is None:
                self._warn_if_uncovered(candidate, region)
                return BusinessDayScan(start=d, result=candidate, skipped=tuple(skipped))
            skipped.append(SkippedDay(date=candidate, name=holiday.name))

        if span < self._max_scan_days:
            raise BusinessDayScanError(
                f"No business day in {region.value} between {format_date(d)} and "
                f"{format_date(date.max)}, the last representable date."
            )
        raise BusinessDayScanError(
            f"No business day in {region.value} within {self._max_scan_days} days "
            f"after {format_date(d)}; {len(skipped)} consecutive weekday holidays "
            "were skipped. Check the holiday data for this region."
        )

    # --- Internal Helpers ---

    def _warn_if_uncovered(self, d: date, region: Region) -> None:
        if self._year is not None and d.year != self._year:
            logger.warning(
                "Business day %s in %s is outside the %d holiday data; "
                "holidays in %d are not known and were not checked.",
                format_date(d), region.value, self._year, d.year,
            )

    @property
    def year(self) -> Optional[int]:
        return self._year

    @property
    def max_scan_days(self) -> int:
        return self._max_scan_days

    def __repr__(self) -> str:
        return (
            f"ANZBusinessCalendar(holidays={len(self._holidays)}, "
            f"year={self._year}, max_scan_days={self._max_scan_days})"
        )
