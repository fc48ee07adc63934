"""Public holiday records and the exact-match holiday index."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from anz_schedule.calendar.dates import format_date
from anz_schedule.exceptions import DuplicateHolidayError
from anz_schedule.regions import Region

logger = logging.getLogger(__name__)


class HolidayType(str, Enum):
    """National holidays are shared across jurisdictions; regional ones are local."""
    NATIONAL = "national"
    REGIONAL = "regional"


@dataclass(frozen=True)
class PublicHoliday:
    """One observed public holiday in one region."""
    date: date
    name: str
    region: Region
    type: HolidayType

    def to_dict(self) -> dict[str, str]:
        return {
            "date": format_date(self.date),
            "name": self.name,
            "type": self.type.value,
            "region": self.region.value,
        }


class HolidayIndex:
    """Immutable (date, region) -> PublicHoliday index.

    Dual observance (e.g. NSW keeps both Saturday 25 April and the Monday
    substitute) is two records under two different dates, so every key is
    unique. A genuine duplicate key is a data error and is rejected at
    construction instead of letting one record shadow the other.

    Usage:
        index = HolidayIndex(holidays)
        index.lookup(date(2026, 4, 25), Region.NSW)   # PublicHoliday(...)
        index.list_for_region(Region.VIC)             # sorted by date
    """

    def __init__(self, holidays: Iterable[PublicHoliday]) -> None:
        """Build the index.

        Raises:
            DuplicateHolidayError: If two records share (date, region).
        """
        self._by_key: dict[tuple[date, Region], PublicHoliday] = {}
        by_region: dict[Region, list[PublicHoliday]] = defaultdict(list)

        for holiday in holidays:
            key = (holiday.date, holiday.region)
            existing = self._by_key.get(key)
            if existing is not None:
                raise DuplicateHolidayError(
                    f"Duplicate holiday for {format_date(holiday.date)} in "
                    f"{holiday.region.value}: {existing.name!r} and {holiday.name!r}."
                )
            self._by_key[key] = holiday
            by_region[holiday.region].append(holiday)

        # ISO dates sort chronologically; date objects do the same directly
        self._by_region: dict[Region, tuple[PublicHoliday, ...]] = {
            region: tuple(sorted(items, key=lambda h: h.date))
            for region, items in by_region.items()
        }
        logger.debug(
            "Holiday index built: %d records across %d regions",
            len(self._by_key), len(self._by_region),
        )

    def lookup(self, d: date, region: Region) -> Optional[PublicHoliday]:
        """Return the holiday observed on d in region, or None."""
        return self._by_key.get((d, region))

    def list_for_region(self, region: Region) -> list[PublicHoliday]:
        """Return every holiday for region, ascending by date."""
        return list(self._by_region.get(region, ()))

    def holidays_in_range(
        self, region: Region, start: date, end: date
    ) -> list[PublicHoliday]:
        """Return holidays for region in [start, end] inclusive, sorted."""
        return [
            h for h in self._by_region.get(region, ())
            if start <= h.date <= end
        ]

    @property
    def regions(self) -> set[Region]:
        """Regions with at least one holiday record."""
        return set(self._by_region)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._by_key)

    def __repr__(self) -> str:
        return f"HolidayIndex(records={len(self)}, regions={len(self._by_region)})"
