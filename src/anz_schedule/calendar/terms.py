"""School term records and term-window lookup.

A term window is the inclusive [start, end] range during which students
attend. Public holidays inside the window do not shrink it; they are only
excluded when school days are counted.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from anz_schedule.calendar.dates import days_between, format_date
from anz_schedule.exceptions import DatasetError
from anz_schedule.regions import Region

logger = logging.getLogger(__name__)

TERMS_PER_YEAR = 4


@dataclass(frozen=True)
class SchoolTerm:
    """One school term in one region."""
    region: Region
    term: int          # 1..4
    label: str         # e.g. "Term 1 2026"
    start: date        # first day students attend
    end: date          # last day students attend

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def week_number(self, d: date) -> int:
        """1-based week of the term containing d (week 1 starts on term start)."""
        return (d - self.start).days // 7 + 1

    def days_until_start(self, d: date) -> int:
        return days_between(d, self.start)

    def to_dict(self) -> dict[str, object]:
        return {
            "term": self.term,
            "label": self.label,
            "start": format_date(self.start),
            "end": format_date(self.end),
        }


class TermIndex:
    """Per-region term schedule with containment and next-term search.

    Construction checks the schedule: within a region, term numbers are
    unique and in 1..4, every term has start <= end, and terms ordered by
    start never overlap.

    Usage:
        index = TermIndex(terms)
        index.find_containing(date(2026, 2, 11), Region.VIC)   # Term 1
        index.find_next_upcoming(date(2026, 4, 1), Region.VIC) # Term 2
    """

    def __init__(self, terms: Iterable[SchoolTerm]) -> None:
        """Build and validate the per-region schedules.

        Raises:
            DatasetError: If any region's schedule breaks the rules above.
        """
        by_region: dict[Region, list[SchoolTerm]] = defaultdict(list)
        for term in terms:
            by_region[term.region].append(term)

        self._by_region: dict[Region, tuple[SchoolTerm, ...]] = {}
        for region, items in by_region.items():
            ordered = sorted(items, key=lambda t: t.start)
            self._validate_region(region, ordered)
            self._by_region[region] = tuple(ordered)

        logger.debug(
            "Term index built: %d regions, %d terms",
            len(self._by_region), sum(len(t) for t in self._by_region.values()),
        )

    @staticmethod
    def _validate_region(region: Region, ordered: list[SchoolTerm]) -> None:
        seen: set[int] = set()
        for term in ordered:
            if not 1 <= term.term <= TERMS_PER_YEAR:
                raise DatasetError(
                    f"{region.value} term number must be 1-{TERMS_PER_YEAR}; "
                    f"got {term.term}."
                )
            if term.term in seen:
                raise DatasetError(f"{region.value} Term {term.term} is listed twice.")
            seen.add(term.term)
            if term.start > term.end:
                raise DatasetError(
                    f"{region.value} {term.label} starts after it ends "
                    f"({format_date(term.start)} > {format_date(term.end)})."
                )
        for earlier, later in zip(ordered, ordered[1:]):
            if later.start <= earlier.end:
                raise DatasetError(
                    f"{region.value} {earlier.label} ({format_date(earlier.start)} to "
                    f"{format_date(earlier.end)}) overlaps {later.label} "
                    f"({format_date(later.start)} to {format_date(later.end)})."
                )

    def find_containing(self, d: date, region: Region) -> Optional[SchoolTerm]:
        """Return the term whose window contains d, or None."""
        for term in self._by_region.get(region, ()):
            if term.contains(d):
                return term
        return None

    def find_next_upcoming(self, d: date, region: Region) -> Optional[SchoolTerm]:
        """Return the earliest term starting strictly after d, or None."""
        upcoming = [t for t in self._by_region.get(region, ()) if t.start > d]
        if not upcoming:
            return None
        return min(upcoming, key=lambda t: t.start)

    def schedule_for_region(self, region: Region) -> list[SchoolTerm]:
        """Return region's terms ordered by start date."""
        return list(self._by_region.get(region, ()))

    @property
    def regions(self) -> set[Region]:
        return set(self._by_region)

    def __len__(self) -> int:
        return sum(len(t) for t in self._by_region.values())

    def __repr__(self) -> str:
        return f"TermIndex(terms={len(self)}, regions={len(self._by_region)})"
