"""
Holiday and school-term dataset loading.

Module: src/anz_schedule/dataset.py

The dataset is read once, validated, and frozen into a ScheduleDataset.
Query handlers receive that value explicitly; nothing here is cached at
module level.

Files (package data, src/anz_schedule/data/):
    public_holidays_2026.json  {"holidays": {"<year>": [{date, name, region, type}, ...]}}
    school_terms_2026.csv      region,term,label,start,end ('#' comment lines allowed)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from anz_schedule.calendar.business_calendar import MAX_SCAN_DAYS, ANZBusinessCalendar
from anz_schedule.calendar.dates import parse_date
from anz_schedule.calendar.holidays import HolidayIndex, HolidayType, PublicHoliday
from anz_schedule.calendar.terms import SchoolTerm, TermIndex
from anz_schedule.exceptions import DatasetError, ScheduleError
from anz_schedule.regions import VALID_REGIONS, Region, parse_region

logger = logging.getLogger(__name__)

DATASET_YEAR = 2026

_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
DEFAULT_HOLIDAYS_PATH = os.path.join(_DATA_DIR, f"public_holidays_{DATASET_YEAR}.json")
DEFAULT_TERMS_PATH = os.path.join(_DATA_DIR, f"school_terms_{DATASET_YEAR}.csv")

_HOLIDAY_FIELDS = ("date", "name", "region", "type")
_TERM_COLUMNS = ["region", "term", "label", "start", "end"]


@dataclass(frozen=True)
class ScheduleDataset:
    """Read-only holiday and term data for one calendar year.

    Built by load_dataset() (or directly from records in tests) and passed
    into every query handler.
    """
    year: int
    holidays: HolidayIndex
    terms: TermIndex
    calendar: ANZBusinessCalendar

    @classmethod
    def from_records(
        cls,
        year: int,
        holidays: list[PublicHoliday],
        terms: list[SchoolTerm],
        max_scan_days: int = MAX_SCAN_DAYS,
    ) -> "ScheduleDataset":
        """Build indexes from already-parsed records.

        Raises:
            DatasetError: If any record falls outside year, or if the
                indexes reject the records.
        """
        for h in holidays:
            if h.date.year != year:
                raise DatasetError(
                    f"Holiday {h.name!r} ({h.region.value}) on {h.date.isoformat()} "
                    f"is outside dataset year {year}."
                )
        for t in terms:
            if t.start.year != year or t.end.year != year:
                raise DatasetError(
                    f"{t.region.value} {t.label} ({t.start.isoformat()} to "
                    f"{t.end.isoformat()}) is outside dataset year {year}."
                )
        index = HolidayIndex(holidays)
        return cls(
            year=year,
            holidays=index,
            terms=TermIndex(terms),
            calendar=ANZBusinessCalendar(index, year=year, max_scan_days=max_scan_days),
        )

    @property
    def regions(self) -> tuple[Region, ...]:
        return VALID_REGIONS

    def covers(self, d: date) -> bool:
        """True if d is inside the year the data describes."""
        return d.year == self.year


def load_public_holidays(json_path: Optional[str] = None) -> tuple[int, list[PublicHoliday]]:
    """Load and parse the curated holiday JSON.

    Returns:
        (year, holidays). The file must hold exactly one year.

    Raises:
        FileNotFoundError: If the file does not exist.
        DatasetError: If the file is malformed.
    """
    if json_path is None:
        json_path = os.path.normpath(DEFAULT_HOLIDAYS_PATH)
    if not os.path.exists(json_path):
        raise FileNotFoundError(f"Holiday calendar not found: {json_path}")

    with open(json_path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise DatasetError(f"Holiday file is not valid JSON: {json_path}: {exc}") from exc

    if not isinstance(raw, dict) or "holidays" not in raw:
        raise DatasetError(f"Holiday file missing 'holidays' key: {json_path}")
    by_year = raw["holidays"]
    if not isinstance(by_year, dict) or len(by_year) != 1:
        raise DatasetError(
            f"Holiday file must hold exactly one year under 'holidays'; "
            f"got {sorted(by_year) if isinstance(by_year, dict) else type(by_year).__name__}: "
            f"{json_path}"
        )

    year_str, entries = next(iter(by_year.items()))
    try:
        year = int(year_str)
    except ValueError:
        raise DatasetError(f"Holiday year key {year_str!r} is not a year: {json_path}") from None
    if not isinstance(entries, list):
        raise DatasetError(f"Holidays for {year} must be a list: {json_path}")

    holidays: list[PublicHoliday] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise DatasetError(f"Holiday entry {i} is not an object: {json_path}")
        missing = [k for k in _HOLIDAY_FIELDS if k not in entry]
        if missing:
            raise DatasetError(
                f"Holiday entry {i} missing {', '.join(missing)}: {json_path}"
            )
        if not isinstance(entry["name"], str) or not entry["name"].strip():
            raise DatasetError(
                f"Holiday entry {i} name must be a non-empty string; "
                f"got {entry['name']!r}: {json_path}"
            )
        try:
            holidays.append(PublicHoliday(
                date=parse_date(entry["date"]),
                name=entry["name"],
                region=parse_region(entry["region"]),
                type=HolidayType(entry["type"]),
            ))
        except (ScheduleError, ValueError) as exc:
            raise DatasetError(f"Holiday entry {i} is invalid ({exc}): {json_path}") from exc

    return year, holidays


def load_school_terms(csv_path: Optional[str] = None) -> list[SchoolTerm]:
    """Load and parse the school term CSV.

    Raises:
        FileNotFoundError: If the file does not exist.
        DatasetError: If columns are missing or a row cannot be parsed.
    """
    if csv_path is None:
        csv_path = os.path.normpath(DEFAULT_TERMS_PATH)
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"School term CSV not found: {csv_path}")

    df = pd.read_csv(csv_path, comment="#", dtype=str, skipinitialspace=True)
    missing = [c for c in _TERM_COLUMNS if c not in df.columns]
    if missing:
        raise DatasetError(f"{csv_path} must contain columns: {', '.join(missing)}")
    if len(df) == 0:
        raise DatasetError(f"{csv_path} is empty")
    if df[_TERM_COLUMNS].isna().any().any():
        bad = df[df[_TERM_COLUMNS].isna().any(axis=1)].index.tolist()
        raise DatasetError(f"{csv_path} has blank values in rows {bad}")

    terms: list[SchoolTerm] = []
    for row in df[_TERM_COLUMNS].itertuples(index=False):
        try:
            terms.append(SchoolTerm(
                region=parse_region(row.region.strip()),
                term=int(row.term),
                label=row.label.strip(),
                start=parse_date(row.start.strip()),
                end=parse_date(row.end.strip()),
            ))
        except (ScheduleError, ValueError) as exc:
            raise DatasetError(f"Invalid term row {tuple(row)} ({exc}): {csv_path}") from exc
    return terms


def load_dataset(
    holidays_path: Optional[str] = None,
    terms_path: Optional[str] = None,
    max_scan_days: int = MAX_SCAN_DAYS,
) -> ScheduleDataset:
    """Load both files and build the immutable dataset.

    Args:
        holidays_path: Holiday JSON. Defaults to the packaged 2026 file.
        terms_path: School term CSV. Defaults to the packaged 2026 file.
        max_scan_days: Forward-scan bound for next-business-day search.

    Raises:
        FileNotFoundError: If either file does not exist.
        DatasetError: If either file is malformed or breaks an invariant.
    """
    year, holidays = load_public_holidays(holidays_path)
    terms = load_school_terms(terms_path)
    dataset = ScheduleDataset.from_records(year, holidays, terms, max_scan_days=max_scan_days)

    missing_holidays = [r.value for r in VALID_REGIONS if r not in dataset.holidays.regions]
    missing_terms = [r.value for r in VALID_REGIONS if r not in dataset.terms.regions]
    if missing_holidays or missing_terms:
        logger.warning(
            "Dataset %d has no holidays for [%s] and no terms for [%s]",
            year, ", ".join(missing_holidays), ", ".join(missing_terms),
        )
    logger.info(
        "Loaded %d dataset: %d holidays, %d school terms across %d regions",
        year, len(dataset.holidays), len(dataset.terms), len(VALID_REGIONS),
    )
    return dataset
