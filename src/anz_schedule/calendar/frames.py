"""
Per-day region calendar frames.

One row per calendar day for a region, combining the holiday index, the
business calendar and the term schedule:

    date                 datetime.date
    day_of_week          full weekday name
    is_weekend           bool
    is_public_holiday    bool (holidays on weekends included)
    holiday_name         str or None
    is_business_day      bool
    non_business_reason  "weekend" / "public holiday" / None
    in_school_term       bool
    term_number          Int64 (nullable)
    week_number_in_term  Int64 (nullable)
    is_school_day        bool (business day inside a term window)

Used for exports and for checking data by eye; the query handlers do not
depend on it.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import pandas as pd

from anz_schedule.calendar.dates import day_of_week_name, iter_days
from anz_schedule.dataset import ScheduleDataset
from anz_schedule.regions import Region

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "date", "day_of_week", "is_weekend", "is_public_holiday", "holiday_name",
    "is_business_day", "non_business_reason", "in_school_term", "term_number",
    "week_number_in_term", "is_school_day",
]


def build_region_calendar(
    dataset: ScheduleDataset,
    region: Region,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> pd.DataFrame:
    """Build the per-day calendar frame for one region.

    Args:
        dataset: Loaded schedule dataset.
        region: Region to describe.
        start: First day (inclusive). Defaults to 1 January of the dataset year.
        end: Last day (inclusive). Defaults to 31 December of the dataset year.

    Returns:
        DataFrame with FRAME_COLUMNS, one row per day, ascending.
    """
    if start is None:
        start = date(dataset.year, 1, 1)
    if end is None:
        end = date(dataset.year, 12, 31)
    if end < start:
        raise ValueError(f"end ({end}) is before start ({start})")

    cal = dataset.calendar
    logger.info("Building %s calendar frame: %s to %s", region.value, start, end)

    rows = []
    for d in iter_days(start, end):
        holiday = cal.holiday_on(d, region)
        term = dataset.terms.find_containing(d, region)
        business = cal.is_business_day(d, region)
        rows.append({
            "date": d,
            "day_of_week": day_of_week_name(d),
            "is_weekend": cal.is_weekend(d),
            "is_public_holiday": holiday is not None,
            "holiday_name": holiday.name if holiday is not None else None,
            "is_business_day": business,
            "non_business_reason": cal.non_business_reason(d, region),
            "in_school_term": term is not None,
            "term_number": term.term if term is not None else None,
            "week_number_in_term": term.week_number(d) if term is not None else None,
            "is_school_day": business and term is not None,
        })

    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)

    # ── Enforce types ──
    for col in ["term_number", "week_number_in_term"]:
        df[col] = df[col].astype("Int64")
    for col in ["is_weekend", "is_public_holiday", "is_business_day",
                "in_school_term", "is_school_day"]:
        df[col] = df[col].astype(bool)

    # ── Validation assertions ──
    assert not (df["is_business_day"] & df["is_weekend"]).any(), \
        "weekend classified as business day"
    assert not (df["is_business_day"] & df["is_public_holiday"]).any(), \
        "public holiday classified as business day"
    assert (df["in_school_term"] == df["term_number"].notna()).all(), \
        "term_number must be set exactly on in-term days"
    assert df["non_business_reason"].isna().eq(df["is_business_day"]).all(), \
        "non_business_reason must be set exactly on non-business days"

    # ── Log summary stats ──
    logger.info(
        "  %s: %d days, %d business days, %d weekday holidays, %d school days",
        region.value, len(df), int(df["is_business_day"].sum()),
        int((df["is_public_holiday"] & ~df["is_weekend"]).sum()),
        int(df["is_school_day"].sum()),
    )
    return df


def summarise_region_calendar(df: pd.DataFrame) -> dict[str, object]:
    """Headline counts for a frame from build_region_calendar()."""
    per_term = (
        df[df["is_school_day"]]
        .groupby("term_number")
        .size()
        .to_dict()
    )
    return {
        "n_days": int(len(df)),
        "first_date": df["date"].iloc[0].isoformat() if len(df) else None,
        "last_date": df["date"].iloc[-1].isoformat() if len(df) else None,
        "business_days": int(df["is_business_day"].sum()),
        "public_holidays": int(df["is_public_holiday"].sum()),
        "weekday_public_holidays": int((df["is_public_holiday"] & ~df["is_weekend"]).sum()),
        "school_days": int(df["is_school_day"].sum()),
        "school_days_per_term": {int(k): int(v) for k, v in per_term.items()},
    }
