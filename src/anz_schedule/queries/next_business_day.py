"""Next business day after one date in one region."""

from __future__ import annotations

import logging
from typing import Union

from anz_schedule.calendar.dates import day_of_week_name, format_date, parse_date
from anz_schedule.dataset import ScheduleDataset
from anz_schedule.queries import QueryResult, plural, query_block
from anz_schedule.regions import Region, parse_region

logger = logging.getLogger(__name__)


def find_next_business_day(
    dataset: ScheduleDataset,
    date_str: str,
    region: Union[str, Region],
) -> QueryResult:
    """Find the first business day strictly after date_str in region.

    The input date's own status (business day, weekend, holiday) is
    reported separately and does not affect the scan. Only weekday holidays
    appear in skipped_due_to; weekends are skipped silently.

    Raises:
        InvalidDateFormatError: If date_str is not a valid YYYY-MM-DD date.
        UnknownRegionError: If region is not a supported code.
        BusinessDayScanError: If the holiday data never yields a business day.
    """
    d = parse_date(date_str)
    r = parse_region(region)
    dow = day_of_week_name(d)
    cal = dataset.calendar
    logger.debug("Next business day: %s %s", format_date(d), r.value)

    input_holiday = cal.holiday_on(d, r)
    scan = cal.next_business_day(d, r)
    next_str = format_date(scan.result)
    next_dow = day_of_week_name(scan.result)
    days_ahead = scan.calendar_days_ahead

    skipped_note = ""
    if scan.skipped:
        names = ", ".join(s.name for s in scan.skipped)
        skipped_note = f" {plural(len(scan.skipped), 'holiday')} skipped ({names})."

    summary = (
        f"Next business day after {format_date(d)} ({dow}) in {r.value} is "
        f"{next_str} ({next_dow}), {plural(days_ahead, 'calendar day')} ahead.{skipped_note}"
    )

    data = {
        "query": query_block(d, r),
        "input_date_status": {
            "is_business_day": cal.is_business_day(d, r),
            "is_weekend": cal.is_weekend(d),
            "is_public_holiday": input_holiday is not None,
            "public_holiday_name": input_holiday.name if input_holiday is not None else None,
        },
        "next_business_day": {
            "date": next_str,
            "day_of_week": next_dow,
            "calendar_days_ahead": days_ahead,
        },
        "skipped_due_to": [s.to_dict() for s in scan.skipped],
    }
    return QueryResult(summary=summary, data=data)
