"""Public holiday check for one date in one region."""

from __future__ import annotations

import logging
from typing import Union

from anz_schedule.calendar.dates import day_of_week_name, format_date, parse_date
from anz_schedule.dataset import ScheduleDataset
from anz_schedule.queries import QueryResult, query_block
from anz_schedule.regions import Region, parse_region

logger = logging.getLogger(__name__)


def check_public_holiday(
    dataset: ScheduleDataset,
    date_str: str,
    region: Union[str, Region],
) -> QueryResult:
    """Report whether date_str is a public holiday in region.

    The payload also lists every holiday for the region in date order, so a
    negative answer still gives the caller the nearest real holidays.

    Raises:
        InvalidDateFormatError: If date_str is not a valid YYYY-MM-DD date.
        UnknownRegionError: If region is not a supported code.
    """
    d = parse_date(date_str)
    r = parse_region(region)
    dow = day_of_week_name(d)
    logger.debug("Holiday check: %s %s", format_date(d), r.value)
    if not dataset.covers(d):
        logger.warning(
            "Holiday check for %s is outside the %d dataset; no holidays are known",
            format_date(d), dataset.year,
        )

    holiday = dataset.holidays.lookup(d, r)

    if holiday is not None:
        summary = (
            f"{format_date(d)} ({dow}) IS a public holiday in {r.value}: "
            f"\"{holiday.name}\" [{holiday.type.value}]."
        )
    else:
        summary = f"{format_date(d)} ({dow}) is NOT a public holiday in {r.value}."

    data = {
        "query": query_block(d, r),
        "result": {
            "is_public_holiday": holiday is not None,
            "holiday": holiday.to_dict() if holiday is not None else None,
        },
        "all_holidays_for_region": [
            {"date": format_date(h.date), "name": h.name, "type": h.type.value}
            for h in dataset.holidays.list_for_region(r)
        ],
    }
    return QueryResult(summary=summary, data=data)
