"""School term check for one date in one region.

In term:
    week_number_in_term    (date - term.start).days // 7 + 1
    school_days_elapsed    business days in [term.start, date]
    school_days_remaining  business days in (date, term.end]

Public holidays stay inside the term window and are only excluded from the
two school-day counts. Both counts scan the term day by day; terms are at
most a few months long.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Optional, Union

from anz_schedule.calendar.dates import day_of_week_name, format_date, parse_date
from anz_schedule.dataset import ScheduleDataset
from anz_schedule.queries import QueryResult, plural, query_block
from anz_schedule.regions import Region, parse_region

logger = logging.getLogger(__name__)


def check_school_term(
    dataset: ScheduleDataset,
    date_str: str,
    region: Union[str, Region],
) -> QueryResult:
    """Report the school term containing date_str in region, if any.

    When the date is outside every term, the next upcoming term (if one
    remains this year) and the days until it starts are reported instead.
    The full term schedule for the region is always included.

    Raises:
        InvalidDateFormatError: If date_str is not a valid YYYY-MM-DD date.
        UnknownRegionError: If region is not a supported code.
    """
    d = parse_date(date_str)
    r = parse_region(region)
    dow = day_of_week_name(d)
    cal = dataset.calendar
    logger.debug("Term check: %s %s", format_date(d), r.value)

    term = dataset.terms.find_containing(d, r)
    schedule = dataset.terms.schedule_for_region(r)

    current: Optional[dict[str, Any]] = None
    upcoming: Optional[dict[str, Any]] = None

    if term is not None:
        week_number = term.week_number(d)
        elapsed = cal.business_days_in_range(term.start, d, r)
        remaining = cal.business_days_in_range(d + timedelta(days=1), term.end, r)
        current = {
            "label": term.label,
            "term_number": term.term,
            "start": format_date(term.start),
            "end": format_date(term.end),
            "week_number_in_term": week_number,
            "school_days_elapsed": elapsed,
            "school_days_remaining": remaining,
        }
        summary = (
            f"{format_date(d)} ({dow}) is in {r.value} {term.label} "
            f"(Week {week_number}, {plural(remaining, 'school day')} remaining)."
        )
    else:
        next_term = dataset.terms.find_next_upcoming(d, r)
        if next_term is not None:
            days_until = next_term.days_until_start(d)
            upcoming = {
                "label": next_term.label,
                "term_number": next_term.term,
                "start": format_date(next_term.start),
                "end": format_date(next_term.end),
                "days_until_start": days_until,
            }
            summary = (
                f"{format_date(d)} ({dow}) is in the school holiday break in {r.value}. "
                f"{next_term.label} starts in {plural(days_until, 'day')} "
                f"on {format_date(next_term.start)}."
            )
        else:
            summary = (
                f"{format_date(d)} ({dow}) is not in a school term in {r.value} "
                f"and no further terms are scheduled for {dataset.year}."
            )

    data = {
        "query": query_block(d, r),
        "result": {
            "in_school_term": term is not None,
            "current_term": current,
            "next_upcoming_term": upcoming,
        },
        f"full_term_schedule_{dataset.year}": [t.to_dict() for t in schedule],
    }
    return QueryResult(summary=summary, data=data)
