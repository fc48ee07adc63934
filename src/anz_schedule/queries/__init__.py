"""
ANZ Schedule query handlers.

Each handler validates its (date, region) inputs, composes the calendar
package, and returns a QueryResult: a one-sentence summary for humans plus
a structured data payload for machines.

Module structure:
    holiday_check.py      is the date a public holiday in the region
    term_check.py         is the date in a school term, with in-term statistics
    next_business_day.py  forward scan to the next business day
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from typing import Any

from anz_schedule.calendar.dates import day_of_week_name, format_date
from anz_schedule.regions import Region


@dataclass(frozen=True)
class QueryResult:
    """Handler output: summary sentence plus structured data."""
    summary: str
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"summary": self.summary, "data": self.data}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def plural(n: int, word: str) -> str:
    """'1 day', '2 days', '0 days'."""
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def query_block(d: date, region: Region) -> dict[str, str]:
    """The echo of the request every payload starts with."""
    return {
        "date": format_date(d),
        "day_of_week": day_of_week_name(d),
        "region": region.value,
    }
