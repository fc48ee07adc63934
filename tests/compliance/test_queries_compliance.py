"""Compliance tests for the three query handlers.

Tests verify:
    - Holiday check payload and summary, including the region listing
    - Term check statistics: week number, school days elapsed and remaining
    - Term check outside a term: next upcoming term or none left
    - Next business day: input status, skip list, calendar days ahead
    - Handlers re-validate date format and region code
"""

import json

import pytest

from anz_schedule.dataset import ScheduleDataset, load_dataset
from anz_schedule.exceptions import InvalidDateFormatError, UnknownRegionError
from anz_schedule.queries import QueryResult, plural
from anz_schedule.queries.holiday_check import check_public_holiday
from anz_schedule.queries.next_business_day import find_next_business_day
from anz_schedule.queries.term_check import check_school_term
from anz_schedule.regions import Region


@pytest.fixture(scope="module")
def dataset() -> ScheduleDataset:
    return load_dataset()


class TestHolidayCheck:
    """is_public_holiday behaviour."""

    @pytest.mark.parametrize("region", ["NSW", "VIC"])
    def test_anzac_day(self, dataset: ScheduleDataset, region: str) -> None:
        result = check_public_holiday(dataset, "2026-04-25", region)
        holiday = result.data["result"]["holiday"]
        assert result.data["result"]["is_public_holiday"] is True
        assert holiday["name"] == "ANZAC Day"
        assert holiday["type"] == "national"
        assert holiday["region"] == region
        assert result.summary == (
            f'2026-04-25 (Saturday) IS a public holiday in {region}: "ANZAC Day" [national].'
        )

    def test_vic_has_no_substitute(self, dataset: ScheduleDataset) -> None:
        result = check_public_holiday(dataset, "2026-04-27", "VIC")
        assert result.data["result"] == {"is_public_holiday": False, "holiday": None}
        assert result.summary == "2026-04-27 (Monday) is NOT a public holiday in VIC."

    @pytest.mark.parametrize("region", ["NSW", "WA"])
    def test_substitute_day(self, dataset: ScheduleDataset, region: str) -> None:
        result = check_public_holiday(dataset, "2026-04-27", region)
        assert result.data["result"]["is_public_holiday"] is True
        assert "substitute" in result.data["result"]["holiday"]["name"]

    def test_query_block(self, dataset: ScheduleDataset) -> None:
        result = check_public_holiday(dataset, "2026-04-27", Region.WA)
        assert result.data["query"] == {
            "date": "2026-04-27", "day_of_week": "Monday", "region": "WA",
        }

    def test_region_listing(self, dataset: ScheduleDataset) -> None:
        listing = check_public_holiday(dataset, "2026-02-11", "NSW").data["all_holidays_for_region"]
        assert len(listing) == 13
        assert listing[0] == {"date": "2026-01-01", "name": "New Year's Day", "type": "national"}
        assert [h["date"] for h in listing] == sorted(h["date"] for h in listing)

    def test_outside_dataset_year_is_not_a_holiday(self, dataset: ScheduleDataset) -> None:
        result = check_public_holiday(dataset, "2027-01-01", "NZ")
        assert result.data["result"]["is_public_holiday"] is False


class TestTermCheckInTerm:
    """get_school_term inside a term window."""

    def test_vic_mid_term(self, dataset: ScheduleDataset) -> None:
        result = check_school_term(dataset, "2026-02-11", "VIC")
        current = result.data["result"]["current_term"]
        assert result.data["result"]["in_school_term"] is True
        assert result.data["result"]["next_upcoming_term"] is None
        assert current == {
            "label": "Term 1 2026",
            "term_number": 1,
            "start": "2026-01-28",
            "end": "2026-03-27",
            "week_number_in_term": 3,
            "school_days_elapsed": 11,
            "school_days_remaining": 31,
        }
        assert result.summary == (
            "2026-02-11 (Wednesday) is in VIC Term 1 2026 (Week 3, 31 school days remaining)."
        )

    def test_nz_first_of_february(self, dataset: ScheduleDataset) -> None:
        # Term 1 started Thursday 29 January; 1 February is the first Sunday
        current = check_school_term(dataset, "2026-02-01", "NZ").data["result"]["current_term"]
        assert current["term_number"] == 1
        assert current["week_number_in_term"] == 1
        assert current["school_days_elapsed"] == 2

    def test_term_opening_on_a_holiday(self, dataset: ScheduleDataset) -> None:
        # NSW Term 2 opens on the ANZAC Day substitute holiday
        current = check_school_term(dataset, "2026-04-27", "NSW").data["result"]["current_term"]
        assert current["term_number"] == 2
        assert current["school_days_elapsed"] == 0
        # Apr 28 .. Jul 3 weekdays, less King's Birthday (Jun 8)
        assert current["school_days_remaining"] == 48

    def test_last_day_of_term(self, dataset: ScheduleDataset) -> None:
        result = check_school_term(dataset, "2026-07-03", "NSW")
        current = result.data["result"]["current_term"]
        assert current["school_days_remaining"] == 0
        assert current["school_days_elapsed"] == 48
        assert result.summary.endswith("(Week 10, 0 school days remaining).")

    def test_elapsed_plus_remaining_is_term_length(self, dataset: ScheduleDataset) -> None:
        cal = dataset.calendar
        for term in dataset.terms.schedule_for_region(Region.SA):
            total = cal.business_days_in_range(term.start, term.end, Region.SA)
            current = check_school_term(
                dataset, term.start.isoformat(), "SA"
            ).data["result"]["current_term"]
            assert current["school_days_elapsed"] + current["school_days_remaining"] == total


class TestTermCheckOutsideTerm:
    """get_school_term during breaks."""

    def test_holiday_break(self, dataset: ScheduleDataset) -> None:
        result = check_school_term(dataset, "2026-04-01", "VIC")
        assert result.data["result"]["in_school_term"] is False
        assert result.data["result"]["current_term"] is None
        assert result.data["result"]["next_upcoming_term"] == {
            "label": "Term 2 2026",
            "term_number": 2,
            "start": "2026-04-14",
            "end": "2026-06-26",
            "days_until_start": 13,
        }
        assert result.summary == (
            "2026-04-01 (Wednesday) is in the school holiday break in VIC. "
            "Term 2 2026 starts in 13 days on 2026-04-14."
        )

    def test_one_day_singular(self, dataset: ScheduleDataset) -> None:
        # NZ Term 1 starts Thursday 2026-01-29
        result = check_school_term(dataset, "2026-01-28", "NZ")
        assert result.data["result"]["next_upcoming_term"]["days_until_start"] == 1
        assert "starts in 1 day on 2026-01-29." in result.summary

    def test_after_last_term(self, dataset: ScheduleDataset) -> None:
        result = check_school_term(dataset, "2026-12-20", "QLD")
        assert result.data["result"]["next_upcoming_term"] is None
        assert result.summary == (
            "2026-12-20 (Sunday) is not in a school term in QLD and no further "
            "terms are scheduled for 2026."
        )

    def test_full_schedule_always_present(self, dataset: ScheduleDataset) -> None:
        for date_str in ["2026-01-05", "2026-02-11", "2026-12-31"]:
            schedule = check_school_term(dataset, date_str, "ACT").data["full_term_schedule_2026"]
            assert [t["term"] for t in schedule] == [1, 2, 3, 4]
            assert schedule[0] == {
                "term": 1, "label": "Term 1 2026", "start": "2026-01-28", "end": "2026-04-09",
            }


class TestNextBusinessDay:
    """get_next_business_day behaviour."""

    def test_vic_anzac_weekend(self, dataset: ScheduleDataset) -> None:
        result = find_next_business_day(dataset, "2026-04-24", "VIC")
        assert result.data["next_business_day"] == {
            "date": "2026-04-27", "day_of_week": "Monday", "calendar_days_ahead": 3,
        }
        assert result.data["skipped_due_to"] == []
        assert result.summary == (
            "Next business day after 2026-04-24 (Friday) in VIC is "
            "2026-04-27 (Monday), 3 calendar days ahead."
        )

    def test_nsw_anzac_weekend(self, dataset: ScheduleDataset) -> None:
        result = find_next_business_day(dataset, "2026-04-24", "NSW")
        assert result.data["next_business_day"]["date"] == "2026-04-28"
        assert result.data["next_business_day"]["calendar_days_ahead"] == 4
        assert result.data["skipped_due_to"] == [
            {"date": "2026-04-27", "name": "ANZAC Day (substitute)", "reason": "public holiday"},
        ]
        assert result.summary == (
            "Next business day after 2026-04-24 (Friday) in NSW is "
            "2026-04-28 (Tuesday), 4 calendar days ahead. "
            "1 holiday skipped (ANZAC Day (substitute))."
        )

    def test_christmas(self, dataset: ScheduleDataset) -> None:
        result = find_next_business_day(dataset, "2026-12-24", "NZ")
        assert result.data["next_business_day"]["date"] == "2026-12-29"
        assert [s["name"] for s in result.data["skipped_due_to"]] == [
            "Christmas Day", "Boxing Day (observed)",
        ]
        assert result.summary.endswith(
            "2 holidays skipped (Christmas Day, Boxing Day (observed))."
        )

    def test_one_calendar_day_singular(self, dataset: ScheduleDataset) -> None:
        result = find_next_business_day(dataset, "2026-02-10", "SA")
        assert result.summary.endswith("2026-02-11 (Wednesday), 1 calendar day ahead.")

    def test_input_status_weekend_holiday(self, dataset: ScheduleDataset) -> None:
        status = find_next_business_day(dataset, "2026-04-25", "NSW").data["input_date_status"]
        assert status == {
            "is_business_day": False,
            "is_weekend": True,
            "is_public_holiday": True,
            "public_holiday_name": "ANZAC Day",
        }

    def test_input_status_business_day(self, dataset: ScheduleDataset) -> None:
        status = find_next_business_day(dataset, "2026-02-11", "QLD").data["input_date_status"]
        assert status == {
            "is_business_day": True,
            "is_weekend": False,
            "is_public_holiday": False,
            "public_holiday_name": None,
        }

    def test_requery_moves_forward(self, dataset: ScheduleDataset) -> None:
        first = find_next_business_day(dataset, "2026-04-24", "WA").data["next_business_day"]["date"]
        second = find_next_business_day(dataset, first, "WA").data["next_business_day"]["date"]
        assert first < second


class TestInputValidation:
    """Handlers enforce the date format and region enumeration themselves."""

    @pytest.mark.parametrize("handler", [
        check_public_holiday, check_school_term, find_next_business_day,
    ])
    def test_bad_date(self, dataset: ScheduleDataset, handler) -> None:
        with pytest.raises(InvalidDateFormatError):
            handler(dataset, "25/04/2026", "NSW")

    @pytest.mark.parametrize("handler", [
        check_public_holiday, check_school_term, find_next_business_day,
    ])
    def test_bad_region(self, dataset: ScheduleDataset, handler) -> None:
        with pytest.raises(UnknownRegionError):
            handler(dataset, "2026-04-25", "XYZ")


class TestQueryResult:

    def test_to_json(self) -> None:
        result = QueryResult(summary="s", data={"a": 1})
        text = result.to_json()
        assert json.loads(text) == {"summary": "s", "data": {"a": 1}}
        assert text.startswith('{\n  "summary"')

    def test_plural(self) -> None:
        assert plural(0, "day") == "0 days"
        assert plural(1, "day") == "1 day"
        assert plural(2, "school day") == "2 school days"
