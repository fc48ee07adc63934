"""ANZ Schedule calendar — holiday, school term and business day utilities.

This package is the only place dates are parsed, classified and walked.
Query handlers compose these pieces; they never re-implement them.
"""
from anz_schedule.calendar.business_calendar import (
    ANZBusinessCalendar,
    BusinessDayScan,
    SkippedDay,
)
from anz_schedule.calendar.dates import day_of_week_name, format_date, parse_date
from anz_schedule.calendar.holidays import HolidayIndex, HolidayType, PublicHoliday
from anz_schedule.calendar.terms import SchoolTerm, TermIndex

__all__ = [
    "ANZBusinessCalendar",
    "BusinessDayScan",
    "SkippedDay",
    "HolidayIndex",
    "HolidayType",
    "PublicHoliday",
    "SchoolTerm",
    "TermIndex",
    "parse_date",
    "format_date",
    "day_of_week_name",
]
