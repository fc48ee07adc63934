"""ANZ Schedule — public holidays, school terms and business days for NZ and Australia.

Basic usage::

    from anz_schedule import load_dataset
    from anz_schedule.queries.next_business_day import find_next_business_day

    dataset = load_dataset()
    result = find_next_business_day(dataset, "2026-04-24", "NSW")
    result.summary   # "Next business day after 2026-04-24 (Friday) in NSW is 2026-04-28 ..."
"""
from anz_schedule.dataset import ScheduleDataset, load_dataset
from anz_schedule.exceptions import (
    BusinessDayScanError,
    DatasetError,
    DuplicateHolidayError,
    InvalidDateFormatError,
    ScheduleError,
    ToolArgumentError,
    UnknownRegionError,
    UnknownToolError,
)
from anz_schedule.regions import VALID_REGIONS, Region

__version__ = "1.0.0"

__all__ = [
    "ScheduleDataset",
    "load_dataset",
    "Region",
    "VALID_REGIONS",
    "ScheduleError",
    "InvalidDateFormatError",
    "UnknownRegionError",
    "DatasetError",
    "DuplicateHolidayError",
    "BusinessDayScanError",
    "ToolArgumentError",
    "UnknownToolError",
]
