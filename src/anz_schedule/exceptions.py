"""Exception hierarchy for ANZ Schedule.

Every error raised by this package derives from ScheduleError. The
input-validation errors also derive from ValueError so callers that only
know about built-in exceptions still catch them.

A missing holiday or term is NOT an error: lookups return None and the
query handlers report "not found" as a normal result.
"""


class ScheduleError(Exception):
    """Base class for all ANZ Schedule errors."""
    pass


class InvalidDateFormatError(ScheduleError, ValueError):
    """Raised when a date string is not a valid YYYY-MM-DD calendar date."""
    pass


class UnknownRegionError(ScheduleError, ValueError):
    """Raised when a region code is outside the supported enumeration."""
    pass


class DatasetError(ScheduleError, ValueError):
    """Raised when a holiday or term dataset is malformed.

    Covers missing keys or columns, unparseable values, records outside the
    dataset year and violated term ordering.
    """
    pass


class DuplicateHolidayError(DatasetError):
    """Raised when two holiday records share the same (date, region) key."""
    pass


class BusinessDayScanError(ScheduleError, RuntimeError):
    """Raised when the next-business-day scan exceeds its day limit."""
    pass


class ToolArgumentError(ScheduleError, ValueError):
    """Raised when a tool call is missing arguments or has unexpected ones."""
    pass


class UnknownToolError(ScheduleError, KeyError):
    """Raised when a tool name is not in the tool registry."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""
