"""
Exceptions raised by the workday calendar.
"""


class CalendarError(Exception):
    """Base class for all calendar errors."""


class CalendarRangeError(CalendarError, ValueError):
    """A year or date range outside what the calendar can answer."""
