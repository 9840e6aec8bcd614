"""
Holiday rules for the workday calendar.
Fixed (annually recurring) holidays and the Easter-derived movable holidays.
"""

from datetime import date, timedelta
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import CalendarRangeError

# Years for which the Computus approximation below is exact enough
EASTER_YEAR_RANGE = (1901, 2099)

# Leap years included, so Feb 29 is a valid fixed holiday
_DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class FixedHoliday(BaseModel):
    """A holiday recurring every year on the same month and day."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    name: Optional[str] = None

    @model_validator(mode="after")
    def validate_day_in_month(self) -> "FixedHoliday":
        if self.day > _DAYS_IN_MONTH[self.month - 1]:
            raise ValueError(f"day {self.day} does not exist in month {self.month}")
        return self


def default_fixed_holidays() -> tuple[FixedHoliday, ...]:
    """Returns the built-in set of nine national fixed holidays."""
    return (
        FixedHoliday(month=1, day=1, name="New Year's Day"),
        FixedHoliday(month=3, day=15, name="National Day"),
        FixedHoliday(month=5, day=1, name="Labour Day"),
        FixedHoliday(month=8, day=20, name="State Foundation Day"),
        FixedHoliday(month=10, day=23, name="Republic Day"),
        FixedHoliday(month=11, day=1, name="All Saints' Day"),
        FixedHoliday(month=12, day=25, name="Christmas Day"),
        FixedHoliday(month=12, day=26, name="Second Day of Christmas"),
        FixedHoliday(month=12, day=31, name="New Year's Eve"),
    )


def check_easter_year(year: int) -> None:
    """Raises CalendarRangeError if Easter cannot be computed for the year."""
    first, last = EASTER_YEAR_RANGE
    if not first <= year <= last:
        raise CalendarRangeError(
            f"year {year} is outside the supported range {first}-{last}"
        )


@lru_cache(maxsize=256)
def easter_monday(year: int) -> date:
    """Calculates Easter Monday for a year between 1901 and 2099.

    Gauss' Easter formula with the constants of the 20th and 21st century.
    The offset is counted from March 1 and lands directly on Easter Monday.

    Raises:
        CalendarRangeError: If the year is outside the supported range.
    """
    check_easter_year(year)

    a = year % 19
    b = year % 4
    c = year % 7
    d = (19 * a + 24) % 30
    e = (2 * b + 4 * c + 6 * d + 5) % 7

    if e == 6 and d == 29:
        # Easter Sunday would fall on April 26, one week too late
        offset = 50
    else:
        offset = e + 22 + d

    return date(year, 3, 1) + timedelta(days=offset)


def good_friday(year: int) -> date:
    """Good Friday, three days before Easter Monday."""
    return easter_monday(year) - timedelta(days=3)


def pentecost(year_or_easter_monday: int | date) -> date:
    """Calculates Pentecost (Whit Monday) as Easter Monday plus 49 days.

    Args:
        year_or_easter_monday: Either the year, or an already computed
            Easter Monday whose year must lie in the supported range.

    Raises:
        CalendarRangeError: If the year is outside the supported range.
        TypeError: If the argument is neither an int nor a date.
    """
    if isinstance(year_or_easter_monday, date):
        check_easter_year(year_or_easter_monday.year)
        monday = year_or_easter_monday
    elif isinstance(year_or_easter_monday, int):
        monday = easter_monday(year_or_easter_monday)
    else:
        raise TypeError(
            f"expected a year or a date, got {type(year_or_easter_monday).__name__}"
        )
    return monday + timedelta(days=49)
