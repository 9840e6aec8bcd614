"""
Workday calendar for the holiday engine.
Classifies dates as holidays or workdays and stores the configuration in a YAML file.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from enum import Enum
from pathlib import Path
from typing import Iterator, NamedTuple, Optional

import pandas as pd
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import CalendarRangeError
from .holidays import (
    FixedHoliday,
    default_fixed_holidays,
    easter_monday,
    pentecost,
)

logger = logging.getLogger(__name__)


class MovedWorkday(BaseModel):
    """A working day swapped with a day off.

    ``original_day`` becomes a holiday, ``moved_to`` becomes a workday.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    original_day: date
    moved_to: date
    reason: Optional[str] = None


class CalendarConfig(BaseModel):
    """Complete calendar configuration. Immutable once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fixed_holidays: tuple[FixedHoliday, ...] = Field(
        default_factory=default_fixed_holidays
    )
    moved_workdays: tuple[MovedWorkday, ...] = ()
    additional_workdays: tuple[date, ...] = ()
    observe_movable_holidays: bool = True

    @field_validator("fixed_holidays", mode="before")
    @classmethod
    def default_when_missing(cls, v):
        if v is None:
            return default_fixed_holidays()
        return v


def default_config(
    moved_workdays: tuple[MovedWorkday, ...] = (),
    additional_workdays: tuple[date, ...] = (),
    observe_movable_holidays: bool = True,
) -> CalendarConfig:
    """Default national holidays with every override available."""
    return CalendarConfig(
        fixed_holidays=default_fixed_holidays(),
        moved_workdays=moved_workdays,
        additional_workdays=additional_workdays,
        observe_movable_holidays=observe_movable_holidays,
    )


def always_movable_config(
    fixed_holidays: Optional[tuple[FixedHoliday, ...]] = None,
    moved_workdays: tuple[MovedWorkday, ...] = (),
) -> CalendarConfig:
    """Movable holidays always observed, moved workdays as the only override."""
    return CalendarConfig(
        fixed_holidays=fixed_holidays,
        moved_workdays=moved_workdays,
        observe_movable_holidays=True,
    )


class DayRule(str, Enum):
    """The rule that decided whether a day is a holiday."""

    MOVED_TO = "moved_to"
    MOVED_FROM = "moved_from"
    ADDITIONAL_WORKDAY = "additional_workday"
    WEEKEND = "weekend"
    FIXED_HOLIDAY = "fixed_holiday"
    EASTER_MONDAY = "easter_monday"
    GOOD_FRIDAY = "good_friday"
    PENTECOST = "pentecost"
    WORKDAY = "workday"

    @property
    def is_holiday(self) -> bool:
        return self not in (
            DayRule.MOVED_TO,
            DayRule.ADDITIONAL_WORKDAY,
            DayRule.WORKDAY,
        )


_RULE_NAMES = {
    DayRule.WEEKEND: "Weekend",
    DayRule.EASTER_MONDAY: "Easter Monday",
    DayRule.GOOD_FRIDAY: "Good Friday",
    DayRule.PENTECOST: "Pentecost",
}


class DayCount(NamedTuple):
    """Number of workdays and holidays in a date range."""

    workdays: int
    holidays: int


def _check_range(start: date, end: date) -> None:
    if start > end:
        raise CalendarRangeError("start must be <= end")


class HolidayCalendar:
    """Decides for every date whether it is a holiday or a workday."""

    def __init__(self, config: CalendarConfig | None = None):
        self.config = config if config is not None else default_config()

        # First entry wins when the same date is listed twice
        self._moved_to: dict[date, MovedWorkday] = {}
        self._moved_from: dict[date, MovedWorkday] = {}
        for moved in self.config.moved_workdays:
            self._moved_to.setdefault(moved.moved_to, moved)
            self._moved_from.setdefault(moved.original_day, moved)

        self._fixed: dict[tuple[int, int], FixedHoliday] = {}
        for holiday in self.config.fixed_holidays:
            self._fixed.setdefault((holiday.month, holiday.day), holiday)

        self._additional = frozenset(self.config.additional_workdays)

        logger.debug(
            "Calendar built: %d fixed holidays, %d moved workdays, "
            "%d additional workdays, movable holidays %s",
            len(self.config.fixed_holidays),
            len(self.config.moved_workdays),
            len(self.config.additional_workdays),
            "on" if self.config.observe_movable_holidays else "off",
        )

    # Single-date classification

    def day_rule(self, d: date) -> DayRule:
        """Returns the first rule that applies to the date.

        Moved workdays take precedence over every other rule, additional
        workdays over weekends and holidays.

        Raises:
            CalendarRangeError: If the answer depends on Easter and the
                year is outside the supported range.
        """
        if d in self._moved_to:
            return DayRule.MOVED_TO
        if d in self._moved_from:
            return DayRule.MOVED_FROM
        if d in self._additional:
            return DayRule.ADDITIONAL_WORKDAY
        if d.weekday() >= 5:
            return DayRule.WEEKEND
        if (d.month, d.day) in self._fixed:
            return DayRule.FIXED_HOLIDAY

        if self.config.observe_movable_holidays:
            # Raises for years outside the supported Easter range
            monday = easter_monday(d.year)
            if d == monday:
                return DayRule.EASTER_MONDAY
            if d == monday - timedelta(days=3):
                return DayRule.GOOD_FRIDAY
            if d == pentecost(monday):
                return DayRule.PENTECOST

        return DayRule.WORKDAY

    def is_holiday(self, d: date) -> bool:
        """Checks if date is a holiday."""
        return self.day_rule(d).is_holiday

    def is_workday(self, d: date) -> bool:
        """Checks if date is a workday."""
        return not self.day_rule(d).is_holiday

    def holiday_name(self, d: date) -> Optional[str]:
        """Returns holiday name or None."""
        return self._name_for(d, self.day_rule(d))

    def _name_for(self, d: date, rule: DayRule) -> Optional[str]:
        if rule is DayRule.FIXED_HOLIDAY:
            return self._fixed[(d.month, d.day)].name or "Holiday"
        if rule is DayRule.MOVED_FROM:
            return self._moved_from[d].reason or "Moved day off"
        return _RULE_NAMES.get(rule)

    def movable_holidays(self, year: int) -> dict[str, date]:
        """Good Friday, Easter Monday and Pentecost of the year."""
        monday = easter_monday(year)
        return {
            "good_friday": monday - timedelta(days=3),
            "easter_monday": monday,
            "pentecost": pentecost(monday),
        }

    # Range queries

    def iter_days(self, start: date, end: date) -> Iterator[tuple[date, DayRule]]:
        """Iterates over every day from start to end (inclusive) with its rule.

        Raises:
            CalendarRangeError: If start is after end.
        """
        _check_range(start, end)
        return self._iter_days(start, end)

    def _iter_days(self, start: date, end: date) -> Iterator[tuple[date, DayRule]]:
        current = start
        while current <= end:
            yield current, self.day_rule(current)
            current += timedelta(days=1)

    def list_workdays(self, start: date, end: date) -> list[date]:
        """All workdays from start to end (inclusive), ascending."""
        return [d for d, rule in self.iter_days(start, end) if not rule.is_holiday]

    def list_holidays(self, start: date, end: date) -> list[date]:
        """All holidays from start to end (inclusive), ascending."""
        return [d for d, rule in self.iter_days(start, end) if rule.is_holiday]

    def count_days(self, start: date, end: date) -> DayCount:
        """Counts workdays and holidays from start to end (inclusive)."""
        workdays = 0
        holidays = 0
        for _, rule in self.iter_days(start, end):
            if rule.is_holiday:
                holidays += 1
            else:
                workdays += 1
        return DayCount(workdays=workdays, holidays=holidays)

    def to_frame(self, start: date, end: date) -> pd.DataFrame:
        """One row per day, indexed by date, for reporting."""
        rows = [
            {
                "date": d,
                "weekday": d.strftime("%a"),
                "is_holiday": rule.is_holiday,
                "rule": rule.value,
                "name": self._name_for(d, rule),
            }
            for d, rule in self.iter_days(start, end)
        ]
        frame = pd.DataFrame(
            rows, columns=["date", "weekday", "is_holiday", "rule", "name"]
        )
        frame.index = pd.DatetimeIndex(frame.pop("date"), name="date")
        return frame

    def __repr__(self) -> str:
        return (
            f"HolidayCalendar(fixed_holidays={len(self.config.fixed_holidays)}, "
            f"moved_workdays={len(self.config.moved_workdays)}, "
            f"additional_workdays={len(self.config.additional_workdays)}, "
            f"observe_movable_holidays={self.config.observe_movable_holidays})"
        )


class CalendarStore:
    """Loads and saves calendar.yaml."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> CalendarConfig:
        """Load calendar configuration from YAML."""
        with open(self.path) as f:
            data = yaml.safe_load(f) or {}
        logger.debug("Loaded calendar configuration from %s", self.path)
        return CalendarConfig.model_validate(data)

    def save(self, config: CalendarConfig) -> None:
        """Save calendar configuration as YAML."""
        data = config.model_dump(mode="json", exclude_none=True)
        with open(self.path, "w") as f:
            yaml.dump(
                data, f, default_flow_style=False, allow_unicode=True, sort_keys=False
            )


class CalendarManager:
    """Manages the calendar configuration in a YAML file."""

    def __init__(self, file_path: Path | str = "calendar.yaml"):
        self.file_path = Path(file_path)
        self.calendar_store = CalendarStore(file_path)
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Writes the default configuration if the calendar file is missing."""
        if not self.file_path.exists():
            logger.info("Creating default calendar at %s", self.file_path)
            self.calendar_store.save(default_config())

    def get_calendar(self) -> HolidayCalendar:
        """Builds a calendar from the current file contents."""
        return HolidayCalendar(self.calendar_store.load())

    def add_moved_workday(
        self, original_day: date, moved_to: date, reason: str | None = None
    ) -> MovedWorkday:
        """Swaps a workday with a day off and persists it."""
        config = self.calendar_store.load()
        moved = MovedWorkday(original_day=original_day, moved_to=moved_to, reason=reason)
        self.calendar_store.save(
            config.model_copy(
                update={"moved_workdays": config.moved_workdays + (moved,)}
            )
        )
        logger.info("Moved workday %s to %s", original_day, moved_to)
        return moved

    def add_additional_workday(self, day: date) -> None:
        """Marks a day as a workday regardless of other rules and persists it."""
        config = self.calendar_store.load()
        self.calendar_store.save(
            config.model_copy(
                update={"additional_workdays": config.additional_workdays + (day,)}
            )
        )
        logger.info("Added additional workday %s", day)
