"""
MCP tool implementations for the workday calendar.
This module contains the business logic for all MCP tools.
"""

import logging
import os
from datetime import date
from typing import Annotated, Dict, List

from dotenv import load_dotenv
from pydantic import Field

from .calendar import CalendarManager

# Load .env file (only relevant in production)
load_dotenv()

logger = logging.getLogger(__name__)

_calendar_manager: CalendarManager | None = None


def get_calendar_manager() -> CalendarManager:
    """Returns the calendar manager for the configured calendar file."""
    global _calendar_manager
    if _calendar_manager is None:
        _calendar_manager = CalendarManager(
            os.getenv("WORKDAY_CALENDAR_FILE", "calendar.yaml")
        )
    return _calendar_manager


def _parse_date(value: str | None) -> date:
    return date.fromisoformat(value) if value else date.today()


def check_date(
    day: Annotated[
        str,
        Field(
            description="ISO 8601 date to classify (YYYY-MM-DD). Defaults to today when empty."
        ),
    ] = "",
) -> Dict[str, str | bool | None]:
    """Check whether a single date is a holiday or a workday. Weekends, fixed holidays, Good Friday, Easter Monday and Pentecost count as holidays; configured moved workdays and additional workdays override them. Returns the date, the holiday flag, the deciding rule and the holiday name if any."""
    try:
        d = _parse_date(day)
        calendar = get_calendar_manager().get_calendar()
        rule = calendar.day_rule(d)
        return {
            "date": d.isoformat(),
            "is_holiday": rule.is_holiday,
            "rule": rule.value,
            "name": calendar.holiday_name(d),
        }
    except ValueError as e:
        logger.error("Failed to check date %s: %s", day, e)
        return {"error": f"Failed to check date: {e}"}
    except Exception as e:
        logger.error("Unexpected error checking date: %s", e)
        return {"error": f"Unexpected error: {e}"}


def get_workdays(
    start: Annotated[str, Field(description="First day of the range (YYYY-MM-DD), inclusive")],
    end: Annotated[str, Field(description="Last day of the range (YYYY-MM-DD), inclusive")],
) -> List[str] | Dict[str, str]:
    """List all workdays between start and end, both inclusive, in ascending order as ISO 8601 dates. The start date must not be after the end date."""
    try:
        calendar = get_calendar_manager().get_calendar()
        days = calendar.list_workdays(date.fromisoformat(start), date.fromisoformat(end))
        return [d.isoformat() for d in days]
    except ValueError as e:
        logger.error("Failed to list workdays: %s", e)
        return {"error": f"Failed to list workdays: {e}"}
    except Exception as e:
        logger.error("Unexpected error listing workdays: %s", e)
        return {"error": f"Unexpected error: {e}"}


def get_holidays(
    start: Annotated[str, Field(description="First day of the range (YYYY-MM-DD), inclusive")],
    end: Annotated[str, Field(description="Last day of the range (YYYY-MM-DD), inclusive")],
) -> List[Dict[str, str | None]] | Dict[str, str]:
    """List all holidays (weekends included) between start and end, both inclusive, in ascending order. Each entry carries the ISO 8601 date, the deciding rule and the holiday name."""
    try:
        calendar = get_calendar_manager().get_calendar()
        frame = calendar.to_frame(date.fromisoformat(start), date.fromisoformat(end))
        holidays = frame[frame["is_holiday"]]
        return [
            {"date": ts.date().isoformat(), "rule": row.rule, "name": row.name}
            for ts, row in zip(holidays.index, holidays.itertuples(index=False))
        ]
    except ValueError as e:
        logger.error("Failed to list holidays: %s", e)
        return {"error": f"Failed to list holidays: {e}"}
    except Exception as e:
        logger.error("Unexpected error listing holidays: %s", e)
        return {"error": f"Unexpected error: {e}"}


def count_days(
    start: Annotated[str, Field(description="First day of the range (YYYY-MM-DD), inclusive")],
    end: Annotated[str, Field(description="Last day of the range (YYYY-MM-DD), inclusive")],
) -> Dict[str, int | str]:
    """Count workdays and holidays between start and end, both inclusive. Returns both counts and the number of calendar days in the range."""
    try:
        calendar = get_calendar_manager().get_calendar()
        counts = calendar.count_days(date.fromisoformat(start), date.fromisoformat(end))
        return {
            "workdays": counts.workdays,
            "holidays": counts.holidays,
            "calendar_days": counts.workdays + counts.holidays,
        }
    except ValueError as e:
        logger.error("Failed to count days: %s", e)
        return {"error": f"Failed to count days: {e}"}
    except Exception as e:
        logger.error("Unexpected error counting days: %s", e)
        return {"error": f"Unexpected error: {e}"}


def get_movable_holidays(
    year: Annotated[
        int,
        Field(
            description="Year between 1901 and 2099. Defaults to the current year when 0.",
            ge=0,
        ),
    ] = 0,
) -> Dict[str, str | bool]:
    """Get the Easter-derived holidays of a year: Good Friday, Easter Monday and Pentecost as ISO 8601 dates. The "observed" flag tells whether the calendar counts them as holidays; when it is false the dates are informational only and classify as ordinary days."""
    try:
        calendar = get_calendar_manager().get_calendar()
        movable = calendar.movable_holidays(year or date.today().year)
        result: Dict[str, str | bool] = {name: d.isoformat() for name, d in movable.items()}
        result["observed"] = calendar.config.observe_movable_holidays
        return result
    except ValueError as e:
        logger.error("Failed to compute movable holidays: %s", e)
        return {"error": f"Failed to compute movable holidays: {e}"}
    except Exception as e:
        logger.error("Unexpected error computing movable holidays: %s", e)
        return {"error": f"Unexpected error: {e}"}


__all__ = [
    "check_date",
    "get_workdays",
    "get_holidays",
    "count_days",
    "get_movable_holidays",
    "get_calendar_manager",
]
