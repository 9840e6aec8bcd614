"""
Workday Calendar MCP package initialization.
"""

from fastmcp import FastMCP

from .calendar import (
    CalendarConfig,
    CalendarManager,
    CalendarStore,
    DayCount,
    DayRule,
    HolidayCalendar,
    MovedWorkday,
    always_movable_config,
    default_config,
)
from .exceptions import CalendarError, CalendarRangeError
from .holidays import (
    FixedHoliday,
    default_fixed_holidays,
    easter_monday,
    good_friday,
    pentecost,
)
from .tools import check_date, count_days, get_holidays, get_movable_holidays, get_workdays

# Initialize FastMCP instance
mcp = FastMCP(
    name="Workday Calendar",
    instructions="A workday calendar that classifies dates as holidays or workdays and counts them over date ranges, honouring fixed holidays, Easter-derived holidays and moved workdays.",
)

# Register tools
mcp.tool(check_date)
mcp.tool(get_workdays)
mcp.tool(get_holidays)
mcp.tool(count_days)
mcp.tool(get_movable_holidays)

__all__ = [
    "mcp",
    "CalendarConfig",
    "CalendarError",
    "CalendarManager",
    "CalendarRangeError",
    "CalendarStore",
    "DayCount",
    "DayRule",
    "FixedHoliday",
    "HolidayCalendar",
    "MovedWorkday",
    "always_movable_config",
    "default_config",
    "default_fixed_holidays",
    "easter_monday",
    "good_friday",
    "pentecost",
    "check_date",
    "get_workdays",
    "get_holidays",
    "count_days",
    "get_movable_holidays",
]
