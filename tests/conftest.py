"""
Pytest fixtures for the workday calendar tests.
"""

from datetime import date
from pathlib import Path
from typing import Tuple

import pytest

from workday_calendar_mcp import tools
from workday_calendar_mcp.calendar import (
    CalendarManager,
    HolidayCalendar,
    MovedWorkday,
    default_config,
)


@pytest.fixture
def default_calendar() -> HolidayCalendar:
    """Calendar with the built-in fixed holidays and no overrides."""
    return HolidayCalendar(default_config())


@pytest.fixture
def bridge_day_calendar() -> HolidayCalendar:
    """Calendar where Fri 2025-05-02 is swapped with Sat 2025-05-17."""
    return HolidayCalendar(
        default_config(
            moved_workdays=(
                MovedWorkday(
                    original_day=date(2025, 5, 2),
                    moved_to=date(2025, 5, 17),
                    reason="Labour Day bridge",
                ),
            )
        )
    )


@pytest.fixture
def temp_calendar(tmp_path: Path) -> Tuple[Path, CalendarManager]:
    """Fixture providing a temporary calendar YAML file and CalendarManager instance.

    Args:
        tmp_path: pytest's built-in tmp_path fixture

    Returns:
        Tuple[Path, CalendarManager]: Tuple containing the path to the temporary
        calendar file and a configured CalendarManager instance
    """
    calendar_path = tmp_path / "test_calendar.yaml"
    calendar_manager = CalendarManager(str(calendar_path))
    return calendar_path, calendar_manager


@pytest.fixture
def tool_calendar(temp_calendar, monkeypatch) -> CalendarManager:
    """Points the MCP tools at a temporary calendar file."""
    _, calendar_manager = temp_calendar
    monkeypatch.setattr(tools, "_calendar_manager", calendar_manager)
    return calendar_manager
