"""Shared fixtures for task checklist tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from task_checklist.engines.holiday_calendar import HolidayCalendar, HolidayEntry
from task_checklist.engines.task_template import TaskTemplate
from task_checklist.utils import dt_utils

# Brisbane has no daylight saving, which keeps expected instants simple.
BRISBANE = ZoneInfo("Australia/Brisbane")

# NSW-style public holidays for 2024
HOLIDAYS_2024 = [
    (date(2024, 1, 1), "New Year's Day"),
    (date(2024, 1, 26), "Australia Day"),
    (date(2024, 3, 29), "Good Friday"),
    (date(2024, 3, 30), "Easter Saturday"),
    (date(2024, 4, 1), "Easter Monday"),
    (date(2024, 4, 25), "Anzac Day"),
    (date(2024, 6, 10), "King's Birthday"),
    (date(2024, 10, 7), "Labour Day"),
    (date(2024, 12, 25), "Christmas Day"),
    (date(2024, 12, 26), "Boxing Day"),
]


@pytest.fixture
def tz() -> ZoneInfo:
    """Business timezone used across tests."""
    return BRISBANE


@pytest.fixture
def empty_calendar() -> HolidayCalendar:
    """Calendar observing no holidays."""
    return HolidayCalendar.empty()


@pytest.fixture
def holidays_2024() -> HolidayCalendar:
    """Calendar with the 2024 public holidays."""
    return HolidayCalendar(
        HolidayEntry(date=day, name=name) for day, name in HOLIDAYS_2024
    )


@pytest.fixture
def make_task() -> Callable[..., TaskTemplate]:
    """Factory for TaskTemplate with a default id."""

    def _make(**kwargs: Any) -> TaskTemplate:
        kwargs.setdefault("id", "task-1")
        return TaskTemplate(**kwargs)

    return _make


@pytest.fixture
def restore_default_timezone() -> Iterator[None]:
    """Restore dt_utils' default timezone after a test changes it."""
    original = dt_utils.get_default_timezone()
    yield
    dt_utils.set_default_timezone(original)
