"""Tests for ChecklistManager - batch evaluation over loaded records."""

from __future__ import annotations

from datetime import date, datetime
import logging
from zoneinfo import ZoneInfo

from freezegun import freeze_time
import pytest
import voluptuous as vol

from task_checklist import const
from task_checklist.engines.status_engine import OccurrenceStatus
from task_checklist.managers.checklist_manager import ChecklistManager

BRISBANE = ZoneInfo("Australia/Brisbane")
MONDAY = date(2024, 1, 8)

TASK_RECORDS = [
    {"id": "open", "title": "Open store", "frequencies": ["every_day"], "due_time": "09:00"},
    {"id": "close", "title": "Close store", "frequencies": ["every_day"], "due_time": "17:00"},
    {"id": "weekly", "title": "Stocktake", "frequencies": ["weekly"], "due_time": "anytime"},
    {"id": "eom", "title": "Month end", "frequencies": ["end_of_every_month"]},
    {"id": "off", "title": "Audit", "frequencies": ["once_off"], "due_date": "2024-01-08"},
]


def _at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=BRISBANE)


@pytest.fixture
def manager() -> ChecklistManager:
    """Manager in Brisbane time with the sample tasks loaded."""
    mgr = ChecklistManager({const.CONF_TIME_ZONE: "Australia/Brisbane"})
    mgr.load_tasks(TASK_RECORDS)
    return mgr


# =============================================================================
# TEST: CONFIGURATION
# =============================================================================


class TestConfiguration:
    """Test config handling."""

    def test_defaults(self) -> None:
        mgr = ChecklistManager()

        assert mgr.tz.key == const.DEFAULT_BUSINESS_TIME_ZONE
        assert mgr.badge_hours == const.DEFAULT_NEW_TASK_BADGE_HOURS
        assert len(mgr.calendar) == 0
        assert mgr.tasks == []

    def test_unknown_time_zone_falls_back(self) -> None:
        mgr = ChecklistManager({const.CONF_TIME_ZONE: "Mars/Olympus"})

        assert mgr.tz.key == const.DEFAULT_BUSINESS_TIME_ZONE

    def test_negative_badge_hours_rejected(self) -> None:
        with pytest.raises(vol.Invalid):
            ChecklistManager({const.CONF_NEW_TASK_BADGE_HOURS: -1})


# =============================================================================
# TEST: LOADING
# =============================================================================


class TestLoading:
    """Test record loading and logging of dropped input."""

    def test_load_tasks_logs_dropped_and_rejected(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        mgr = ChecklistManager({const.CONF_TIME_ZONE: "Australia/Brisbane"})

        with caplog.at_level(logging.WARNING):
            tasks = mgr.load_tasks(
                [
                    {"id": "a", "frequencies": ["every_day", "fortnightly"]},
                    {"title": "no id"},
                ]
            )

        assert [task.id for task in tasks] == ["a"]
        assert "fortnightly" in caplog.text
        assert "Skipping task record #1" in caplog.text

    def test_get_task(self, manager: ChecklistManager) -> None:
        task = manager.get_task("close")

        assert task is not None
        assert task.title == "Close store"
        assert manager.get_task("missing") is None

    def test_load_holidays(self, manager: ChecklistManager) -> None:
        calendar = manager.load_holidays(
            [{"date": "2024-01-26", "name": "Australia Day"}]
        )

        assert manager.calendar is calendar
        assert calendar.is_holiday(date(2024, 1, 26))


# =============================================================================
# TEST: CHECKLIST
# =============================================================================


class TestChecklistForDate:
    """Test the per-date checklist."""

    def test_occurring_tasks_sorted_by_due_instant(
        self, manager: ChecklistManager
    ) -> None:
        results = manager.checklist_for_date(MONDAY, now=_at(MONDAY, 12))

        assert [result.task_id for result in results] == [
            "open",
            "close",
            "off",
            "weekly",
        ]
        statuses = {result.task_id: result.status for result in results}
        assert statuses == {
            "open": OccurrenceStatus.OVERDUE,
            "close": OccurrenceStatus.DUE_TODAY,
            "off": OccurrenceStatus.DUE_TODAY,
            "weekly": OccurrenceStatus.DUE_TODAY,
        }

    def test_completions_and_persisted(self, manager: ChecklistManager) -> None:
        results = manager.checklist_for_date(
            MONDAY,
            now=_at(MONDAY, 12),
            completions={"close"},
            persisted={"open": "done"},
        )
        statuses = {result.task_id: result.status for result in results}

        assert statuses["close"] == OccurrenceStatus.COMPLETED
        assert statuses["open"] == OccurrenceStatus.COMPLETED

    def test_counts_for_date(self, manager: ChecklistManager) -> None:
        counts = manager.counts_for_date(
            MONDAY, now=_at(MONDAY, 12), completions={"close"}
        )

        assert counts[const.COUNT_TOTAL] == 4
        assert counts[const.STATUS_OVERDUE] == 1
        assert counts[const.STATUS_DUE_TODAY] == 2
        assert counts[const.STATUS_COMPLETED] == 1
        assert counts[const.COUNT_NEW] == 0

    @freeze_time("2024-01-08 02:00:00")
    def test_now_defaults_to_clock(self, manager: ChecklistManager) -> None:
        """02:00 UTC is 12:00 in Brisbane."""
        results = manager.checklist_for_date(MONDAY)
        statuses = {result.task_id: result.status for result in results}

        assert statuses["open"] == OccurrenceStatus.OVERDUE
        assert statuses["close"] == OccurrenceStatus.DUE_TODAY

    def test_new_task_badge_attached(self) -> None:
        mgr = ChecklistManager({const.CONF_TIME_ZONE: "Australia/Brisbane"})
        mgr.load_tasks(
            [
                {
                    "id": "fresh",
                    "frequencies": ["every_day"],
                    "due_time": "17:00",
                    "created_at": "2024-01-07T22:00:00Z",
                }
            ]
        )

        [result] = mgr.checklist_for_date(MONDAY, now=_at(MONDAY, 10))
        assert result.is_new
        assert mgr.counts_for_date(MONDAY, now=_at(MONDAY, 10))[const.COUNT_NEW] == 1

    def test_evaluate_single_task(self, manager: ChecklistManager) -> None:
        task = manager.get_task("eom")
        assert task is not None

        result = manager.evaluate_task(task, date(2024, 1, 31), now=_at(MONDAY, 12))

        assert result.occurs
        assert result.status == OccurrenceStatus.NOT_DUE_YET


# =============================================================================
# TEST: CALENDAR RANGE
# =============================================================================


class TestCalendarForRange:
    """Test calendar range views."""

    def test_every_date_present(self, manager: ChecklistManager) -> None:
        by_date = manager.calendar_for_range(
            date(2024, 1, 1), date(2024, 1, 7), now=_at(date(2024, 1, 3), 12)
        )

        assert list(by_date) == [date(2024, 1, day) for day in range(1, 8)]
        assert by_date[date(2024, 1, 7)] == []
        assert {result.task_id for result in by_date[date(2024, 1, 1)]} == {
            "open",
            "close",
            "weekly",
        }

    def test_statuses_relative_to_now(self, manager: ChecklistManager) -> None:
        by_date = manager.calendar_for_range(
            date(2024, 1, 1),
            date(2024, 1, 5),
            now=_at(date(2024, 1, 3), 12),
            completions={date(2024, 1, 2): {"open"}},
        )

        def status(day: int, task_id: str) -> OccurrenceStatus:
            return next(
                result.status
                for result in by_date[date(2024, 1, day)]
                if result.task_id == task_id
            )

        assert status(1, "close") == OccurrenceStatus.MISSED
        assert status(2, "open") == OccurrenceStatus.COMPLETED
        assert status(3, "open") == OccurrenceStatus.OVERDUE
        assert status(5, "close") == OccurrenceStatus.NOT_DUE_YET

    def test_holidays_shift_month_end(self, manager: ChecklistManager) -> None:
        manager.load_holidays([{"date": "2024-01-31", "name": "Company day"}])

        by_date = manager.calendar_for_range(
            date(2024, 1, 29), date(2024, 1, 31), now=_at(MONDAY, 12)
        )

        assert "eom" in {result.task_id for result in by_date[date(2024, 1, 30)]}
        assert "eom" not in {result.task_id for result in by_date[date(2024, 1, 31)]}
