"""Tests for the visibility window calculator."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from task_checklist.engines.task_template import TaskTemplate
from task_checklist.engines.visibility import (
    VisibilityWindow,
    compute_visibility_window,
    is_visible_on,
)


class TestVisibilityWindow:
    """Test window bounds."""

    def test_unbounded_window_contains_everything(self) -> None:
        window = VisibilityWindow()

        assert window.contains(date(1999, 1, 1))
        assert window.contains(date(2099, 12, 31))
        assert not window.is_empty

    def test_bounds_are_inclusive(self) -> None:
        window = VisibilityWindow(start=date(2024, 1, 8), end=date(2024, 1, 12))

        assert not window.contains(date(2024, 1, 7))
        assert window.contains(date(2024, 1, 8))
        assert window.contains(date(2024, 1, 12))
        assert not window.contains(date(2024, 1, 13))

    def test_end_before_start_is_never_visible(self) -> None:
        window = VisibilityWindow(start=date(2024, 2, 1), end=date(2024, 1, 1))

        assert window.is_empty
        assert not window.contains(date(2024, 1, 15))
        assert not window.contains(date(2024, 2, 1))


class TestComputeVisibilityWindow:
    """Test derivation from task fields."""

    def test_no_dates_gives_open_window(
        self, make_task: Callable[..., TaskTemplate], tz: ZoneInfo
    ) -> None:
        assert compute_visibility_window(make_task(), tz) == VisibilityWindow()

    def test_start_is_latest_of_created_publish_and_start(
        self, make_task: Callable[..., TaskTemplate], tz: ZoneInfo
    ) -> None:
        task = make_task(
            created_at=datetime(2024, 1, 2, 0, 0, tzinfo=UTC),
            publish_delay=date(2024, 1, 10),
            start_date=date(2024, 1, 5),
            end_date=date(2024, 3, 1),
        )

        assert compute_visibility_window(task, tz) == VisibilityWindow(
            start=date(2024, 1, 10), end=date(2024, 3, 1)
        )

    def test_created_at_converted_to_business_date(
        self, make_task: Callable[..., TaskTemplate], tz: ZoneInfo
    ) -> None:
        """14:30 UTC on 7 Jan is already 8 Jan in Brisbane."""
        task = make_task(created_at=datetime(2024, 1, 7, 14, 30, tzinfo=UTC))

        assert compute_visibility_window(task, tz).start == date(2024, 1, 8)
        assert not is_visible_on(task, date(2024, 1, 7), tz)
        assert is_visible_on(task, date(2024, 1, 8), tz)

    def test_start_date_tomorrow(
        self, make_task: Callable[..., TaskTemplate], tz: ZoneInfo
    ) -> None:
        task = make_task(start_date=date(2024, 1, 9))

        assert not is_visible_on(task, date(2024, 1, 8), tz)
