"""Visibility Window Calculator.

A task may only produce occurrences inside its visibility window:

    start = max(business date of created_at, publish_delay, start_date)
    end   = end_date (or unbounded)

The window is computed once per task per evaluation and checked before the
recurrence rules are consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from ..utils.dt_utils import to_local

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from .task_template import TaskTemplate


@dataclass(frozen=True, slots=True)
class VisibilityWindow:
    """Inclusive date range during which a task may occur.

    ``None`` bounds are open. A window whose end precedes its start is empty.
    """

    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        """True when the end date precedes the start date (never visible)."""
        return self.start is not None and self.end is not None and self.end < self.start

    def contains(self, day: date) -> bool:
        """Return True if ``day`` lies inside the window."""
        if self.is_empty:
            return False
        if self.start is not None and day < self.start:
            return False
        return not (self.end is not None and day > self.end)


def compute_visibility_window(
    task: TaskTemplate, tz: ZoneInfo | None = None
) -> VisibilityWindow:
    """Derive the visibility window of a task.

    Args:
        task: Task template
        tz: Business timezone used to turn created_at into a calendar date

    Returns:
        VisibilityWindow; never raises, even for inconsistent dates.
    """
    anchors: list[date] = []
    if task.created_at is not None:
        created_day, _ = to_local(task.created_at, tz)
        anchors.append(created_day)
    if task.publish_delay is not None:
        anchors.append(task.publish_delay)
    if task.start_date is not None:
        anchors.append(task.start_date)

    return VisibilityWindow(start=max(anchors) if anchors else None, end=task.end_date)


def is_visible_on(task: TaskTemplate, day: date, tz: ZoneInfo | None = None) -> bool:
    """Shortcut for ``compute_visibility_window(task, tz).contains(day)``."""
    return compute_visibility_window(task, tz).contains(day)
