"""New-task badge helpers.

A task shows a "new" badge on the day it first becomes visible, for a limited
window after it was activated. The badge is a derived view: it never changes
the lifecycle status of the occurrence.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..engines.recurrence_engine import task_occurs_on
from ..engines.status_engine import StatusEngine
from ..utils.dt_utils import as_utc, local_midnight

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from ..engines.holiday_calendar import HolidayCalendar
    from ..engines.task_template import TaskTemplate


def activation_instant(
    task: TaskTemplate, tz: ZoneInfo | None = None
) -> datetime | None:
    """Return the UTC instant a task became available, or None if unknown.

    The latest of created_at and the local midnights of publish_delay and
    start_date.
    """
    candidates: list[datetime] = []
    if task.created_at is not None:
        candidates.append(as_utc(task.created_at))
    if task.publish_delay is not None:
        candidates.append(local_midnight(task.publish_delay, tz))
    if task.start_date is not None:
        candidates.append(local_midnight(task.start_date, tz))
    return max(candidates) if candidates else None


def badge_window(
    task: TaskTemplate,
    target: date,
    tz: ZoneInfo | None = None,
    badge_hours: int = const.DEFAULT_NEW_TASK_BADGE_HOURS,
) -> tuple[datetime, datetime] | None:
    """Return the (start, end) UTC instants of the badge window.

    The window runs ``badge_hours`` from activation. Tasks with a specific due
    time close it early at the occurrence's due instant when that falls inside
    it; "anytime" tasks keep the full window.
    """
    start = activation_instant(task, tz)
    if start is None:
        return None
    end = start + timedelta(hours=badge_hours)
    if task.due_time is not None:
        due_at = as_utc(StatusEngine.due_instant(task, target, tz))
        if start <= due_at < end:
            end = due_at
    return start, end


def is_new_task(
    task: TaskTemplate,
    target: date,
    now: datetime,
    calendar: HolidayCalendar,
    tz: ZoneInfo | None = None,
    *,
    is_completed: bool = False,
    badge_hours: int = const.DEFAULT_NEW_TASK_BADGE_HOURS,
) -> bool:
    """Return True if ``task`` should carry the new badge on ``target`` at ``now``."""
    if is_completed:
        return False
    if not task_occurs_on(task, target, calendar, tz):
        return False
    if task_occurs_on(task, target - timedelta(days=1), calendar, tz):
        return False

    window = badge_window(task, target, tz, badge_hours)
    if window is None:
        return False
    start, end = window
    return start <= as_utc(now) <= end
