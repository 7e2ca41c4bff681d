"""Status Engine - Pure logic for occurrence lifecycle status.

Combines recurrence membership, the visibility window, the current instant,
the due time and the completion flag into one of five states:

    not_due_yet -> due_today -> overdue        (on the occurrence date)
    not_due_yet -> missed                      (date passed without completion)
    any         -> completed                   (completion always wins)

ARCHITECTURE: Stateless static methods operating on passed-in data. The current
instant is always a parameter; nothing in this module reads the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import as_local, as_utc, combine_local
from .recurrence_engine import task_occurs_on

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from .holiday_calendar import HolidayCalendar
    from .task_template import TaskTemplate


class OccurrenceStatus(StrEnum):
    """Lifecycle status of a task occurrence."""

    NOT_DUE_YET = const.STATUS_NOT_DUE_YET
    DUE_TODAY = const.STATUS_DUE_TODAY
    OVERDUE = const.STATUS_OVERDUE
    MISSED = const.STATUS_MISSED
    COMPLETED = const.STATUS_COMPLETED


# =============================================================================
# EVALUATION DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Everything an evaluation needs besides the task itself.

    Attributes:
        target_date: Business date being evaluated
        now: Current instant (timezone-aware; naive values are read as UTC)
        calendar: Holiday calendar for the batch
        tz: Business timezone
    """

    target_date: date
    now: datetime
    calendar: HolidayCalendar
    tz: ZoneInfo | None = None


@dataclass(frozen=True, slots=True)
class OccurrenceResult:
    """Per (task, date) output consumed by checklist, calendar and report views."""

    task_id: str
    date: date
    occurs: bool
    status: OccurrenceStatus
    due_at: datetime | None = None
    is_new: bool = False
    persisted_status: OccurrenceStatus | None = None


# =============================================================================
# STATUS ENGINE
# =============================================================================


class StatusEngine:
    """Pure logic engine for occurrence status.

    All methods are static - no instance state.
    """

    @staticmethod
    def due_instant(
        task: TaskTemplate, target: date, tz: ZoneInfo | None = None
    ) -> datetime:
        """Return the aware instant at which the occurrence on ``target`` is due.

        Tasks without a usable due time are due at 23:59 business time.
        """
        return combine_local(target, task.due_time, tz)

    @staticmethod
    def status_for_occurrence(
        task: TaskTemplate,
        target: date,
        now: datetime,
        *,
        is_completed: bool,
        tz: ZoneInfo | None = None,
    ) -> OccurrenceStatus:
        """Status of an occurrence already known to exist on ``target``.

        Priority order (first match wins):
          P1: completed
          P2: target after today      -> not_due_yet
          P3: target is today         -> due_today until due instant (inclusive),
                                         overdue afterwards
          P4: target before today     -> missed
        """
        if is_completed:
            return OccurrenceStatus.COMPLETED

        now_local = as_local(now, tz)
        today = now_local.date()

        if target > today:
            return OccurrenceStatus.NOT_DUE_YET

        if target == today:
            due_at = StatusEngine.due_instant(task, target, tz)
            # Compare in UTC so DST folds cannot reorder the two instants.
            if as_utc(now_local) <= as_utc(due_at):
                return OccurrenceStatus.DUE_TODAY
            return OccurrenceStatus.OVERDUE

        return OccurrenceStatus.MISSED

    @staticmethod
    def calculate_status(
        task: TaskTemplate,
        target: date,
        now: datetime,
        is_completed: bool,
        calendar: HolidayCalendar,
        tz: ZoneInfo | None = None,
    ) -> OccurrenceStatus:
        """Calculate the lifecycle status of ``task`` on ``target``.

        Callers normally pre-filter dates without an occurrence; if asked
        anyway, such dates report not_due_yet.
        """
        if is_completed:
            return OccurrenceStatus.COMPLETED

        if not task_occurs_on(task, target, calendar, tz):
            const.LOGGER.debug(
                "StatusEngine: Task %s has no occurrence on %s", task.id, target
            )
            return OccurrenceStatus.NOT_DUE_YET

        return StatusEngine.status_for_occurrence(
            task, target, now, is_completed=False, tz=tz
        )

    @staticmethod
    def evaluate(
        task: TaskTemplate,
        ctx: EvaluationContext,
        *,
        is_completed: bool = False,
        persisted_status: str | None = None,
    ) -> OccurrenceResult:
        """Evaluate occurrence and status of ``task`` in one pass.

        Completion always wins. Otherwise a recognized persisted status
        (written by another component) takes precedence over the computed one,
        but only on dates where the task occurs.
        """
        occurs = task_occurs_on(task, ctx.target_date, ctx.calendar, ctx.tz)
        persisted = status_from_string(persisted_status)
        if is_completed:
            status = OccurrenceStatus.COMPLETED
        elif occurs:
            computed = StatusEngine.status_for_occurrence(
                task, ctx.target_date, ctx.now, is_completed=False, tz=ctx.tz
            )
            status = StatusEngine.resolve_status(computed, persisted)
        else:
            status = OccurrenceStatus.NOT_DUE_YET

        return OccurrenceResult(
            task_id=task.id,
            date=ctx.target_date,
            occurs=occurs,
            status=status,
            due_at=StatusEngine.due_instant(task, ctx.target_date, ctx.tz)
            if occurs
            else None,
            persisted_status=persisted,
        )

    @staticmethod
    def resolve_status(
        computed: OccurrenceStatus, persisted: OccurrenceStatus | None
    ) -> OccurrenceStatus:
        """Persisted status wins when present; otherwise the computed one."""
        return persisted if persisted is not None else computed


def status_from_string(raw: str | None) -> OccurrenceStatus | None:
    """Map a stored status string onto OccurrenceStatus.

    Legacy values ("done", "pending", "in_progress") are translated; anything
    else unrecognized returns None so that the computed status is used.
    """
    if not raw or not isinstance(raw, str):
        return None
    key = raw.strip().lower()
    key = const.LEGACY_STATUS_ALIASES.get(key, key)
    try:
        return OccurrenceStatus(key)
    except ValueError:
        return None
