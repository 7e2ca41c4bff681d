"""Checklist Manager - batch evaluation of tasks against business dates.

This manager is the caller the engines are written for:
- Holds the business timezone and the holiday calendar for one batch
- Converts raw task records once (helpers/record_helpers.py)
- Reads the clock once per call when the caller does not pass ``now``
- Evaluates every task x date through StatusEngine and attaches the badge view

NOT responsible for:
- Persisting completions or statuses (callers pass them in)
- Recurrence or status rules (engines/)
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import replace
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .. import const
from ..engines.holiday_calendar import HolidayCalendar
from ..engines.recurrence_engine import task_occurrences_between
from ..engines.status_engine import EvaluationContext, OccurrenceResult, StatusEngine
from ..helpers.badge_helpers import is_new_task
from ..helpers.record_helpers import build_holiday_calendar, parse_task_records
from ..helpers.report_helpers import count_statuses
from ..utils.dt_utils import dt_date_range, local_now, resolve_timezone

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from ..engines.task_template import TaskTemplate
    from ..type_defs import EngineConfig, StatusCounts


__all__ = ["CONFIG_SCHEMA", "ChecklistManager"]

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.CONF_TIME_ZONE, default=const.DEFAULT_BUSINESS_TIME_ZONE
        ): vol.Any(None, str),
        vol.Optional(
            const.CONF_NEW_TASK_BADGE_HOURS, default=const.DEFAULT_NEW_TASK_BADGE_HOURS
        ): vol.All(vol.Coerce(int), vol.Range(min=0)),
    },
    extra=vol.ALLOW_EXTRA,
)


class ChecklistManager:
    """Evaluates loaded tasks for checklist, calendar and report views.

    One instance serves one batch; engine objects it hands out are immutable
    and can be shared across threads.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize the manager.

        Args:
            config: Optional EngineConfig; missing keys use const.DEFAULT_* values

        Raises:
            vol.Invalid: If new_task_badge_hours is not a non-negative integer.
        """
        options = CONFIG_SCHEMA(dict(config or {}))
        self._tz: ZoneInfo = resolve_timezone(options[const.CONF_TIME_ZONE])
        self._badge_hours: int = options[const.CONF_NEW_TASK_BADGE_HOURS]
        self._calendar = HolidayCalendar.empty()
        self._tasks: dict[str, TaskTemplate] = {}

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def tz(self) -> ZoneInfo:
        """Business timezone."""
        return self._tz

    @property
    def badge_hours(self) -> int:
        """Length of the new-task badge window in hours."""
        return self._badge_hours

    @property
    def calendar(self) -> HolidayCalendar:
        """Holiday calendar of the current batch."""
        return self._calendar

    @property
    def tasks(self) -> list[TaskTemplate]:
        """Loaded tasks in load order."""
        return list(self._tasks.values())

    def get_task(self, task_id: str) -> TaskTemplate | None:
        """Return the loaded task with ``task_id``, if any."""
        return self._tasks.get(task_id)

    # =========================================================================
    # Loading
    # =========================================================================

    def load_holidays(
        self, records: Iterable[Mapping[str, Any]] | None
    ) -> HolidayCalendar:
        """Replace the batch holiday calendar from holiday store rows."""
        self._calendar = build_holiday_calendar(records)
        const.LOGGER.debug(
            "ChecklistManager: Loaded %s holiday(s)", len(self._calendar)
        )
        return self._calendar

    def load_tasks(self, records: Iterable[Mapping[str, Any]]) -> list[TaskTemplate]:
        """Replace the loaded tasks from task store rows.

        Unrecognized frequency tags and unusable records are logged and skipped.
        A later record with the same id replaces an earlier one.
        """
        result = parse_task_records(records)

        for task_id, dropped in result.dropped_tags.items():
            const.LOGGER.warning(
                "Task %s: ignoring unrecognized frequency tag(s): %s",
                task_id,
                ", ".join(dropped),
            )
        for index, reason in result.rejected:
            const.LOGGER.warning("Skipping task record #%s: %s", index, reason)

        self._tasks = {task.id: task for task in result.tasks}
        const.LOGGER.debug("ChecklistManager: Loaded %s task(s)", len(self._tasks))
        return self.tasks

    # =========================================================================
    # Evaluation
    # =========================================================================

    def _resolve_now(self, now: datetime | None) -> datetime:
        if now is not None:
            return now
        _, current = local_now(self._tz)
        return current

    def evaluate_task(
        self,
        task: TaskTemplate,
        target: date,
        now: datetime | None = None,
        *,
        is_completed: bool = False,
        persisted_status: str | None = None,
    ) -> OccurrenceResult:
        """Evaluate one task on one date, including the new-task badge."""
        ctx = EvaluationContext(
            target_date=target,
            now=self._resolve_now(now),
            calendar=self._calendar,
            tz=self._tz,
        )
        return self._evaluate(task, ctx, is_completed, persisted_status)

    def _evaluate(
        self,
        task: TaskTemplate,
        ctx: EvaluationContext,
        is_completed: bool,
        persisted_status: str | None,
    ) -> OccurrenceResult:
        result = StatusEngine.evaluate(
            task, ctx, is_completed=is_completed, persisted_status=persisted_status
        )
        if not result.occurs:
            return result
        is_new = is_new_task(
            task,
            ctx.target_date,
            ctx.now,
            ctx.calendar,
            ctx.tz,
            is_completed=is_completed,
            badge_hours=self._badge_hours,
        )
        return replace(result, is_new=is_new) if is_new else result

    def checklist_for_date(
        self,
        target: date,
        now: datetime | None = None,
        completions: Collection[str] | None = None,
        persisted: Mapping[str, str] | None = None,
    ) -> list[OccurrenceResult]:
        """Return the occurrences of all loaded tasks on ``target``.

        Args:
            target: Business date
            now: Current instant; read from the clock when omitted
            completions: Ids of tasks completed on ``target``
            persisted: Stored status per task id for ``target``

        Returns:
            Occurring results ordered by due instant, then task id
        """
        ctx = EvaluationContext(
            target_date=target,
            now=self._resolve_now(now),
            calendar=self._calendar,
            tz=self._tz,
        )
        completed_ids = completions or ()
        stored = persisted or {}

        results = [
            self._evaluate(
                task, ctx, task.id in completed_ids, stored.get(task.id)
            )
            for task in self._tasks.values()
        ]
        occurring = [result for result in results if result.occurs]
        occurring.sort(key=lambda result: (result.due_at, result.task_id))
        return occurring

    def calendar_for_range(
        self,
        start: date,
        end: date,
        now: datetime | None = None,
        completions: Mapping[date, Collection[str]] | None = None,
    ) -> dict[date, list[OccurrenceResult]]:
        """Return occurrences per date from ``start`` to ``end`` inclusive.

        Every date of the range is present, with an empty list when nothing
        occurs.
        """
        current = self._resolve_now(now)
        completed_by_date = completions or {}
        by_date: dict[date, list[OccurrenceResult]] = {
            day: [] for day in dt_date_range(start, end)
        }

        for task in self._tasks.values():
            for day in task_occurrences_between(
                task, start, end, self._calendar, self._tz
            ):
                ctx = EvaluationContext(
                    target_date=day, now=current, calendar=self._calendar, tz=self._tz
                )
                is_completed = task.id in completed_by_date.get(day, ())
                by_date[day].append(self._evaluate(task, ctx, is_completed, None))

        for results in by_date.values():
            results.sort(key=lambda result: (result.due_at, result.task_id))
        return by_date

    def counts_for_date(
        self,
        target: date,
        now: datetime | None = None,
        completions: Collection[str] | None = None,
        persisted: Mapping[str, str] | None = None,
    ) -> StatusCounts:
        """Status counts for the checklist of ``target``."""
        return count_statuses(
            self.checklist_for_date(target, now, completions, persisted)
        )
