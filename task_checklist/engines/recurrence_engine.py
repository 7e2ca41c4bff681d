"""Recurrence Engine for the task checklist.

Decides whether a task occurs on a given business date:
- one rule at a time (rule_matches), OR-combined across a task's rules (occurs_on)
- month-anchored rules resolved with `dateutil.relativedelta` month arithmetic
  and the holiday calendar's forward/backward shifts
- range expansion for calendar views via `dateutil.rrule`

All dates are business-timezone calendar dates; callers convert instants with
utils/dt_utils.py before asking.

IMPORTANT: This module must NOT import from managers/ to avoid circular imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from dateutil.relativedelta import SA, relativedelta
from dateutil.rrule import DAILY, rrule

from .. import const
from .frequency import FrequencyRule, FrequencyTag
from .visibility import compute_visibility_window

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from .holiday_calendar import HolidayCalendar
    from .task_template import TaskTemplate


class RecurrenceEngine:
    """Occurrence membership for frequency rules against one holiday calendar.

    Handles all rule variants:
    - Weekly: EVERY_DAY (Mon-Sat), ONCE_WEEKLY (Monday), SPECIFIC_WEEKDAY
    - Monthly: ONCE_MONTHLY (last Saturday), START_OF_*, END_OF_*
    - One-off: ONCE_OFF (explicit due date)

    The engine holds no mutable state; one instance can be shared across
    threads for a whole batch.
    """

    __slots__ = ("_calendar",)

    def __init__(self, calendar: HolidayCalendar) -> None:
        """Initialize the engine with the batch's holiday calendar."""
        self._calendar = calendar

    @property
    def calendar(self) -> HolidayCalendar:
        """Holiday calendar used for month-anchored shifts."""
        return self._calendar

    # =========================================================================
    # Membership
    # =========================================================================

    def occurs_on(
        self,
        rules: Iterable[FrequencyRule],
        target: date,
        due_date: date | None = None,
    ) -> bool:
        """Return True if any rule produces an occurrence on ``target``.

        Args:
            rules: Frequency rules assigned to the task (may be empty)
            target: Business calendar date
            due_date: The task's explicit due date, used by ONCE_OFF

        Returns:
            False for an empty rule list.
        """
        return any(self.rule_matches(rule, target, due_date) for rule in set(rules))

    def rule_matches(
        self, rule: FrequencyRule, target: date, due_date: date | None = None
    ) -> bool:
        """Evaluate a single rule against ``target``."""
        tag = rule.tag
        weekday = target.weekday()

        if tag is FrequencyTag.EVERY_DAY:
            # Holidays are not skipped, only Sundays.
            return weekday != const.SUNDAY_WEEKDAY_INDEX

        if tag is FrequencyTag.SPECIFIC_WEEKDAY:
            return weekday == rule.weekday

        if tag is FrequencyTag.ONCE_WEEKLY:
            return weekday == const.MONDAY_WEEKDAY_INDEX

        if tag is FrequencyTag.ONCE_MONTHLY:
            return target == self.last_saturday_of_month(target.year, target.month)

        if tag in (FrequencyTag.START_OF_EVERY_MONTH, FrequencyTag.START_OF_MONTH):
            if rule.month is not None and rule.month != target.month:
                return False
            return target == self.start_of_month_occurrence(target.year, target.month)

        if tag in (FrequencyTag.END_OF_EVERY_MONTH, FrequencyTag.END_OF_MONTH):
            if rule.month is not None and rule.month != target.month:
                return False
            return target == self.end_of_month_occurrence(target.year, target.month)

        if tag is FrequencyTag.ONCE_OFF:
            return due_date is not None and target == due_date

        const.LOGGER.debug("RecurrenceEngine: Unhandled frequency tag %s", tag)
        return False

    # =========================================================================
    # Month anchors
    # =========================================================================

    def start_of_month_occurrence(self, year: int, month: int) -> date | None:
        """First day of the month shifted forward past Sundays and holidays.

        Returns None if the shift would leave the month.
        """
        first = date(year, month, 1)
        shifted = self._calendar.shift_forward_skip(
            first, skip_weekends=False, skip_holidays=True
        )
        return self._in_month_and_eligible(shifted, month)

    def end_of_month_occurrence(self, year: int, month: int) -> date | None:
        """Last day of the month shifted backward past Sundays and holidays.

        Returns None if the shift would leave the month.
        """
        last = date(year, month, 1) + relativedelta(day=31)
        shifted = self._calendar.shift_backward_skip(
            last, skip_weekends=False, skip_holidays=True
        )
        return self._in_month_and_eligible(shifted, month)

    @staticmethod
    def last_saturday_of_month(year: int, month: int) -> date | None:
        """Last Saturday of the month, or None if the month has none."""
        candidate = date(year, month, 1) + relativedelta(day=31, weekday=SA(-1))
        if candidate.month != month:
            return None
        return candidate

    def _in_month_and_eligible(self, day: date, month: int) -> date | None:
        # A shift that crossed the month boundary (or gave up) is not wrapped.
        if day.month != month or self._calendar.is_skipped(day):
            return None
        return day

    # =========================================================================
    # Range expansion
    # =========================================================================

    def occurrences_between(
        self,
        rules: Iterable[FrequencyRule],
        start: date,
        end: date,
        due_date: date | None = None,
    ) -> list[date]:
        """List every date from ``start`` to ``end`` (inclusive) with an occurrence.

        The range is capped at MAX_OCCURRENCE_RANGE_DAYS.
        """
        rule_set = frozenset(rules)
        if not rule_set or end < start:
            return []

        limit = start + timedelta(days=const.MAX_OCCURRENCE_RANGE_DAYS - 1)
        if end > limit:
            const.LOGGER.debug(
                "RecurrenceEngine: Range %s..%s capped at %s", start, end, limit
            )
            end = limit

        days = rrule(
            DAILY,
            dtstart=datetime.combine(start, datetime.min.time()),
            until=datetime.combine(end, datetime.min.time()),
        )
        return [
            day.date()
            for day in days
            if self.occurs_on(rule_set, day.date(), due_date)
        ]


# =============================================================================
# Task-level helpers
# =============================================================================


def task_occurs_on(
    task: TaskTemplate,
    target: date,
    calendar: HolidayCalendar,
    tz: ZoneInfo | None = None,
) -> bool:
    """Decide whether ``task`` has an occurrence on ``target``.

    Inactive tasks and dates outside the visibility window short-circuit to
    False before any rule is evaluated.
    """
    if not task.active:
        return False
    if not compute_visibility_window(task, tz).contains(target):
        return False
    return RecurrenceEngine(calendar).occurs_on(task.rules, target, task.due_date)


def task_occurrences_between(
    task: TaskTemplate,
    start: date,
    end: date,
    calendar: HolidayCalendar,
    tz: ZoneInfo | None = None,
) -> list[date]:
    """Occurrence dates of ``task`` within ``start``..``end``, window applied."""
    if not task.active:
        return []
    window = compute_visibility_window(task, tz)
    if window.is_empty:
        return []
    if window.start is not None:
        start = max(start, window.start)
    if window.end is not None:
        end = min(end, window.end)
    return RecurrenceEngine(calendar).occurrences_between(
        task.rules, start, end, task.due_date
    )
