"""Type definitions for raw task checklist records.

Raw records arrive from the task store and the holiday store as plain dicts.
TypedDict describes the keys we read; the engines themselves work on the frozen
dataclasses built by helpers/record_helpers.py.

NOTE: TypedDict is STATIC ANALYSIS ONLY. All runtime coercion (bad dates,
bad times, unknown frequency tags) happens in record_helpers.py.
"""

from typing import NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
TimeOfDay = str  # "HH:MM" or "HH:MM:SS", or "anytime"


# =============================================================================
# Raw input records
# =============================================================================


class TaskRecord(TypedDict):
    """Task template as stored by the task-management collaborator."""

    id: TaskId
    title: NotRequired[str]
    frequencies: NotRequired[list[str] | str]
    due_time: NotRequired[TimeOfDay | None]
    due_date: NotRequired[ISODate | None]  # once-off tasks only
    created_at: NotRequired[ISODatetime | None]  # UTC
    publish_delay: NotRequired[ISODate | None]
    start_date: NotRequired[ISODate | None]
    end_date: NotRequired[ISODate | None]
    active: NotRequired[bool]
    publish_status: NotRequired[str]  # legacy: "active" / "inactive" / "draft"


class HolidayRecord(TypedDict):
    """Public holiday row from the holiday store."""

    date: ISODate
    name: str
    region: NotRequired[str | None]


# =============================================================================
# Configuration
# =============================================================================


class EngineConfig(TypedDict, total=False):
    """Configuration for ChecklistManager.

    All fields are optional (total=False); missing keys use const.DEFAULT_* values.
    """

    time_zone: str  # IANA zone name, e.g. "Australia/Sydney"
    new_task_badge_hours: int  # length of the "new task" badge window


# =============================================================================
# Report output
# =============================================================================


class StatusCounts(TypedDict):
    """Per-date counts returned by report_helpers.count_statuses()."""

    total: int
    new: int
    not_due_yet: int
    due_today: int
    overdue: int
    missed: int
    completed: int
