"""Record conversion helpers for the task checklist.

Converts raw rows from the task store and the holiday store into the frozen
engine types. Validation uses voluptuous schemas whose field validators are
lenient: a malformed date or time becomes None (the documented fallback)
instead of rejecting the whole task. Only structurally broken records (not a
mapping, missing id) are rejected.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

import voluptuous as vol

from .. import const
from ..engines.frequency import parse_frequencies
from ..engines.holiday_calendar import HolidayCalendar, HolidayEntry
from ..engines.task_template import TaskTemplate
from ..utils.dt_utils import dt_parse_date, dt_parse_time, dt_to_utc


class InvalidTaskRecordError(ValueError):
    """Raised when a task record cannot be turned into a TaskTemplate."""


# =============================================================================
# Field validators (lenient ones never raise)
# =============================================================================


def lenient_date(value: Any) -> date | None:
    """Parse a date field; malformed values become None."""
    if isinstance(value, (str, date)):
        return dt_parse_date(value)
    return None


def required_date(value: Any) -> date:
    """Parse a date that must be present and valid."""
    parsed = lenient_date(value)
    if parsed is None:
        raise vol.Invalid(f"invalid date: {value!r}")
    return parsed


def lenient_time(value: Any) -> time | None:
    """Parse a due time; "anytime", empty and malformed values become None."""
    if isinstance(value, (str, time)):
        return dt_parse_time(value)
    return None


def lenient_utc_datetime(value: Any) -> datetime | None:
    """Parse a UTC timestamp; malformed values become None."""
    if isinstance(value, (str, datetime)):
        return dt_to_utc(value)
    return None


def lenient_tags(value: Any) -> list[str]:
    """Normalize the frequencies field to a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def lenient_bool(value: Any) -> bool | None:
    """Accept real booleans, 0/1 and common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "y", "on", const.PUBLISH_STATUS_ACTIVE}:
            return True
        if lowered in {"0", "false", "no", "n", "off", "inactive"}:
            return False
    return None


def active_flag(value: Any) -> bool | None:
    """Parse the active flag; any value that is not clearly active is inactive.

    Only None (no flag) is passed through, so the publish status can decide.
    """
    if value is None:
        return None
    return lenient_bool(value) is True


# =============================================================================
# Schemas
# =============================================================================

TASK_RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TASK_ID): vol.All(
            vol.Any(str, int), vol.Coerce(str), vol.Strip, vol.Length(min=1)
        ),
        vol.Optional(const.FIELD_TASK_TITLE, default=""): vol.Any(
            None, vol.Coerce(str)
        ),
        vol.Optional(const.FIELD_TASK_FREQUENCIES, default=list): lenient_tags,
        vol.Optional(const.FIELD_TASK_DUE_TIME): lenient_time,
        vol.Optional(const.FIELD_TASK_DUE_DATE): lenient_date,
        vol.Optional(const.FIELD_TASK_CREATED_AT): lenient_utc_datetime,
        vol.Optional(const.FIELD_TASK_PUBLISH_DELAY): lenient_date,
        vol.Optional(const.FIELD_TASK_START_DATE): lenient_date,
        vol.Optional(const.FIELD_TASK_END_DATE): lenient_date,
        vol.Optional(const.FIELD_TASK_ACTIVE): active_flag,
        vol.Optional(const.FIELD_TASK_PUBLISH_STATUS): vol.Any(None, vol.Coerce(str)),
    },
    extra=vol.ALLOW_EXTRA,
)

HOLIDAY_RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_HOLIDAY_DATE): required_date,
        vol.Optional(const.FIELD_HOLIDAY_NAME, default=""): vol.Any(
            None, vol.Coerce(str)
        ),
        vol.Optional(const.FIELD_HOLIDAY_REGION): vol.Any(None, vol.Coerce(str)),
    },
    extra=vol.ALLOW_EXTRA,
)


# =============================================================================
# Task records
# =============================================================================


@dataclass
class TaskLoadResult:
    """Outcome of converting a batch of task records.

    Attributes:
        tasks: Converted templates, in input order
        dropped_tags: Unrecognized frequency strings per task id
        rejected: (record index, reason) for records that could not be converted
    """

    tasks: list[TaskTemplate] = field(default_factory=list)
    dropped_tags: dict[str, list[str]] = field(default_factory=dict)
    rejected: list[tuple[int, str]] = field(default_factory=list)


def _resolve_active(data: Mapping[str, Any]) -> bool:
    active = data.get(const.FIELD_TASK_ACTIVE)
    if active is not None:
        return active
    publish_status = data.get(const.FIELD_TASK_PUBLISH_STATUS)
    if publish_status is not None:
        return publish_status.strip().lower() == const.PUBLISH_STATUS_ACTIVE
    return True


def parse_task_record(record: Mapping[str, Any]) -> tuple[TaskTemplate, list[str]]:
    """Convert one raw task record.

    Args:
        record: Row from the task store (see type_defs.TaskRecord)

    Returns:
        (TaskTemplate, unrecognized frequency strings)

    Raises:
        InvalidTaskRecordError: If the record is not a mapping or has no id.
    """
    if isinstance(record, Mapping):
        record = dict(record)
    try:
        data = TASK_RECORD_SCHEMA(record)
    except vol.Invalid as err:
        raise InvalidTaskRecordError(str(err)) from err

    rules, dropped = parse_frequencies(data[const.FIELD_TASK_FREQUENCIES])
    task = TaskTemplate(
        id=data[const.FIELD_TASK_ID],
        title=data.get(const.FIELD_TASK_TITLE) or "",
        rules=rules,
        due_time=data.get(const.FIELD_TASK_DUE_TIME),
        due_date=data.get(const.FIELD_TASK_DUE_DATE),
        created_at=data.get(const.FIELD_TASK_CREATED_AT),
        publish_delay=data.get(const.FIELD_TASK_PUBLISH_DELAY),
        start_date=data.get(const.FIELD_TASK_START_DATE),
        end_date=data.get(const.FIELD_TASK_END_DATE),
        active=_resolve_active(data),
    )
    return task, dropped


def parse_task_records(records: Iterable[Mapping[str, Any]]) -> TaskLoadResult:
    """Convert a batch of task records, collecting problems instead of raising."""
    result = TaskLoadResult()
    for index, record in enumerate(records):
        try:
            task, dropped = parse_task_record(record)
        except InvalidTaskRecordError as err:
            result.rejected.append((index, str(err)))
            continue
        result.tasks.append(task)
        if dropped:
            result.dropped_tags[task.id] = dropped
    return result


# =============================================================================
# Holiday records
# =============================================================================


def parse_holiday_record(record: Mapping[str, Any]) -> HolidayEntry | None:
    """Convert one holiday row, or None if its date is unusable."""
    try:
        data = HOLIDAY_RECORD_SCHEMA(record)
    except vol.Invalid:
        return None
    return HolidayEntry(
        date=data[const.FIELD_HOLIDAY_DATE],
        name=data.get(const.FIELD_HOLIDAY_NAME) or "",
        region=data.get(const.FIELD_HOLIDAY_REGION),
    )


def build_holiday_calendar(
    records: Iterable[Mapping[str, Any]] | None,
) -> HolidayCalendar:
    """Build a HolidayCalendar from holiday rows in any order.

    Unusable rows are skipped; no data at all gives an empty calendar.
    """
    if not records:
        return HolidayCalendar.empty()

    entries: list[HolidayEntry] = []
    skipped = 0
    for record in records:
        entry = parse_holiday_record(record)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        const.LOGGER.warning("Skipped %s holiday record(s) with unusable dates", skipped)
    return HolidayCalendar(entries)
