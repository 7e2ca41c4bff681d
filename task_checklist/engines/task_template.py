"""Task template - the immutable view of a task the engines evaluate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time

from .frequency import FrequencyRule


@dataclass(frozen=True, slots=True)
class TaskTemplate:
    """A recurring (or one-off) checklist task.

    Attributes:
        id: Task identifier from the task store
        title: Display title
        rules: Assigned frequency rules, OR-combined; may be empty
        due_time: Local due time of day, or None for "anytime" (end of day)
        due_date: Explicit due date for once-off tasks
        created_at: Creation instant (UTC)
        publish_delay: No occurrences before this business date
        start_date: No occurrences before this business date
        end_date: No occurrences after this business date
        active: Published/active flag; inactive tasks never occur
    """

    id: str
    title: str = ""
    rules: tuple[FrequencyRule, ...] = field(default_factory=tuple)
    due_time: time | None = None
    due_date: date | None = None
    created_at: datetime | None = None
    publish_delay: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    active: bool = True
