"""Engine modules for the task checklist.

Contains pure computation engines:
- holiday_calendar: Public holidays and weekend/holiday shifts
- frequency: Frequency rule variants and the single string conversion point
- recurrence_engine: Occurrence membership per date
- visibility: Visibility window (creation/publish/start/end)
- status_engine: Occurrence lifecycle status
"""

# Use relative imports within package to avoid mypy module resolution issues
from .frequency import (
    FrequencyRule,
    FrequencyTag,
    parse_frequencies,
    parse_frequency,
)
from .holiday_calendar import HolidayCalendar, HolidayEntry
from .recurrence_engine import (
    RecurrenceEngine,
    task_occurrences_between,
    task_occurs_on,
)
from .status_engine import (
    EvaluationContext,
    OccurrenceResult,
    OccurrenceStatus,
    StatusEngine,
    status_from_string,
)
from .task_template import TaskTemplate
from .visibility import VisibilityWindow, compute_visibility_window, is_visible_on

__all__ = [
    "EvaluationContext",
    "FrequencyRule",
    "FrequencyTag",
    "HolidayCalendar",
    "HolidayEntry",
    "OccurrenceResult",
    "OccurrenceStatus",
    "RecurrenceEngine",
    "StatusEngine",
    "TaskTemplate",
    "VisibilityWindow",
    "compute_visibility_window",
    "is_visible_on",
    "parse_frequencies",
    "parse_frequency",
    "status_from_string",
    "task_occurrences_between",
    "task_occurs_on",
]
