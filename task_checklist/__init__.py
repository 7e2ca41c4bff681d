# File: __init__.py
"""Task checklist recurrence and status engine.

Decides, for a task template and a business date, whether the task occurs on
that date and what lifecycle status the occurrence has. Accounts for public
holidays, a business timezone, a visibility window and the current instant
(always passed in explicitly).

Layers:
- engines/: Pure computation (holiday calendar, frequency rules, recurrence,
  visibility, status)
- helpers/: Record conversion, badge and report views
- managers/: Batch caller (ChecklistManager)
- utils/: Timezone and parsing utilities
"""

from .engines import (
    EvaluationContext,
    FrequencyRule,
    FrequencyTag,
    HolidayCalendar,
    HolidayEntry,
    OccurrenceResult,
    OccurrenceStatus,
    RecurrenceEngine,
    StatusEngine,
    TaskTemplate,
    VisibilityWindow,
    compute_visibility_window,
    is_visible_on,
    parse_frequencies,
    parse_frequency,
    status_from_string,
    task_occurrences_between,
    task_occurs_on,
)
from .helpers.record_helpers import (
    InvalidTaskRecordError,
    build_holiday_calendar,
    parse_task_record,
    parse_task_records,
)
from .managers import ChecklistManager

__all__ = [
    "ChecklistManager",
    "EvaluationContext",
    "FrequencyRule",
    "FrequencyTag",
    "HolidayCalendar",
    "HolidayEntry",
    "InvalidTaskRecordError",
    "OccurrenceResult",
    "OccurrenceStatus",
    "RecurrenceEngine",
    "StatusEngine",
    "TaskTemplate",
    "VisibilityWindow",
    "build_holiday_calendar",
    "compute_visibility_window",
    "is_visible_on",
    "parse_frequencies",
    "parse_frequency",
    "parse_task_record",
    "parse_task_records",
    "status_from_string",
    "task_occurrences_between",
    "task_occurs_on",
]
