"""Reporting helper functions for the task checklist.

Read-only data shaping for checklist badges and per-date summaries.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const
from ..engines.status_engine import OccurrenceStatus

if TYPE_CHECKING:
    from ..engines.status_engine import OccurrenceResult
    from ..type_defs import StatusCounts


def count_statuses(results: Iterable[OccurrenceResult]) -> StatusCounts:
    """Count occurring results per status.

    Results for dates where the task does not occur are ignored.

    Returns:
        StatusCounts with every status key present (zero when absent)
    """
    by_status: Counter[OccurrenceStatus] = Counter()
    total = 0
    new = 0
    for result in results:
        if not result.occurs:
            continue
        total += 1
        by_status[result.status] += 1
        if result.is_new:
            new += 1

    return {
        const.COUNT_TOTAL: total,
        const.COUNT_NEW: new,
        const.STATUS_NOT_DUE_YET: by_status[OccurrenceStatus.NOT_DUE_YET],
        const.STATUS_DUE_TODAY: by_status[OccurrenceStatus.DUE_TODAY],
        const.STATUS_OVERDUE: by_status[OccurrenceStatus.OVERDUE],
        const.STATUS_MISSED: by_status[OccurrenceStatus.MISSED],
        const.STATUS_COMPLETED: by_status[OccurrenceStatus.COMPLETED],
    }


def outstanding_count(counts: StatusCounts) -> int:
    """Occurrences still requiring attention (due today or overdue)."""
    return counts[const.STATUS_DUE_TODAY] + counts[const.STATUS_OVERDUE]
