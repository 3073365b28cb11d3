from __future__ import annotations

from datetime import date

from ...common.datetime_utils import MonthKey
from ...tasks.model import Task
from .base import AllocationCalculator


def _inclusive_days(start: date, end: date) -> int:
    return max(1, (end - start).days + 1)


class EvenSplitAllocationCalculator(AllocationCalculator):
    """Prorate estimated hours by calendar-day overlap with the month.

    The estimate is treated as a task total shared evenly by the primary
    developer and every collaborator.
    TODO: confirm with the business whether ``estimated_hours`` is a task total
    or a per-person figure; this split assumes a task total.
    """

    def task_hours_in_month(self, task: Task, month: MonthKey, *, today: date) -> float:
        if not task.estimated_hours:
            return 0.0

        start = task.scheduled_start or task.actual_start or today
        end = task.estimated_delivery or start
        if end < start:
            end = start

        overlap_start = max(start, month.first_day)
        overlap_end = min(end, month.last_day)
        if overlap_start > overlap_end:
            return 0.0

        total_days = _inclusive_days(start, end)
        overlap_days = _inclusive_days(overlap_start, overlap_end)
        share = task.estimated_hours / task.assignee_count
        return overlap_days / total_days * share
