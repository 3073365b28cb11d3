from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from ...common.datetime_utils import MonthKey
from ...core.enums import TaskStatus
from ...tasks.model import Task


class AllocationCalculator(ABC):
    """Calculator interface (Strategy Pattern for monthly allocation)."""

    @abstractmethod
    def task_hours_in_month(self, task: Task, month: MonthKey, *, today: date) -> float:
        """Unrounded hours of ``task`` one assignee carries within ``month``."""
        raise NotImplementedError

    def allocated_hours(
        self,
        user_id: str,
        month: MonthKey,
        tasks: Iterable[Task],
        *,
        today: Optional[date] = None,
    ) -> int:
        """Hours of open work assigned to ``user_id`` that fall inside ``month``.

        Done tasks consume no capacity. Rounds once, on the total.
        """
        today = today or date.today()
        total = 0.0
        for task in tasks:
            if task.status == TaskStatus.DONE or not task.is_assigned_to(user_id):
                continue
            total += self.task_hours_in_month(task, month, today=today)
        # Half-up, not banker's rounding.
        return int(math.floor(total + 0.5))
