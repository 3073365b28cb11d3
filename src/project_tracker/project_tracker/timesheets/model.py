from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class TimesheetEntry:
    """Domain entity: hours a user logged against a task on one day."""

    entry_id: int
    user_id: str
    task_id: str
    work_date: date
    start_time: time
    end_time: time
    total_hours: float
    lunch_deduction: bool = False
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "taskId": self.task_id,
            "date": self.work_date.isoformat(),
            "startTime": self.start_time.strftime("%H:%M"),
            "endTime": self.end_time.strftime("%H:%M"),
            "totalHours": self.total_hours,
            "lunchDeduction": self.lunch_deduction,
            "description": self.description,
        }
