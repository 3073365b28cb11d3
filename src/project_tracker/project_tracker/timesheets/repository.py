from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import TimesheetEntry


class TimesheetRepository(Protocol):
    def create_entry(
        self,
        *,
        user_id: str,
        task_id: str,
        work_date: date,
        start_time: time,
        end_time: time,
        total_hours: float,
        lunch_deduction: bool,
        description: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimesheetEntry]:
        raise NotImplementedError

    def delete_by_id(self, entry_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(self, *, user_id: str, start: date, end: date) -> Sequence[TimesheetEntry]:
        raise NotImplementedError
