from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, time
from typing import Iterable, Optional

from ..audit.model import AuditActor, AuditInput
from ..audit.service import AuditService
from ..common.validators import require_non_empty, require_time
from ..core.constants import LUNCH_DEDUCTION_MINUTES, MINUTES_PER_DAY
from ..core.enums import AuditAction, AuditResource, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import TimesheetEntry
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)


def calculate_total_hours(start: time, end: time, *, lunch_deduction: bool = False) -> float:
    """Hours between two wall-clock times, wrapping past midnight."""
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    if minutes < 0:
        minutes += MINUTES_PER_DAY
    if lunch_deduction:
        minutes = max(0, minutes - LUNCH_DEDUCTION_MINUTES)
    return round(minutes / 60, 2)


def hours_by_task(entries: Iterable[TimesheetEntry]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for e in entries:
        totals[e.task_id] += e.total_hours
    return {task_id: round(hours, 2) for task_id, hours in totals.items()}


class TimesheetService:
    def __init__(self, timesheets: TimesheetRepository, audit: Optional[AuditService] = None):
        self._timesheets = timesheets
        self._audit = audit

    @staticmethod
    def _ensure_can_act_for(actor: AuditActor, user_id: str) -> None:
        if actor.role != Role.ADMIN.value and str(actor.user_id) != str(user_id):
            raise AuthorizationError("Sem permissão para alterar horas de outro colaborador")

    def _audit_record(self, entry: AuditInput) -> None:
        if self._audit:
            self._audit.record(entry)

    def log_hours(
        self,
        *,
        actor: AuditActor,
        user_id: str,
        task_id: str,
        work_date: date,
        start_time: str,
        end_time: str,
        lunch_deduction: bool = False,
        description: str = "",
    ) -> int:
        self._ensure_can_act_for(actor, user_id)
        task_id = require_non_empty(task_id, "Tarefa")
        start_t = require_time(start_time, "Hora de início")
        end_t = require_time(end_time, "Hora de término")

        total_hours = calculate_total_hours(start_t, end_t, lunch_deduction=lunch_deduction)
        if total_hours <= 0:
            raise ValidationError("Total de horas deve ser maior que zero")

        entry_id = self._timesheets.create_entry(
            user_id=str(user_id),
            task_id=task_id,
            work_date=work_date,
            start_time=start_t,
            end_time=end_t,
            total_hours=total_hours,
            lunch_deduction=bool(lunch_deduction),
            description=(description or "").strip() or None,
        )
        logger.info("Timesheet entry %s logged: user=%s task=%s hours=%s", entry_id, user_id, task_id, total_hours)

        self._audit_record(
            AuditInput(
                action=AuditAction.HOURS_LOGGED.value,
                resource=AuditResource.TIMESHEET.value,
                user_id=actor.user_id,
                user_role=actor.role,
                resource_id=str(entry_id),
                changes={
                    "userId": str(user_id),
                    "date": work_date.isoformat(),
                    "startTime": start_t.strftime("%H:%M"),
                    "endTime": end_t.strftime("%H:%M"),
                    "totalHours": total_hours,
                },
                ip_address=actor.ip_address,
                user_agent=actor.user_agent,
                task_id=task_id,
            )
        )
        return entry_id

    def delete_entry(self, *, actor: AuditActor, entry_id: int) -> None:
        entry = self._timesheets.get_by_id(int(entry_id))
        if not entry:
            raise ValidationError("Apontamento não encontrado")
        self._ensure_can_act_for(actor, entry.user_id)

        if not self._timesheets.delete_by_id(entry.entry_id):
            raise ValidationError("Falha ao excluir apontamento")

        self._audit_record(
            AuditInput(
                action=AuditAction.DELETE.value,
                resource=AuditResource.TIMESHEET.value,
                user_id=actor.user_id,
                user_role=actor.role,
                resource_id=str(entry.entry_id),
                changes=entry.to_dict(),
                ip_address=actor.ip_address,
                user_agent=actor.user_agent,
                task_id=entry.task_id,
            )
        )

    def list_for_user(self, *, user_id: str, start: date, end: date) -> list[TimesheetEntry]:
        if end < start:
            raise ValidationError("Data final deve ser >= data inicial")
        return list(self._timesheets.list_for_user(user_id=str(user_id), start=start, end=end))
