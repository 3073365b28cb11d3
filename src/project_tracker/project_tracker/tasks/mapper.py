"""Mapping between stored task rows (legacy free-text labels) and Task."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from ..common.normalizers import (
    clamp_progress,
    format_date,
    normalize_impact,
    normalize_priority,
    normalize_status,
    parse_loose_date,
)
from ..core.constants import UNTITLED_TASK
from ..core.enums import Impact, Priority, TaskStatus
from .model import Task

_STATUS_LABELS = {
    TaskStatus.DONE: "Concluído",
    TaskStatus.IN_PROGRESS: "Em Andamento",
    TaskStatus.REVIEW: "Revisão",
    TaskStatus.TODO: "A Fazer",
}

_PRIORITY_LABELS = {
    Priority.CRITICAL: "Crítica",
    Priority.HIGH: "Alta",
    Priority.MEDIUM: "Média",
    Priority.LOW: "Baixa",
}

_IMPACT_LABELS = {
    Impact.HIGH: "Alto",
    Impact.MEDIUM: "Médio",
    Impact.LOW: "Baixo",
}


def _opt_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _opt_hours(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    return hours


def task_from_row(
    row: dict,
    collaborator_ids: Iterable[Any] = (),
    *,
    today: Optional[date] = None,
) -> Task:
    """Build a Task from a storage row.

    A missing ``estimated_delivery`` becomes the default deadline
    (today + 7 days); the other dates stay None when missing.
    """
    title = row.get("title")
    if not title or title == "null":
        title = UNTITLED_TASK

    developer_id = _opt_id(row.get("developer_id"))
    collaborators = [str(c) for c in collaborator_ids if c is not None and str(c) != developer_id]

    return Task(
        task_id=str(row["task_id"]),
        title=str(title),
        project_id=_opt_id(row.get("project_id")),
        client_id=_opt_id(row.get("client_id")),
        developer_id=developer_id,
        collaborator_ids=tuple(dict.fromkeys(collaborators)),
        status=normalize_status(row.get("status")),
        progress=clamp_progress(row.get("progress")),
        estimated_hours=_opt_hours(row.get("estimated_hours")),
        scheduled_start=parse_loose_date(row.get("scheduled_start")),
        actual_start=parse_loose_date(row.get("actual_start")),
        estimated_delivery=parse_loose_date(format_date(row.get("estimated_delivery"), today=today)),
        actual_delivery=parse_loose_date(row.get("actual_delivery")),
        priority=normalize_priority(row.get("priority")),
        impact=normalize_impact(row.get("impact")),
    )


def status_to_storage(status: Optional[TaskStatus]) -> str:
    return _STATUS_LABELS.get(status, _STATUS_LABELS[TaskStatus.TODO])


def priority_to_storage(priority: Optional[Priority]) -> Optional[str]:
    return _PRIORITY_LABELS.get(priority)


def impact_to_storage(impact: Optional[Impact]) -> Optional[str]:
    return _IMPACT_LABELS.get(impact)
