from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import Impact, Priority, TaskStatus


@dataclass(frozen=True)
class Task:
    """Domain entity: a kanban task, already normalized from storage."""

    task_id: str
    title: str
    project_id: Optional[str] = None
    client_id: Optional[str] = None
    developer_id: Optional[str] = None
    collaborator_ids: tuple[str, ...] = field(default_factory=tuple)
    status: TaskStatus = TaskStatus.TODO
    progress: int = 0
    estimated_hours: Optional[float] = None
    scheduled_start: Optional[date] = None
    actual_start: Optional[date] = None
    estimated_delivery: Optional[date] = None
    actual_delivery: Optional[date] = None
    priority: Optional[Priority] = None
    impact: Optional[Impact] = None

    def is_assigned_to(self, user_id: str) -> bool:
        return self.developer_id == user_id or user_id in self.collaborator_ids

    @property
    def assignee_count(self) -> int:
        """Primary developer plus collaborators."""
        return 1 + len(self.collaborator_ids)

    def days_overdue(self, today: date) -> int:
        """Days past the delivery estimate (negative when still ahead of it).

        Review tasks are never overdue; Done tasks report how late they were
        actually delivered.
        """
        if not self.estimated_delivery or self.status == TaskStatus.REVIEW:
            return 0
        if self.status == TaskStatus.DONE:
            if not self.actual_delivery:
                return 0
            return (self.actual_delivery - self.estimated_delivery).days
        return (today - self.estimated_delivery).days
