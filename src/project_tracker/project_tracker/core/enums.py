from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access checks."""

    ADMIN = "admin"
    DEVELOPER = "developer"


class TaskStatus(str, Enum):
    """Canonical kanban columns. Any status may move to any other."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    DONE = "Done"


class Priority(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Impact(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AuditAction(str, Enum):
    """Known audit action tags. The audit log itself accepts free text."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    COMPLETED = "COMPLETED"
    PERCENTAGE_CHANGE = "PERCENTAGE_CHANGE"
    HOURS_LOGGED = "HOURS_LOGGED"
    ACCESS_DENIED = "ACCESS_DENIED"


class AuditResource(str, Enum):
    CLIENT = "CLIENT"
    PROJECT = "PROJECT"
    TASK = "TASK"
    TIMESHEET = "TIMESHEET"
    USER = "USER"
    AUDIT_LOG = "AUDIT_LOG"
