from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_AUDIT_QUERY_LIMIT


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class AuditInput:
    """What a caller hands to the recorder. The timestamp is never caller-supplied."""

    action: str
    resource: str
    user_id: Optional[str] = None
    user_role: Optional[str] = None
    resource_id: Optional[str] = None
    changes: Any = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    # Denormalized linkage for filtering without joins.
    client_id: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    task_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "AuditInput":
        """Build from the camelCase JSON body sent by the web client."""
        return cls(
            action=require_non_empty(payload.get("action"), "action"),
            resource=require_non_empty(payload.get("resource"), "resource"),
            user_id=_opt_str(payload.get("userId")),
            user_role=_opt_str(payload.get("userRole")),
            resource_id=_opt_str(payload.get("resourceId")),
            changes=payload.get("changes"),
            ip_address=_opt_str(payload.get("ipAddress")),
            user_agent=_opt_str(payload.get("userAgent")),
            client_id=_opt_str(payload.get("clientId")),
            project_id=_opt_str(payload.get("projectId")),
            task_id=_opt_str(payload.get("taskId")),
            client_name=_opt_str(payload.get("clientName")),
            project_name=_opt_str(payload.get("projectName")),
            task_name=_opt_str(payload.get("taskName")),
        )


@dataclass(frozen=True)
class AuditLogEntry:
    """A stored audit row. Immutable once written."""

    audit_id: int
    action: str
    resource: str
    timestamp: str
    user_id: Optional[str] = None
    user_role: Optional[str] = None
    resource_id: Optional[str] = None
    changes: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    client_id: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    task_name: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AuditFilters:
    user_id: Optional[str] = None
    action: Optional[str] = None
    resource: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    limit: int = DEFAULT_AUDIT_QUERY_LIMIT


@dataclass(frozen=True)
class SecurityAlert:
    user_id: Optional[str]
    user_role: Optional[str]
    resource: str
    timestamp: str


@dataclass(frozen=True)
class AuditActor:
    """The user performing an audited action, plus request metadata."""

    user_id: str
    role: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass(frozen=True)
class TaskRef:
    task_id: str
    name: str
    project_id: Optional[str] = None
    client_id: Optional[str] = None
    project_name: Optional[str] = None
    client_name: Optional[str] = None
