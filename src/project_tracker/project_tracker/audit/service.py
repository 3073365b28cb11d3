"""Audit trail use cases.

Auditing is best-effort: a failed write or query is logged and reported as
``None`` / ``[]``, never raised, so the business action that triggered it
still succeeds. Security alerts are delivered on a background thread.
"""

from __future__ import annotations

import json
import logging
import re
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date, datetime
from typing import Any, Callable, Optional, Union

from ..common.datetime_utils import utc_timestamp
from ..core.constants import DEFAULT_AUDIT_QUERY_LIMIT
from ..core.enums import AuditAction, AuditResource
from .model import AuditActor, AuditFilters, AuditInput, AuditLogEntry, SecurityAlert, TaskRef
from .notifier import SecurityAlertNotifier
from .repository import AuditRepository

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateBound = Union[str, date, None]


def serialize_changes(changes: Any) -> Optional[str]:
    if changes is None or changes == "":
        return None
    return json.dumps(changes, default=str, ensure_ascii=False)


def _lower_bound(value: DateBound) -> Optional[str]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _upper_bound(value: DateBound) -> Optional[str]:
    # A bare date covers the whole day.
    if not value:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        value = value.isoformat()
    value = str(value)
    if _ISO_DATE_RE.match(value):
        return f"{value}T23:59:59.999999+00:00"
    return value


def _log_alert_failure(future: Future, alert: SecurityAlert) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error(
            "Security alert delivery failed for user_id=%s",
            alert.user_id,
            exc_info=(type(exc), exc, exc.__traceback__),
        )


class AuditService:
    def __init__(
        self,
        audit: AuditRepository,
        notifier: Optional[SecurityAlertNotifier] = None,
        *,
        clock: Callable[[], str] = utc_timestamp,
        default_limit: int = DEFAULT_AUDIT_QUERY_LIMIT,
        alert_executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._audit = audit
        self._notifier = notifier
        self._clock = clock
        self._default_limit = int(default_limit)
        self._alert_executor = alert_executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="security-alert"
        )

    def record(self, entry: AuditInput) -> Optional[int]:
        """Persist one audit row; returns its id or None when the write failed."""
        timestamp = self._clock()
        row = {
            "user_id": entry.user_id,
            "user_role": entry.user_role,
            "action": entry.action,
            "resource": entry.resource,
            "resource_id": entry.resource_id,
            "changes": serialize_changes(entry.changes),
            "ip_address": entry.ip_address,
            "user_agent": entry.user_agent,
            "client_id": entry.client_id,
            "project_id": entry.project_id,
            "task_id": entry.task_id,
            "client_name": entry.client_name,
            "project_name": entry.project_name,
            "task_name": entry.task_name,
            "timestamp": timestamp,
        }

        record_id: Optional[int] = None
        try:
            record_id = self._audit.insert_row(row)
        except Exception:
            logger.exception("Failed to write audit log action=%s resource=%s", entry.action, entry.resource)

        if entry.action == AuditAction.ACCESS_DENIED.value:
            self._send_security_alert(
                SecurityAlert(
                    user_id=entry.user_id,
                    user_role=entry.user_role,
                    resource=entry.resource,
                    timestamp=timestamp,
                )
            )

        return record_id

    def _send_security_alert(self, alert: SecurityAlert) -> None:
        if not self._notifier:
            return
        # Fire-and-forget.
        try:
            future = self._alert_executor.submit(self._notifier.notify, alert)
        except RuntimeError:
            logger.exception("Security alert dropped for user_id=%s (executor closed)", alert.user_id)
            return
        future.add_done_callback(lambda f: _log_alert_failure(f, alert))

    def close(self, wait: bool = True) -> None:
        """Stop the alert executor; with ``wait`` pending alerts are delivered first."""
        self._alert_executor.shutdown(wait=wait)

    def query(
        self,
        *,
        user_id: Optional[str] = None,
        action: Optional[str] = None,
        resource: Optional[str] = None,
        start_date: DateBound = None,
        end_date: DateBound = None,
        limit: Optional[int] = None,
    ) -> list[AuditLogEntry]:
        """Newest-first audit rows matching every given filter."""
        filters = AuditFilters(
            user_id=str(user_id) if user_id else None,
            action=action or None,
            resource=resource or None,
            start_date=_lower_bound(start_date),
            end_date=_upper_bound(end_date),
            limit=max(1, int(limit)) if limit else self._default_limit,
        )
        try:
            return list(self._audit.select_rows(filters))
        except Exception:
            logger.exception("Failed to fetch audit logs filters=%s", filters)
            return []

    def log_critical_change(
        self,
        action: str,
        resource: str,
        actor: AuditActor,
        changes: dict,
    ) -> Optional[int]:
        resource_id = changes.get("id")
        return self.record(
            AuditInput(
                action=action,
                resource=resource,
                user_id=actor.user_id,
                user_role=actor.role,
                resource_id=str(resource_id) if resource_id is not None else None,
                changes=changes,
                ip_address=actor.ip_address,
                user_agent=actor.user_agent,
            )
        )

    def log_task_action(
        self,
        actor: AuditActor,
        action: AuditAction,
        task: TaskRef,
        changes: Any = None,
    ) -> Optional[int]:
        return self.record(
            AuditInput(
                action=action.value,
                resource=AuditResource.TASK.value,
                user_id=actor.user_id,
                user_role=actor.role,
                resource_id=task.task_id,
                changes=changes,
                ip_address=actor.ip_address,
                user_agent=actor.user_agent,
                client_id=task.client_id,
                project_id=task.project_id,
                task_id=task.task_id,
                client_name=task.client_name,
                project_name=task.project_name,
                task_name=task.name,
            )
        )
