from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditFilters, AuditLogEntry
from .repository import AuditRepository

_COLUMNS = (
    "user_id",
    "user_role",
    "action",
    "resource",
    "resource_id",
    "changes",
    "ip_address",
    "user_agent",
    "client_id",
    "project_id",
    "task_id",
    "client_name",
    "project_name",
    "task_name",
    "timestamp",
)


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_row(self, row: dict) -> int:
        placeholders = ",".join(["%s"] * len(_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO audit_log({', '.join(_COLUMNS)}) VALUES({placeholders})",
                tuple(row.get(c) for c in _COLUMNS),
            )
            return int(cur.lastrowid)

    def select_rows(self, filters: AuditFilters) -> Sequence[AuditLogEntry]:
        clauses = ["1=1"]
        params: list[object] = []

        if filters.user_id:
            clauses.append("user_id=%s")
            params.append(filters.user_id)
        if filters.action:
            clauses.append("action=%s")
            params.append(filters.action)
        if filters.resource:
            clauses.append("LOWER(resource) LIKE %s")
            params.append(f"%{filters.resource.lower()}%")
        if filters.start_date:
            clauses.append("timestamp >= %s")
            params.append(filters.start_date)
        if filters.end_date:
            clauses.append("timestamp <= %s")
            params.append(filters.end_date)

        where = " AND ".join(clauses)
        params.append(int(filters.limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT audit_id, {', '.join(_COLUMNS)}
                FROM audit_log
                WHERE {where}
                ORDER BY timestamp DESC
                LIMIT %s
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AuditLogEntry(
                    audit_id=int(r["audit_id"]),
                    action=r["action"],
                    resource=r["resource"],
                    timestamp=str(r["timestamp"]),
                    user_id=r.get("user_id"),
                    user_role=r.get("user_role"),
                    resource_id=r.get("resource_id"),
                    changes=r.get("changes"),
                    ip_address=r.get("ip_address"),
                    user_agent=r.get("user_agent"),
                    client_id=r.get("client_id"),
                    project_id=r.get("project_id"),
                    task_id=r.get("task_id"),
                    client_name=r.get("client_name"),
                    project_name=r.get("project_name"),
                    task_name=r.get("task_name"),
                )
                for r in rows
            ]
