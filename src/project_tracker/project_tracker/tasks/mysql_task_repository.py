from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .mapper import task_from_row
from .model import Task
from .repository import TaskRepository

_TASK_COLUMNS = """
    t.task_id, t.title, t.project_id, t.client_id, t.developer_id, t.status, t.progress,
    t.estimated_hours, t.scheduled_start, t.actual_start, t.estimated_delivery,
    t.actual_delivery, t.priority, t.impact
"""


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, rows: list[dict]) -> list[Task]:
        if not rows:
            return []
        task_ids = [r["task_id"] for r in rows]
        placeholders = ",".join(["%s"] * len(task_ids))
        cur.execute(
            f"""
            SELECT task_id, user_id
            FROM task_collaborators
            WHERE task_id IN ({placeholders})
            ORDER BY task_id, position
            """,
            tuple(task_ids),
        )
        collaborators: dict[object, list] = defaultdict(list)
        for c in fetchall(cur):
            collaborators[c["task_id"]].append(c["user_id"])
        return [task_from_row(r, collaborators.get(r["task_id"], ())) for r in rows]

    def list_for_user(self, user_id: str) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TASK_COLUMNS}
                FROM tasks t
                WHERE t.developer_id=%s
                   OR t.task_id IN (SELECT tc.task_id FROM task_collaborators tc WHERE tc.user_id=%s)
                ORDER BY t.task_id
                """,
                (user_id, user_id),
            )
            return self._load(cur, fetchall(cur))

    def list_open(self) -> Sequence[Task]:
        # Status is free text in storage, so Done is filtered after normalizing.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TASK_COLUMNS} FROM tasks t ORDER BY t.task_id")
            tasks = self._load(cur, fetchall(cur))
            return [t for t in tasks if t.status != TaskStatus.DONE]
