from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    try:
        role = Role(str(row.get("role") or Role.DEVELOPER.value).lower())
    except ValueError:
        role = Role.DEVELOPER
    hours = row.get("monthly_available_hours")
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        role=role,
        cargo=row.get("cargo"),
        monthly_available_hours=int(hours) if hours is not None else None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, role, cargo, monthly_available_hours, is_active
                FROM users
                WHERE user_id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, role, cargo, monthly_available_hours, is_active
                FROM users
                WHERE is_active=1
                ORDER BY name
                """
            )
            return [_to_user(r) for r in fetchall(cur)]
