from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import TimesheetEntry
from .repository import TimesheetRepository


def _to_entry(r: dict) -> TimesheetEntry:
    return TimesheetEntry(
        entry_id=int(r["entry_id"]),
        user_id=str(r["user_id"]),
        task_id=str(r["task_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        total_hours=float(r["total_hours"]),
        lunch_deduction=bool(r.get("lunch_deduction")),
        description=r.get("description"),
    )


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timesheet_entries(user_id, task_id, work_date, start_time, end_time,
                                              total_hours, lunch_deduction, description)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, task_id, work_date, start_time, end_time, total_hours, int(lunch_deduction), description),
            )
            return int(cur.lastrowid)

    def get_by_id(self, entry_id: int) -> Optional[TimesheetEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, task_id, work_date, start_time, end_time,
                       total_hours, lunch_deduction, description
                FROM timesheet_entries
                WHERE entry_id=%s
                """,
                (int(entry_id),),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def delete_by_id(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timesheet_entries WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0

    def list_for_user(self, *, user_id: str, start: date, end: date) -> Sequence[TimesheetEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, task_id, work_date, start_time, end_time,
                       total_hours, lunch_deduction, description
                FROM timesheet_entries
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC, start_time DESC
                """,
                (user_id, start, end),
            )
            return [_to_entry(r) for r in fetchall(cur)]
