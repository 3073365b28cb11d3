from __future__ import annotations

import pytest

from src.project_tracker.project_tracker.audit.model import AuditFilters
from src.project_tracker.project_tracker.audit.mysql_audit_repository import MySQLAuditRepository


class FakeCursor:
    def __init__(self, rows=None):
        self.rows = rows or []
        self.executed: list[tuple[str, tuple]] = []
        self.lastrowid = 17

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))

    def fetchall(self):
        return self.rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.conn = FakeConnection(cursor)

    def connect(self, *, with_database: bool = True):
        return self.conn


def run_select(filters: AuditFilters, rows=None):
    cur = FakeCursor(rows)
    MySQLAuditRepository(FakeConnFactory(cur)).select_rows(filters)
    return cur.executed[0]


def where_clause(sql: str) -> str:
    return sql.split(" WHERE ", 1)[1].split(" ORDER BY ", 1)[0]


def test_no_filters_selects_newest_first_with_limit():
    sql, params = run_select(AuditFilters())

    assert where_clause(sql) == "1=1"
    assert sql.endswith("ORDER BY timestamp DESC LIMIT %s")
    assert params == (100,)


def test_resource_filter_is_case_insensitive_substring():
    sql, params = run_select(AuditFilters(resource="TaSk", limit=5))

    assert where_clause(sql) == "1=1 AND LOWER(resource) LIKE %s"
    assert params == ("%task%", 5)


@pytest.mark.parametrize(
    "filters, clauses, params",
    [
        (AuditFilters(user_id="7"), ["user_id=%s"], ["7"]),
        (AuditFilters(action="DELETE"), ["action=%s"], ["DELETE"]),
        (
            AuditFilters(start_date="2024-03-01", end_date="2024-03-31T23:59:59.999999+00:00"),
            ["timestamp >= %s", "timestamp <= %s"],
            ["2024-03-01", "2024-03-31T23:59:59.999999+00:00"],
        ),
        (
            AuditFilters(user_id="7", action="UPDATE", resource="Project", start_date="2024-01-01", limit=20),
            ["user_id=%s", "action=%s", "LOWER(resource) LIKE %s", "timestamp >= %s"],
            ["7", "UPDATE", "%project%", "2024-01-01"],
        ),
    ],
)
def test_filters_are_combined_with_and(filters, clauses, params):
    sql, sent = run_select(filters)

    assert where_clause(sql) == " AND ".join(["1=1"] + clauses)
    assert sent == tuple(params + [filters.limit])


def test_rows_are_mapped_to_entries():
    rows = [
        {
            "audit_id": 3,
            "action": "DELETE",
            "resource": "CLIENT",
            "timestamp": "2024-03-10T09:00:00+00:00",
            "user_id": "1",
            "changes": '{"id": 9}',
        }
    ]
    cur = FakeCursor(rows)

    entries = MySQLAuditRepository(FakeConnFactory(cur)).select_rows(AuditFilters())

    assert entries[0].audit_id == 3
    assert entries[0].user_id == "1"
    assert entries[0].changes == '{"id": 9}'
    assert entries[0].task_name is None


def test_insert_row_writes_every_column_and_commits():
    cur = FakeCursor()
    factory = FakeConnFactory(cur)

    new_id = MySQLAuditRepository(factory).insert_row({"action": "CREATE", "resource": "TASK", "timestamp": "ts"})

    sql, params = cur.executed[0]
    assert new_id == 17
    assert sql.startswith("INSERT INTO audit_log(")
    assert len(params) == 15
    assert params[2:4] == ("CREATE", "TASK")
    assert params[-1] == "ts"
    assert factory.conn.committed is True
