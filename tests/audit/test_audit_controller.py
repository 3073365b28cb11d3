from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest
from flask import Flask

from src.project_tracker.project_tracker.audit import controller as audit_controller
from src.project_tracker.project_tracker.audit.service import AuditService
from src.project_tracker.project_tracker.audit.model import AuditFilters, AuditLogEntry, SecurityAlert


class InMemoryAuditRepo:
    def __init__(self):
        self.rows: list[dict] = []
        self.last_filters: Optional[AuditFilters] = None

    def insert_row(self, row: dict) -> int:
        self.rows.append(row)
        return len(self.rows)

    def select_rows(self, filters: AuditFilters):
        self.last_filters = filters
        return [
            AuditLogEntry(audit_id=i + 1, action=r["action"], resource=r["resource"], timestamp=r["timestamp"])
            for i, r in enumerate(self.rows)
        ]


class RecordingNotifier:
    def __init__(self):
        self.alerts: list[SecurityAlert] = []

    def notify(self, alert: SecurityAlert) -> None:
        self.alerts.append(alert)


@pytest.fixture
def repo():
    return InMemoryAuditRepo()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def audit_service(repo, notifier):
    svc = AuditService(repo, notifier, clock=lambda: "2024-03-15T12:00:00+00:00")
    yield svc
    svc.close()


@pytest.fixture
def client(audit_service):
    app = Flask(__name__)
    app.config.update(SECRET_KEY="test", TESTING=True)
    container = SimpleNamespace(audit_service=audit_service)
    audit_controller.register(app, container)
    return app.test_client()


def login(client, user_id="1", role="admin"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_post_log_records_entry_with_request_metadata(client, repo):
    resp = client.post(
        "/audit/log",
        json={"action": "UPDATE", "resource": "PROJECT", "userId": "3", "changes": {"name": "Portal"}},
        headers={"User-Agent": "pytest-agent"},
    )

    assert resp.status_code == 201
    assert resp.get_json() == {"success": True}
    row = repo.rows[0]
    assert row["user_id"] == "3"
    assert row["ip_address"] == "127.0.0.1"
    assert row["user_agent"] == "pytest-agent"


def test_post_log_without_action_is_rejected(client, repo):
    resp = client.post("/audit/log", json={"resource": "PROJECT"})

    assert resp.status_code == 400
    assert repo.rows == []


def test_logs_require_login(client):
    assert client.get("/audit/logs").status_code == 401


def test_non_admin_is_denied_and_audited(client, repo, notifier, audit_service):
    login(client, user_id="5", role="developer")

    resp = client.get("/audit/logs")
    audit_service.close()

    assert resp.status_code == 403
    assert repo.rows[0]["action"] == "ACCESS_DENIED"
    assert repo.rows[0]["resource"] == "AUDIT_LOG"
    assert len(notifier.alerts) == 1
    assert notifier.alerts[0].user_id == "5"


def test_admin_gets_logs_with_filters(client, repo):
    repo.rows.append(
        {"action": "DELETE", "resource": "CLIENT", "timestamp": "2024-03-10T09:00:00+00:00"}
    )
    login(client)

    resp = client.get("/audit/logs?action=DELETE&limit=10&endDate=2024-03-10")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body[0]["action"] == "DELETE"
    assert repo.last_filters.limit == 10
    assert repo.last_filters.end_date == "2024-03-10T23:59:59.999999+00:00"
