from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest
from flask import Flask

from src.project_tracker.project_tracker.audit.service import AuditService
from src.project_tracker.project_tracker.capacity import controller as capacity_controller
from src.project_tracker.project_tracker.capacity.service import AvailabilityService
from src.project_tracker.project_tracker.tasks.model import Task
from src.project_tracker.project_tracker.users.model import User


class Users:
    def __init__(self, users):
        self.users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def list_active(self):
        return [u for u in self.users.values() if u.is_active]


class Tasks:
    def __init__(self, tasks):
        self.tasks = tasks

    def list_for_user(self, user_id):
        return [t for t in self.tasks if t.is_assigned_to(user_id)]

    def list_open(self):
        return self.tasks


class AuditRows:
    def __init__(self):
        self.rows = []

    def insert_row(self, row):
        self.rows.append(row)
        return len(self.rows)

    def select_rows(self, filters):
        return []


@pytest.fixture
def audit_rows():
    return AuditRows()


@pytest.fixture
def client(audit_rows):
    users = Users([User(user_id="1", name="Ana"), User(user_id="2", name="Bruno", monthly_available_hours=40)])
    tasks = Tasks(
        [
            Task(
                task_id="t1",
                title="API",
                developer_id="2",
                estimated_hours=60,
                scheduled_start=date(2024, 3, 1),
                estimated_delivery=date(2024, 3, 31),
            )
        ]
    )
    container = SimpleNamespace(
        audit_service=AuditService(audit_rows),
        availability_service=AvailabilityService(users, tasks),
    )
    app = Flask(__name__)
    app.config.update(SECRET_KEY="test", TESTING=True)
    capacity_controller.register(app, container)
    return app.test_client()


def login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_user_availability(client):
    login(client, "2", "developer")

    resp = client.get("/capacity/users/2?month=2024-03")

    assert resp.status_code == 200
    assert resp.get_json() == {
        "user_id": "2",
        "month": "2024-03",
        "capacity": 40,
        "allocated": 60,
        "available": -20,
        "name": "Bruno",
        "cargo": None,
        "over_allocated": True,
    }


def test_bad_month_is_rejected(client):
    login(client, "2", "developer")

    assert client.get("/capacity/users/2?month=2024-13").status_code == 400
    assert client.get("/capacity/users/2?month=0000-01").status_code == 400


def test_unknown_user_is_rejected(client):
    login(client, "2", "developer")

    assert client.get("/capacity/users/99?month=2024-03").status_code == 400


def test_team_report_is_admin_only(client, audit_rows):
    login(client, "2", "developer")

    assert client.get("/capacity/team?month=2024-03").status_code == 403
    assert audit_rows.rows[0]["action"] == "ACCESS_DENIED"


def test_team_report_orders_most_over_allocated_first(client):
    login(client, "1", "admin")

    resp = client.get("/capacity/team?month=2024-03")

    assert resp.status_code == 200
    assert [r["user_id"] for r in resp.get_json()] == ["2", "1"]
