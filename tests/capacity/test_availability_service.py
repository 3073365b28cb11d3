from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pytest

from src.project_tracker.project_tracker.capacity.service import AvailabilityService
from src.project_tracker.project_tracker.common.datetime_utils import MonthKey
from src.project_tracker.project_tracker.core.exceptions import ValidationError
from src.project_tracker.project_tracker.tasks.model import Task
from src.project_tracker.project_tracker.users.model import User

MARCH_2024 = MonthKey(2024, 3)


@dataclass
class InMemoryUsers:
    users: dict[str, User]

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def list_active(self):
        return [u for u in self.users.values() if u.is_active]


@dataclass
class InMemoryTasks:
    tasks: list[Task] = field(default_factory=list)

    def list_for_user(self, user_id: str):
        return [t for t in self.tasks if t.is_assigned_to(user_id)]

    def list_open(self):
        return list(self.tasks)


def march_task(task_id: str, developer_id: str, hours: float, **kwargs) -> Task:
    return Task(
        task_id=task_id,
        title=task_id,
        developer_id=developer_id,
        estimated_hours=hours,
        scheduled_start=date(2024, 3, 1),
        estimated_delivery=date(2024, 3, 31),
        **kwargs,
    )


def test_capacity_defaults_to_160_when_unset():
    user = User(user_id="u1", name="Ana")
    svc = AvailabilityService(InMemoryUsers({}), InMemoryTasks())

    result = svc.availability(user, MARCH_2024, [march_task("t1", "u1", 40)])

    assert result.capacity == 160
    assert result.allocated == 40
    assert result.available == 120
    assert result.month == "2024-03"


def test_configured_capacity_is_used():
    user = User(user_id="u1", name="Ana", monthly_available_hours=120)
    svc = AvailabilityService(InMemoryUsers({}), InMemoryTasks())

    result = svc.availability(user, MARCH_2024, [])

    assert result.capacity == 120
    assert result.available == 120


def test_over_allocation_is_reported_as_negative():
    user = User(user_id="u1", name="Ana", monthly_available_hours=100)
    svc = AvailabilityService(InMemoryUsers({}), InMemoryTasks())

    result = svc.availability(user, MARCH_2024, [march_task("t1", "u1", 130)])

    assert result.available == -30
    assert result.over_allocated is True
    assert result.to_dict()["over_allocated"] is True


def test_team_availability_skips_inactive_users_and_sorts_by_available():
    users = [
        User(user_id="u1", name="Ana"),
        User(user_id="u2", name="Bruno", monthly_available_hours=80),
        User(user_id="u3", name="Carla", is_active=False),
    ]
    tasks = [march_task("t1", "u1", 20), march_task("t2", "u2", 100), march_task("t3", "u3", 10)]
    svc = AvailabilityService(InMemoryUsers({}), InMemoryTasks())

    rows = svc.team_availability(users, MARCH_2024, tasks)

    assert [r.user_id for r in rows] == ["u2", "u1"]
    assert rows[0].available == -20


def test_default_capacity_is_configurable():
    svc = AvailabilityService(InMemoryUsers({}), InMemoryTasks(), default_capacity=120)

    assert svc.capacity_for(User(user_id="u1", name="Ana")) == 120


def test_availability_for_user_loads_from_repositories():
    users = InMemoryUsers({"u1": User(user_id="u1", name="Ana", cargo="Dev")})
    tasks = InMemoryTasks([march_task("t1", "u1", 60), march_task("t2", "u9", 60)])
    svc = AvailabilityService(users, tasks)

    result = svc.availability_for_user("u1", MARCH_2024)

    assert result.allocated == 60
    assert result.cargo == "Dev"


def test_availability_for_unknown_user_raises():
    svc = AvailabilityService(InMemoryUsers({}), InMemoryTasks())

    with pytest.raises(ValidationError):
        svc.availability_for_user("missing", MARCH_2024)
