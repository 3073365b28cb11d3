from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import MonthKey
from ..core.constants import DEFAULT_MONTHLY_CAPACITY_HOURS
from ..core.exceptions import ValidationError
from ..tasks.model import Task
from ..tasks.repository import TaskRepository
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import AllocationCalculator
from .calculator.even_split_calculator import EvenSplitAllocationCalculator
from .model import MonthlyAvailability


class AvailabilityService:
    def __init__(
        self,
        users: UserRepository,
        tasks: TaskRepository,
        *,
        calculator: Optional[AllocationCalculator] = None,
        default_capacity: int = DEFAULT_MONTHLY_CAPACITY_HOURS,
    ):
        self._users = users
        self._tasks = tasks
        self._calculator = calculator or EvenSplitAllocationCalculator()
        self._default_capacity = int(default_capacity)

    def capacity_for(self, user: User) -> int:
        if user.monthly_available_hours is None:
            return self._default_capacity
        return int(user.monthly_available_hours)

    def availability(
        self,
        user: User,
        month: MonthKey,
        tasks: Iterable[Task],
        *,
        today: Optional[date] = None,
    ) -> MonthlyAvailability:
        capacity = self.capacity_for(user)
        allocated = self._calculator.allocated_hours(user.user_id, month, tasks, today=today)
        return MonthlyAvailability(
            user_id=user.user_id,
            month=str(month),
            capacity=capacity,
            allocated=allocated,
            available=capacity - allocated,
            name=user.name,
            cargo=user.cargo,
        )

    def team_availability(
        self,
        users: Iterable[User],
        month: MonthKey,
        tasks: Iterable[Task],
        *,
        today: Optional[date] = None,
    ) -> list[MonthlyAvailability]:
        """Active users only, most over-allocated first."""
        tasks = list(tasks)
        rows = [self.availability(u, month, tasks, today=today) for u in users if u.is_active]
        rows.sort(key=lambda r: (r.available, r.name or ""))
        return rows

    def availability_for_user(self, user_id: str, month: MonthKey) -> MonthlyAvailability:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Colaborador não encontrado")
        return self.availability(user, month, self._tasks.list_for_user(user.user_id))

    def availability_for_team(self, month: MonthKey) -> Sequence[MonthlyAvailability]:
        return self.team_availability(self._users.list_active(), month, self._tasks.list_open())
