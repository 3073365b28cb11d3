from __future__ import annotations

from typing import Protocol, Sequence

from .model import Task


class TaskRepository(Protocol):
    def list_for_user(self, user_id: str) -> Sequence[Task]:
        """Tasks where the user is primary developer or a collaborator."""
        raise NotImplementedError

    def list_open(self) -> Sequence[Task]:
        """Every task not yet Done."""
        raise NotImplementedError
