from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self) -> Sequence[User]:
        raise NotImplementedError
