from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a team member.

    Note: soft-deleted users keep their row with ``is_active=False``.
    """

    user_id: str
    name: str
    role: Role = Role.DEVELOPER
    cargo: Optional[str] = None
    monthly_available_hours: Optional[int] = None
    is_active: bool = True
