from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class MonthlyAvailability:
    """Capacity vs. allocation for one user and month.

    ``available`` goes negative when the user is over-allocated.
    """

    user_id: str
    month: str
    capacity: int
    allocated: int
    available: int
    name: Optional[str] = None
    cargo: Optional[str] = None

    @property
    def over_allocated(self) -> bool:
        return self.available < 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["over_allocated"] = self.over_allocated
        return data
