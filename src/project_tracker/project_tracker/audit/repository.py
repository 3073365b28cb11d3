from __future__ import annotations

from typing import Protocol, Sequence

from .model import AuditFilters, AuditLogEntry


class AuditRepository(Protocol):
    """Append-only store for audit rows.

    Implementations raise PersistenceError when the store rejects a call.
    """

    def insert_row(self, row: dict) -> int:
        """Insert one audit row and return its id."""
        raise NotImplementedError

    def select_rows(self, filters: AuditFilters) -> Sequence[AuditLogEntry]:
        """Rows matching every filter, newest first, at most ``filters.limit``."""
        raise NotImplementedError
