from __future__ import annotations

import calendar
from datetime import date, datetime, timezone
from typing import NamedTuple, Optional, Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Coerce an ISO date, an ISO datetime or a date object into a date.

    Empty values become None; the time part of datetimes is dropped.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    return parse_iso_date(value[:10])


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """UTC ISO-8601 timestamp used for audit records."""
    return now_utc().isoformat()


class MonthKey(NamedTuple):
    """A (year, month) bucket for allocation computations."""

    year: int
    month: int

    @classmethod
    def parse(cls, value: str) -> "MonthKey":
        try:
            year_s, month_s = (value or "").strip().split("-")
            key = cls(int(year_s), int(month_s))
        except ValueError:
            raise ValidationError(f"Mês inválido (YYYY-MM): {value!r}")
        if not (1 <= key.month <= 12 and 1 <= key.year <= 9999):
            raise ValidationError(f"Mês inválido (YYYY-MM): {value!r}")
        return key

    @classmethod
    def of(cls, day: date) -> "MonthKey":
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
