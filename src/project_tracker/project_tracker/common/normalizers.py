"""Free-text normalizers for legacy task data.

Keyword lists and their check order are significant: the first matching
bucket wins (e.g. "Done" is checked before "In Progress").
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence, Union

import pandas as pd

from .datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_DELIVERY_OFFSET_DAYS
from ..core.enums import Impact, Priority, TaskStatus

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ]\d|$)")
_DIGIT_RE = re.compile(r"\d")

_STATUS_KEYWORDS: Sequence[tuple[TaskStatus, tuple[str, ...]]] = (
    (TaskStatus.DONE, ("conclu", "done", "finaliz")),
    (TaskStatus.IN_PROGRESS, ("trabalhando", "andamento", "progresso", "progress", "execu")),
    (TaskStatus.REVIEW, ("teste", "revis", "review", "valida")),
)

_PRIORITY_KEYWORDS: Sequence[tuple[Priority, tuple[str, ...]]] = (
    (Priority.CRITICAL, ("critica", "critical", "urgente")),
    (Priority.HIGH, ("alta", "high")),
    (Priority.MEDIUM, ("media", "medium")),
    (Priority.LOW, ("baixa", "low")),
)

_IMPACT_KEYWORDS: Sequence[tuple[Impact, tuple[str, ...]]] = (
    (Impact.HIGH, ("alto", "high")),
    (Impact.MEDIUM, ("medio", "medium")),
    (Impact.LOW, ("baixo", "low")),
)


def _classify(raw: Optional[str], table):
    if not raw:
        return None
    s = str(raw).lower().strip()
    for value, keywords in table:
        if any(k in s for k in keywords):
            return value
    return None


def normalize_status(raw: Optional[str]) -> TaskStatus:
    """Map a free-text status into a kanban column; unknown values are Todo."""
    return _classify(raw, _STATUS_KEYWORDS) or TaskStatus.TODO


def normalize_priority(raw: Optional[str]) -> Optional[Priority]:
    return _classify(raw, _PRIORITY_KEYWORDS)


def normalize_impact(raw: Optional[str]) -> Optional[Impact]:
    return _classify(raw, _IMPACT_KEYWORDS)


def parse_loose_date(raw: Union[str, date, None]) -> Optional[date]:
    """Best-effort date parsing; None when missing or unparseable."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if raw is None or not str(raw).strip():
        return None

    value = str(raw).strip()
    m = _DATE_PREFIX_RE.match(value)
    if m:
        try:
            return parse_iso_date(m.group(1))
        except ValueError:
            return None

    # Bare words like "now" or "today" are not dates.
    if not _DIGIT_RE.search(value):
        return None

    # Keep the wall-clock date as written; never convert to UTC first.
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def format_date(raw: Union[str, date, None], *, today: Optional[date] = None) -> str:
    """Return a YYYY-MM-DD string for a loosely formatted date.

    Missing or unparseable values fall back to ``today + 7 days``, the default
    delivery estimate. Callers formatting dates that are not deadlines should
    use :func:`parse_loose_date` instead.
    """
    if isinstance(raw, str):
        value = raw.strip()
        if _ISO_DATE_RE.match(value):
            return value
        m = _DATE_PREFIX_RE.match(value)
        if m:
            return m.group(1)

    parsed = parse_loose_date(raw)
    if parsed is None:
        parsed = (today or date.today()) + timedelta(days=DEFAULT_DELIVERY_OFFSET_DAYS)
    return parsed.isoformat()


def clamp_progress(raw: Any) -> int:
    """Coerce a progress value into an integer percentage in [0, 100]."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return int(min(100, max(0, round(value))))
