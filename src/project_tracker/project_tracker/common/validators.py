from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} inválido")
    return str(value).strip()


def require_time(value: Optional[str], field_name: str) -> time:
    """Parse an HH:MM (or HH:MM:SS) wall-clock time."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} inválido (HH:MM)")
