from __future__ import annotations

from datetime import date, datetime, timezone

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_today(fixed_now) -> date:
    return fixed_now.date()
