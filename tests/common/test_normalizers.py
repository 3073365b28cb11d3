from datetime import date, datetime

import pytest

from src.project_tracker.project_tracker.common.normalizers import (
    clamp_progress,
    format_date,
    normalize_impact,
    normalize_priority,
    normalize_status,
    parse_loose_date,
)
from src.project_tracker.project_tracker.core.enums import Impact, Priority, TaskStatus


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Em Andamento", TaskStatus.IN_PROGRESS),
        ("trabalhando", TaskStatus.IN_PROGRESS),
        ("Em execução", TaskStatus.IN_PROGRESS),
        ("Finalizado", TaskStatus.DONE),
        ("Concluído", TaskStatus.DONE),
        ("DONE", TaskStatus.DONE),
        ("Revisão", TaskStatus.REVIEW),
        ("Em Testes", TaskStatus.REVIEW),
        ("Validação", TaskStatus.REVIEW),
        ("A Fazer", TaskStatus.TODO),
        ("", TaskStatus.TODO),
        (None, TaskStatus.TODO),
    ],
)
def test_normalize_status(raw, expected):
    assert normalize_status(raw) == expected


def test_done_keywords_win_over_in_progress():
    assert normalize_status("progresso concluído") == TaskStatus.DONE


def test_normalize_priority():
    assert normalize_priority("URGENTE") == Priority.CRITICAL
    assert normalize_priority("alta") == Priority.HIGH
    assert normalize_priority("medium") == Priority.MEDIUM
    assert normalize_priority("Baixa") == Priority.LOW
    assert normalize_priority("whatever") is None
    assert normalize_priority(None) is None


def test_normalize_impact():
    assert normalize_impact("Alto") == Impact.HIGH
    assert normalize_impact("medio") == Impact.MEDIUM
    assert normalize_impact("low") == Impact.LOW
    assert normalize_impact("") is None


def test_format_date_passes_iso_through():
    assert format_date("2024-03-05") == "2024-03-05"


def test_format_date_truncates_time_without_timezone_shift():
    assert format_date("2024-03-05T23:30:00-03:00") == "2024-03-05"
    assert format_date("2024-03-05 08:00:00") == "2024-03-05"


def test_format_date_missing_or_garbage_defaults_to_a_week_ahead(fixed_today):
    assert format_date(None, today=fixed_today) == "2024-03-22"
    assert format_date("not a date", today=fixed_today) == "2024-03-22"


@pytest.mark.parametrize("keyword", ["now", "today", "Tomorrow"])
def test_date_keywords_are_not_dates(keyword, fixed_today):
    assert parse_loose_date(keyword) is None
    assert format_date(keyword, today=fixed_today) == "2024-03-22"


def test_format_date_accepts_date_objects_and_loose_text():
    assert format_date(date(2024, 1, 2)) == "2024-01-02"
    assert format_date(datetime(2024, 1, 2, 23, 59)) == "2024-01-02"
    assert format_date("March 5, 2024") == "2024-03-05"


def test_parse_loose_date():
    assert parse_loose_date("2024-03-05T10:00:00Z") == date(2024, 3, 5)
    assert parse_loose_date("2024-02-30") is None
    assert parse_loose_date("   ") is None
    assert parse_loose_date(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [(50, 50), ("75", 75), (150, 100), (-10, 0), ("abc", 0), (None, 0), (float("nan"), 0), (42.6, 43)],
)
def test_clamp_progress(raw, expected):
    assert clamp_progress(raw) == expected
