"""Example: use the service layer directly (no Flask).

Prints this month's team availability, most over-allocated first.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.project_tracker.project_tracker.common.datetime_utils import MonthKey
from src.project_tracker.project_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    month = MonthKey.of(date.today())
    for row in container.availability_service.availability_for_team(month):
        flag = " (over-allocated)" if row.over_allocated else ""
        print(f"{month} {row.name}: {row.allocated}/{row.capacity}h, available {row.available}h{flag}")


if __name__ == "__main__":
    main()
