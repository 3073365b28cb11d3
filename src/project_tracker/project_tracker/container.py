from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.notifier import LoggingSecurityAlertNotifier
from .audit.service import AuditService
from .capacity.calculator.even_split_calculator import EvenSplitAllocationCalculator
from .capacity.service import AvailabilityService
from .core.constants import DEFAULT_AUDIT_QUERY_LIMIT, DEFAULT_MONTHLY_CAPACITY_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .tasks.mysql_task_repository import MySQLTaskRepository
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    tasks_repo: MySQLTaskRepository
    timesheets_repo: MySQLTimesheetRepository
    audit_repo: MySQLAuditRepository

    audit_service: AuditService
    availability_service: AvailabilityService
    timesheet_service: TimesheetService


def build_container(*, settings: Any) -> Container:
    """Wire repositories and services from a settings module (see config/)."""
    conn = DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    users_repo = MySQLUserRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)
    timesheets_repo = MySQLTimesheetRepository(conn)
    audit_repo = MySQLAuditRepository(conn)

    audit_service = AuditService(
        audit_repo,
        LoggingSecurityAlertNotifier(),
        default_limit=int(getattr(settings, "AUDIT_QUERY_LIMIT", DEFAULT_AUDIT_QUERY_LIMIT)),
    )
    availability_service = AvailabilityService(
        users_repo,
        tasks_repo,
        calculator=EvenSplitAllocationCalculator(),
        default_capacity=int(getattr(settings, "DEFAULT_MONTHLY_CAPACITY_HOURS", DEFAULT_MONTHLY_CAPACITY_HOURS)),
    )
    timesheet_service = TimesheetService(timesheets_repo, audit_service)

    return Container(
        conn=conn,
        users_repo=users_repo,
        tasks_repo=tasks_repo,
        timesheets_repo=timesheets_repo,
        audit_repo=audit_repo,
        audit_service=audit_service,
        availability_service=availability_service,
        timesheet_service=timesheet_service,
    )
