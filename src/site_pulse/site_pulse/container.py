from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import ReconcileStrategyFactory
from .attendance.reconciler import StatusReconciler
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_AVAILABLE_DATES_LIMIT,
    DEFAULT_AVAILABLE_DATES_WINDOW_DAYS,
    DEFAULT_FETCH_WORKERS,
)
from .database.connection import DBConfig, DatabaseConnection
from .records.mysql_activity_repository import MySQLActivityRepository
from .records.mysql_reporting_repository import MySQLReportingRepository
from .users.mysql_user_repository import MySQLEmployeeDirectory


@dataclass(frozen=True)
class Container:
    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    fetch_workers: int = DEFAULT_FETCH_WORKERS,
    available_dates_window_days: int = DEFAULT_AVAILABLE_DATES_WINDOW_DAYS,
    available_dates_limit: int = DEFAULT_AVAILABLE_DATES_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    activities_repo = MySQLActivityRepository(conn)
    reports_repo = MySQLReportingRepository(conn)
    directory = MySQLEmployeeDirectory(conn)

    attendance_service = AttendanceService(
        activities_repo,
        reports_repo,
        directory,
        reconciler=StatusReconciler(ReconcileStrategyFactory()),
        fetch_workers=fetch_workers,
        available_dates_window_days=available_dates_window_days,
        available_dates_limit=available_dates_limit,
    )

    return Container(attendance_service=attendance_service)
