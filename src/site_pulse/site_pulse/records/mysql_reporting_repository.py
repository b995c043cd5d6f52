from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..identity.model import EmployeeIdentity
from .adapters import daily_target_report_from_row, hourly_report_from_row, records_from_rows
from .model import DailyTargetReportRecord, HourlyReportRecord
from .repository import ReportingRepository

_DAILY_COLUMNS = """
    d.id, d.user_id, d.incharge, u.employee_id, d.report_date, d.in_time, d.out_time,
    d.location_type, d.end_customer_name, d.daily_target_achieved, d.leave_type,
    d.leave_status, d.leave_approved_by, d.leave_rejection_reason, d.created_at
"""


class MySQLReportingRepository(ReportingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_hourly_between(self, *, start_date: date, end_date: date) -> Sequence[HourlyReportRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT id, user_id, employee_id, employee_name, report_date, time_period,
                       project_name, hourly_achieved, problem_faced_by_engineer_hourly
                FROM hourly_reports
                WHERE report_date BETWEEN %s AND %s
                ORDER BY report_date ASC, id ASC
                """,
                (start_date, end_date),
            )
            return records_from_rows(fetchall(cur), hourly_report_from_row, "hourly report")

    def list_daily_between(self, *, start_date: date, end_date: date) -> Sequence[DailyTargetReportRecord]:
        # employee_id comes from the users table; the report itself only stores user_id/incharge.
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_DAILY_COLUMNS}
                FROM daily_target_reports d
                LEFT JOIN users u ON u.id = d.user_id
                WHERE d.report_date BETWEEN %s AND %s
                ORDER BY d.report_date ASC, d.created_at ASC, d.id ASC
                """,
                (start_date, end_date),
            )
            return records_from_rows(fetchall(cur), daily_target_report_from_row, "daily report")

    def list_recent_daily_for(self, identity: EmployeeIdentity, *, limit: int) -> Sequence[DailyTargetReportRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_DAILY_COLUMNS}
                FROM daily_target_reports d
                LEFT JOIN users u ON u.id = d.user_id
                WHERE d.user_id=%s OR d.incharge=%s
                ORDER BY d.report_date DESC, d.created_at DESC
                LIMIT %s
                """,
                (identity.internal_id, identity.username, int(limit)),
            )
            return records_from_rows(fetchall(cur), daily_target_report_from_row, "daily report")
