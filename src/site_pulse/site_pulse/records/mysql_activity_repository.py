from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..identity.model import EmployeeIdentity
from .adapters import activity_from_row, records_from_rows
from .model import ActivityRecord
from .repository import ActivityRepository

_COLUMNS = """
    id, date, time, engineer_id, engineer_name, project, status,
    start_time, end_time, problem, leave_reason, logged_at
"""


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ActivityRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM activities
                ORDER BY date DESC, logged_at DESC
                """
            )
            return records_from_rows(fetchall(cur), activity_from_row, "activity")

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[ActivityRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM activities
                WHERE DATE(date) BETWEEN %s AND %s
                ORDER BY date DESC, logged_at DESC
                """,
                (start_date, end_date),
            )
            return records_from_rows(fetchall(cur), activity_from_row, "activity")

    def list_recent_for(self, identity: EmployeeIdentity, *, limit: int) -> Sequence[ActivityRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM activities
                WHERE engineer_id=%s OR engineer_name=%s
                ORDER BY date DESC, logged_at DESC
                LIMIT %s
                """,
                (identity.employee_code, identity.username, int(limit)),
            )
            return records_from_rows(fetchall(cur), activity_from_row, "activity")
