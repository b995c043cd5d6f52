from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..identity.model import EmployeeRef
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT id, username, employee_id, role, phone
                FROM users
                ORDER BY id ASC
                """
            )
            return [
                Employee(
                    user_id=int(r["id"]),
                    username=str(r["username"]).strip(),
                    employee_code=EmployeeRef.of(employee_code=r.get("employee_id")).employee_code,
                    role=r.get("role") or "",
                    phone=r.get("phone"),
                )
                for r in fetchall(cur)
            ]
