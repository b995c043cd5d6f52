"""Record builders shared by the test modules."""
from __future__ import annotations

from datetime import date, datetime, time
from itertools import count
from typing import Optional

from src.site_pulse.site_pulse.core.enums import LeaveStatus, LocationType
from src.site_pulse.site_pulse.identity.model import EmployeeRef
from src.site_pulse.site_pulse.records.model import (
    ActivityRecord,
    DailyTargetReportRecord,
    HourlyReportRecord,
)
from src.site_pulse.site_pulse.users.model import Employee

_ids = count(1)

D = date(2024, 1, 10)


def ref(code: Optional[str] = None, name: Optional[str] = None, user_id: Optional[int] = None) -> EmployeeRef:
    return EmployeeRef.of(employee_code=code, username=name, user_id=user_id)


def activity(
    employee: EmployeeRef, status: Optional[str] = "present", *, on: date = D, logged_at=None, problem=None
) -> ActivityRecord:
    return ActivityRecord(
        id=next(_ids),
        employee=employee,
        date=on,
        time=time(9, 0),
        project="Plant A",
        status=status,
        logged_at=logged_at or datetime.combine(on, time(9, 0)),
        problem=problem,
    )


def hourly(employee: EmployeeRef, *, on: date = D) -> HourlyReportRecord:
    return HourlyReportRecord(
        id=next(_ids),
        employee=employee,
        report_date=on,
        time_period="9am-10am",
        project_name="Plant A",
        achieved="Panel wiring",
    )


def daily(
    employee: EmployeeRef,
    location: Optional[LocationType] = LocationType.SITE,
    *,
    on: date = D,
    leave_status: Optional[LeaveStatus] = None,
    leave_type: Optional[str] = None,
    project: Optional[str] = "Plant A",
    created_at: Optional[datetime] = None,
) -> DailyTargetReportRecord:
    return DailyTargetReportRecord(
        id=next(_ids),
        employee=employee,
        report_date=on,
        location_type=location,
        project=project,
        leave_type=leave_type,
        leave_status=leave_status,
        created_at=created_at,
    )


def leave(employee: EmployeeRef, status: Optional[LeaveStatus], *, on: date = D, leave_type: str = "earned", created_at=None):
    return daily(
        employee,
        LocationType.LEAVE,
        on=on,
        leave_status=status,
        leave_type=leave_type,
        project=None,
        created_at=created_at,
    )


def employee(user_id: int, username: str, code: Optional[str], role: str = "Engineer") -> Employee:
    return Employee(user_id=user_id, username=username, employee_code=code, role=role)
