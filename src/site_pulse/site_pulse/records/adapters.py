"""Row -> record adapters.

Stores and older clients send the same field under camelCase or snake_case names
(``reportDate``/``report_date``, ``timePeriod``/``time_period`` ...). This is the
single place where those aliases are accepted; everything downstream only sees the
canonical dataclasses from ``records.model``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from ..common.datetime_utils import normalize_date, normalize_datetime, normalize_time
from ..core.enums import LeaveStatus, LocationType
from ..core.exceptions import ValidationError
from ..identity.model import EmployeeRef
from .model import ActivityRecord, DailyTargetReportRecord, HourlyReportRecord

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _pick(row: Mapping[str, Any], *keys: str) -> Any:
    """First non-empty value among the given aliases."""
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(row: Mapping[str, Any], *keys: str) -> Optional[str]:
    value = _pick(row, *keys)
    return str(value).strip() if value is not None else None


def _required_date(row: Mapping[str, Any], kind: str, *keys: str):
    raw = _pick(row, *keys)
    try:
        value = normalize_date(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{kind} row {row.get('id')!r} has an invalid date {raw!r}")
    if value is None:
        raise ValidationError(f"{kind} row {row.get('id')!r} has no date")
    return value


def _time(row: Mapping[str, Any], *keys: str):
    raw = _pick(row, *keys)
    try:
        return normalize_time(raw)
    except (TypeError, ValueError):
        logger.warning("Row %r: ignoring unreadable time %r in %s", row.get("id"), raw, keys[0])
        return None


def _datetime(row: Mapping[str, Any], *keys: str):
    raw = _pick(row, *keys)
    try:
        return normalize_datetime(raw)
    except (TypeError, ValueError):
        logger.warning("Row %r: ignoring unreadable timestamp %r in %s", row.get("id"), raw, keys[0])
        return None


def activity_from_row(row: Mapping[str, Any]) -> ActivityRecord:
    status = _text(row, "status")
    return ActivityRecord(
        id=int(row["id"]),
        employee=EmployeeRef.of(
            employee_code=_pick(row, "engineerId", "engineer_id", "employeeId", "employee_id"),
            username=_pick(row, "engineerName", "engineer_name", "username"),
            user_id=_pick(row, "userId", "user_id"),
        ),
        date=_required_date(row, "activity", "date", "logDate", "log_date"),
        time=_time(row, "time", "logTime", "log_time"),
        project=_text(row, "project", "projectName", "project_name"),
        status=status.lower() if status else None,
        start_time=_time(row, "startTime", "start_time"),
        end_time=_time(row, "endTime", "end_time"),
        problem=_text(row, "problem", "problemsFaced", "problems_faced"),
        leave_reason=_text(row, "leaveReason", "leave_reason"),
        logged_at=_datetime(row, "loggedAt", "logged_at"),
    )


def hourly_report_from_row(row: Mapping[str, Any]) -> HourlyReportRecord:
    return HourlyReportRecord(
        id=int(row["id"]),
        employee=EmployeeRef.of(
            employee_code=_pick(row, "employeeId", "employee_id"),
            username=_pick(row, "employeeName", "employee_name", "username"),
            user_id=_pick(row, "userId", "user_id"),
        ),
        report_date=_required_date(row, "hourly report", "reportDate", "report_date", "date"),
        time_period=_text(row, "timePeriod", "time_period", "periodName", "period_name"),
        project_name=_text(row, "projectName", "project_name"),
        achieved=_text(row, "hourlyAchieved", "hourly_achieved", "achieved"),
        problem_faced=_text(
            row,
            "problemFacedByEngineerHourly",
            "problem_faced_by_engineer_hourly",
            "problemFaced",
            "problem_faced",
        ),
    )


def _leave_status(value: Optional[str], record_id) -> Optional[LeaveStatus]:
    if value is None:
        return None
    try:
        return LeaveStatus(value.lower())
    except ValueError:
        logger.warning("Daily report %s has unknown leave status %r; deriving from leave type", record_id, value)
        return None


def _location_type(value: Optional[str], record_id) -> Optional[LocationType]:
    if value is None:
        logger.warning("Daily report %s has no location type; kept out of attendance", record_id)
        return None
    try:
        return LocationType(value.lower())
    except ValueError:
        logger.warning("Daily report %s has unknown location type %r; kept out of attendance", record_id, value)
        return None


def daily_target_report_from_row(row: Mapping[str, Any]) -> DailyTargetReportRecord:
    record_id = int(row["id"])
    location_type = _location_type(_text(row, "locationType", "location_type"), record_id)

    return DailyTargetReportRecord(
        id=record_id,
        employee=EmployeeRef.of(
            employee_code=_pick(row, "employeeId", "employee_id"),
            username=_pick(row, "incharge", "username"),
            user_id=_pick(row, "userId", "user_id"),
        ),
        report_date=_required_date(row, "daily report", "reportDate", "report_date", "date"),
        location_type=location_type,
        in_time=_time(row, "inTime", "in_time"),
        out_time=_time(row, "outTime", "out_time"),
        project=_text(row, "endCustomerName", "end_customer_name", "customerName", "customer_name"),
        daily_target_achieved=_text(row, "dailyTargetAchieved", "daily_target_achieved"),
        leave_type=_text(row, "leaveType", "leave_type"),
        leave_status=_leave_status(_text(row, "leaveStatus", "leave_status"), record_id),
        leave_approved_by=_text(row, "leaveApprovedBy", "leave_approved_by"),
        leave_rejection_reason=_text(row, "leaveRejectionReason", "leave_rejection_reason"),
        created_at=_datetime(row, "createdAt", "created_at"),
    )


def records_from_rows(
    rows: Iterable[Mapping[str, Any]],
    convert: Callable[[Mapping[str, Any]], R],
    kind: str,
) -> list[R]:
    """Convert every row, skipping (and logging) those that cannot be placed on a date."""

    records: list[R] = []
    skipped = 0
    for row in rows:
        try:
            records.append(convert(row))
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            skipped += 1
            logger.warning("Skipping %s row %r: %s", kind, row.get("id"), e)
    if skipped:
        logger.warning("Skipped %d unreadable %s row(s)", skipped, kind)
    return records
