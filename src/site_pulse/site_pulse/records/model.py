from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import LEAVE_TYPES
from ..core.enums import LeaveStatus, LocationType
from ..identity.model import EmployeeRef


@dataclass(frozen=True)
class ActivityRecord:
    """Self-submitted activity entry.

    status is kept as submitted; values outside present/absent/leave are tolerated.
    """

    id: int
    employee: EmployeeRef
    date: date
    time: Optional[time]
    project: Optional[str]
    status: Optional[str]
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    problem: Optional[str] = None
    leave_reason: Optional[str] = None
    logged_at: Optional[datetime] = None


@dataclass(frozen=True)
class HourlyReportRecord:
    id: int
    employee: EmployeeRef
    report_date: date
    time_period: Optional[str]
    project_name: Optional[str]
    achieved: Optional[str] = None
    problem_faced: Optional[str] = None


@dataclass(frozen=True)
class DailyTargetReportRecord:
    """Daily site/office report. With location_type=leave it is a leave application.

    location_type is None when the stored value was missing or unrecognised; such a
    row is kept for the raw counts but neither proves presence nor applies for leave.
    """

    id: int
    employee: EmployeeRef
    report_date: date
    location_type: Optional[LocationType]
    in_time: Optional[time] = None
    out_time: Optional[time] = None
    project: Optional[str] = None
    daily_target_achieved: Optional[str] = None
    leave_type: Optional[str] = None
    leave_status: Optional[LeaveStatus] = None
    leave_approved_by: Optional[str] = None
    leave_rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_leave(self) -> bool:
        return self.location_type == LocationType.LEAVE

    @property
    def is_work_report(self) -> bool:
        return self.location_type in (LocationType.SITE, LocationType.OFFICE)

    @property
    def is_quarantined(self) -> bool:
        return self.location_type is None

    @property
    def effective_leave_status(self) -> Optional[LeaveStatus]:
        """Workflow status; when unset, leave types without approval count as approved."""

        if not self.is_leave:
            return None
        if self.leave_status is not None:
            return self.leave_status
        requires_approval = LEAVE_TYPES.get((self.leave_type or "").strip().lower(), True)
        return LeaveStatus.PENDING if requires_approval else LeaveStatus.APPROVED


@dataclass(frozen=True)
class RecordSet:
    """Immutable snapshot of the three record collections fetched for one request."""

    activities: tuple[ActivityRecord, ...] = field(default_factory=tuple)
    hourly_reports: tuple[HourlyReportRecord, ...] = field(default_factory=tuple)
    daily_reports: tuple[DailyTargetReportRecord, ...] = field(default_factory=tuple)

    def refs(self) -> list[EmployeeRef]:
        out = [r.employee for r in self.activities]
        out.extend(r.employee for r in self.hourly_reports)
        out.extend(r.employee for r in self.daily_reports)
        return out

    def between(self, start: date, end: date) -> "RecordSet":
        return RecordSet(
            activities=tuple(r for r in self.activities if start <= r.date <= end),
            hourly_reports=tuple(r for r in self.hourly_reports if start <= r.report_date <= end),
            daily_reports=tuple(r for r in self.daily_reports if start <= r.report_date <= end),
        )

    @property
    def total(self) -> int:
        return len(self.activities) + len(self.hourly_reports) + len(self.daily_reports)
