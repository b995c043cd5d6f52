from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, LeaveStatus
from ..identity.model import EmployeeIdentity
from ..records.model import ActivityRecord, DailyTargetReportRecord, HourlyReportRecord


@dataclass(frozen=True)
class EmployeeDay:
    """All records of one employee on one date: the reconciler's input."""

    identity: EmployeeIdentity
    work_date: date
    activities: tuple[ActivityRecord, ...] = ()
    hourly_reports: tuple[HourlyReportRecord, ...] = ()
    daily_reports: tuple[DailyTargetReportRecord, ...] = ()

    @property
    def has_hourly_report(self) -> bool:
        return bool(self.hourly_reports)

    @property
    def has_daily_report(self) -> bool:
        """A site or office report. Leave applications and quarantined rows do not count."""
        return any(r.is_work_report for r in self.daily_reports)

    @property
    def has_submitted_report(self) -> bool:
        return self.has_hourly_report or self.has_daily_report

    @property
    def leave_application(self) -> Optional[DailyTargetReportRecord]:
        """Latest leave application still in effect. Cancelled ones are ignored."""

        candidates = [
            (idx, r)
            for idx, r in enumerate(self.daily_reports)
            if r.is_leave and r.effective_leave_status != LeaveStatus.CANCELLED
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda item: (item[1].created_at is not None, item[1].created_at, item[0]))[1]

    @property
    def latest_activity(self) -> Optional[ActivityRecord]:
        candidates = [(idx, r) for idx, r in enumerate(self.activities) if r.status]
        if not candidates:
            return None
        return max(candidates, key=lambda item: (item[1].logged_at is not None, item[1].logged_at, item[0]))[1]


@dataclass(frozen=True)
class Reconciliation:
    identity: EmployeeIdentity
    work_date: date
    status: AttendanceStatus
    has_hourly_report: bool
    has_daily_report: bool
    leave_status: Optional[LeaveStatus] = None
    leave_type: Optional[str] = None
    leave_overridden: bool = False
    note: Optional[str] = None

    @property
    def has_submitted_report(self) -> bool:
        return self.has_hourly_report or self.has_daily_report


@dataclass(frozen=True)
class RawCounts:
    activities: int = 0
    hourly_reports: int = 0
    daily_reports: int = 0
    unattributable: int = 0
    quarantined: int = 0

    @property
    def total(self) -> int:
        return self.activities + self.hourly_reports + self.daily_reports

    def __add__(self, other: "RawCounts") -> "RawCounts":
        return RawCounts(
            activities=self.activities + other.activities,
            hourly_reports=self.hourly_reports + other.hourly_reports,
            daily_reports=self.daily_reports + other.daily_reports,
            unattributable=self.unattributable + other.unattributable,
            quarantined=self.quarantined + other.quarantined,
        )


@dataclass(frozen=True)
class DateSummary:
    total: int = 0
    present: int = 0
    absent: int = 0
    on_leave: int = 0
    pending_approval: int = 0
    unknown: int = 0

    @classmethod
    def from_statuses(cls, statuses) -> "DateSummary":
        counts = {status: 0 for status in AttendanceStatus}
        total = 0
        for status in statuses:
            counts[status] += 1
            total += 1
        return cls(
            total=total,
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            on_leave=counts[AttendanceStatus.ON_LEAVE],
            pending_approval=counts[AttendanceStatus.PENDING_APPROVAL],
            unknown=counts[AttendanceStatus.UNKNOWN],
        )

    def __add__(self, other: "DateSummary") -> "DateSummary":
        return DateSummary(
            total=self.total + other.total,
            present=self.present + other.present,
            absent=self.absent + other.absent,
            on_leave=self.on_leave + other.on_leave,
            pending_approval=self.pending_approval + other.pending_approval,
            unknown=self.unknown + other.unknown,
        )


@dataclass(frozen=True)
class DateAttendance:
    work_date: date
    summary: DateSummary
    employees: tuple[Reconciliation, ...]
    raw_counts: RawCounts = field(default_factory=RawCounts)

    def names_with(self, status: AttendanceStatus) -> list[str]:
        return [r.identity.display_name for r in self.employees if r.status == status]

    @property
    def present_employees(self) -> list[str]:
        return self.names_with(AttendanceStatus.PRESENT)

    @property
    def absent_employees(self) -> list[str]:
        return self.names_with(AttendanceStatus.ABSENT)

    @property
    def leave_employees(self) -> list[str]:
        return self.names_with(AttendanceStatus.ON_LEAVE)

    @property
    def pending_employees(self) -> list[str]:
        return self.names_with(AttendanceStatus.PENDING_APPROVAL)


@dataclass(frozen=True)
class RangeAttendance:
    start_date: date
    end_date: date
    per_date: dict[date, DateAttendance]
    total_days: int
    total_employees: int
    totals: DateSummary
    raw_counts: RawCounts

    @property
    def dates_with_data(self) -> list[date]:
        """Newest first."""
        return sorted(self.per_date, reverse=True)
