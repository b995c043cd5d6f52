from __future__ import annotations

import logging
import math
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from functools import partial
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_date_range
from ..core.constants import (
    DEFAULT_ACTIVITY_PAGE_SIZE,
    DEFAULT_AVAILABLE_DATES_LIMIT,
    DEFAULT_AVAILABLE_DATES_WINDOW_DAYS,
    DEFAULT_FETCH_WORKERS,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
    MAX_ACTIVITY_PAGE_SIZE,
)
from ..core.enums import ActivityStatus
from ..core.exceptions import AuthorizationError, DataSourceUnavailableError, NotFoundError, ValidationError
from ..identity.access import AccessFilter, has_full_access
from ..identity.model import CallerContext, EmployeeIdentity, EmployeeRef
from ..identity.resolver import IdentityResolver
from ..records.model import ActivityRecord, DailyTargetReportRecord, HourlyReportRecord, RecordSet
from ..records.repository import ActivityRepository, ReportingRepository
from ..users.model import Employee
from ..users.repository import EmployeeDirectory
from .aggregator import AttendanceAggregator
from .model import DateAttendance, RangeAttendance
from .reconciler import StatusReconciler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateSummaryView:
    attendance: DateAttendance
    activities: list[tuple[Optional[EmployeeIdentity], ActivityRecord]]
    daily_reports: list[tuple[EmployeeIdentity, DailyTargetReportRecord]]
    hourly_reports: list[tuple[Optional[EmployeeIdentity], HourlyReportRecord]]


@dataclass(frozen=True)
class RecentEntry:
    work_date: date
    time: Optional[time]
    project: Optional[str]
    status: Optional[str]
    source: str
    activity_target: Optional[str] = None
    problem: Optional[str] = None
    leave_reason: Optional[str] = None
    logged_at: Optional[datetime] = None


@dataclass(frozen=True)
class EngineerProfile:
    employee: Employee
    recent: list[RecentEntry]


@dataclass(frozen=True)
class ActivityQuery:
    """Filters for the activity list. A single date and a range may be combined."""

    work_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    engineer_id: Optional[str] = None
    status: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_ACTIVITY_PAGE_SIZE


@dataclass(frozen=True)
class ActivityPage:
    items: list[tuple[Optional[EmployeeIdentity], ActivityRecord]]
    total: int
    page: int
    total_pages: int


@dataclass(frozen=True)
class ActivityStats:
    """Raw self-reported status counts for one date (no reconciliation)."""

    work_date: date
    total_activities: int
    active_employees: int
    present_count: int
    leave_count: int
    absent_count: int
    absentees: list[tuple[Optional[EmployeeIdentity], ActivityRecord]]


class AttendanceService:
    """Fetch records, apply visibility and hand them to the aggregator.

    The three record stores are read concurrently. If any of them fails the
    request fails as a whole; a partial view could misreport who was present.
    """

    def __init__(
        self,
        activities: ActivityRepository,
        reports: ReportingRepository,
        directory: EmployeeDirectory,
        *,
        reconciler: Optional[StatusReconciler] = None,
        fetch_workers: int = DEFAULT_FETCH_WORKERS,
        available_dates_window_days: int = DEFAULT_AVAILABLE_DATES_WINDOW_DAYS,
        available_dates_limit: int = DEFAULT_AVAILABLE_DATES_LIMIT,
        recent_limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT,
    ):
        self._activities = activities
        self._reports = reports
        self._directory = directory
        self._reconciler = reconciler or StatusReconciler()
        self._fetch_workers = max(int(fetch_workers), 1)
        self._window_days = int(available_dates_window_days)
        self._dates_limit = int(available_dates_limit)
        self._recent_limit = int(recent_limit)

    def _fetch_all(self, tasks: dict[str, Callable[[], object]]) -> dict[str, object]:
        with ThreadPoolExecutor(max_workers=self._fetch_workers) as pool:
            futures = {name: pool.submit(fn) for name, fn in tasks.items()}
            results: dict[str, object] = {}
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except Exception as e:
                    logger.exception("Fetching %s failed", name)
                    raise DataSourceUnavailableError(name) from e
        return results

    def _fetch_records(self, start: date, end: date) -> tuple[list[Employee], RecordSet]:
        fetched = self._fetch_all(
            {
                "employee directory": self._directory.list_all,
                "activities": lambda: self._activities.list_between(start_date=start, end_date=end),
                "hourly reports": lambda: self._reports.list_hourly_between(start_date=start, end_date=end),
                "daily target reports": lambda: self._reports.list_daily_between(start_date=start, end_date=end),
            }
        )
        records = RecordSet(
            activities=tuple(fetched["activities"]),
            hourly_reports=tuple(fetched["hourly reports"]),
            daily_reports=tuple(fetched["daily target reports"]),
        )
        return list(fetched["employee directory"]), records

    @staticmethod
    def _caller_ref(caller: CallerContext) -> EmployeeRef:
        identity = caller.identity
        return EmployeeRef(employee_code=identity.employee_code, username=identity.username, user_id=identity.internal_id)

    def _visible(self, employees: list[Employee], records: RecordSet, caller: CallerContext):
        resolver = IdentityResolver(
            directory=[e.to_identity() for e in employees],
            refs=[self._caller_ref(caller), *records.refs()],
        )
        access = AccessFilter(resolver)
        visible = RecordSet(
            activities=access.filter(records.activities, caller),
            hourly_reports=access.filter(records.hourly_reports, caller),
            daily_reports=access.filter(records.daily_reports, caller),
        )
        return resolver, visible

    def attendance_for_date(self, *, work_date: date, caller: CallerContext) -> DateAttendance:
        employees, records = self._fetch_records(work_date, work_date)
        resolver, visible = self._visible(employees, records, caller)
        return AttendanceAggregator(resolver, self._reconciler).aggregate_date(work_date, visible)

    def attendance_for_range(self, *, start_date: date, end_date: date, caller: CallerContext) -> RangeAttendance:
        require_date_range(start_date, end_date)
        employees, records = self._fetch_records(start_date, end_date)
        resolver, visible = self._visible(employees, records, caller)
        return AttendanceAggregator(resolver, self._reconciler).aggregate_range(start_date, end_date, visible)

    def date_summary(self, *, work_date: date, caller: CallerContext) -> DateSummaryView:
        employees, records = self._fetch_records(work_date, work_date)
        resolver, visible = self._visible(employees, records, caller)
        attendance = AttendanceAggregator(resolver, self._reconciler).aggregate_date(work_date, visible)

        activities = sorted(
            ((resolver.resolve(r.employee), r) for r in visible.activities),
            key=lambda item: item[1].logged_at or datetime.min,
            reverse=True,
        )
        hourly = [(resolver.resolve(r.employee), r) for r in visible.hourly_reports]

        # One daily entry per employee; a report naming a project beats one that does not.
        daily: dict[EmployeeIdentity, DailyTargetReportRecord] = {}
        for record in visible.daily_reports:
            identity = resolver.resolve(record.employee)
            if identity is None or record.is_quarantined:
                continue
            existing = daily.get(identity)
            if existing is None or (not existing.project and record.project):
                daily[identity] = record

        return DateSummaryView(
            attendance=attendance,
            activities=activities,
            daily_reports=sorted(daily.items(), key=lambda item: item[0].sort_key()),
            hourly_reports=hourly,
        )

    def _visible_activities(self, fetch: Callable[[], Sequence[ActivityRecord]], caller: CallerContext):
        fetched = self._fetch_all({"employee directory": self._directory.list_all, "activities": fetch})
        records = RecordSet(activities=tuple(fetched["activities"]))
        resolver, visible = self._visible(list(fetched["employee directory"]), records, caller)
        return resolver, [(resolver.resolve(a.employee), a) for a in visible.activities]

    def available_dates(self, *, caller: CallerContext, today: Optional[date] = None) -> list[date]:
        """Dates in the trailing window with at least one visible activity entry, newest first."""

        today = today or now_local().date()
        start = today - timedelta(days=self._window_days)
        _, activities = self._visible_activities(
            partial(self._activities.list_between, start_date=start, end_date=today), caller
        )
        dates = sorted({a.date for _, a in activities}, reverse=True)
        return dates[: self._dates_limit]

    def engineer_profile(self, *, identifier: str, caller: CallerContext) -> EngineerProfile:
        employees = list(self._fetch_all({"employee directory": self._directory.list_all})["employee directory"])
        resolver = IdentityResolver(directory=[e.to_identity() for e in employees])
        identity = resolver.lookup(identifier)
        employee = next((e for e in employees if identity and e.user_id == identity.internal_id), None)
        if employee is None:
            raise NotFoundError("Engineer not found")

        if not has_full_access(caller.role) and not employee.to_identity().matches(caller.identity):
            raise AuthorizationError("You can only view your own activity")

        target = employee.to_identity()
        fetched = self._fetch_all(
            {
                "activities": lambda: self._activities.list_recent_for(target, limit=self._recent_limit),
                "daily target reports": lambda: self._reports.list_recent_daily_for(target, limit=self._recent_limit),
            }
        )
        recent = [
            RecentEntry(
                work_date=a.date,
                time=a.time,
                project=a.project,
                status=a.status,
                source="activity",
                problem=a.problem,
                leave_reason=a.leave_reason,
                logged_at=a.logged_at,
            )
            for a in fetched["activities"]
        ]
        recent.extend(
            RecentEntry(
                work_date=d.report_date,
                time=d.in_time,
                project=d.project,
                status="leave" if d.is_leave else ("present" if d.is_work_report else None),
                source="daily_report",
                activity_target=d.daily_target_achieved,
                leave_reason=d.leave_type,
                logged_at=d.created_at,
            )
            for d in fetched["daily target reports"]
        )
        recent.sort(key=lambda e: e.logged_at or datetime.combine(e.work_date, time()), reverse=True)
        return EngineerProfile(employee=employee, recent=recent[: self._recent_limit])

    @staticmethod
    def _newest_first(item: tuple[Optional[EmployeeIdentity], ActivityRecord]) -> tuple:
        record = item[1]
        return (record.date, record.logged_at or datetime.min, record.id)

    def list_activities(self, *, query: ActivityQuery, caller: CallerContext) -> ActivityPage:
        """Visible activity entries, newest first, one page at a time.

        The engineer filter only applies to callers with full access; everyone else is
        already limited to their own entries.
        """

        if query.page < 1:
            raise ValidationError("page must be a positive integer")
        if not 1 <= query.limit <= MAX_ACTIVITY_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_ACTIVITY_PAGE_SIZE}")
        if (query.start_date is None) != (query.end_date is None):
            raise ValidationError("startDate and endDate must be given together")
        if query.start_date is not None:
            require_date_range(query.start_date, query.end_date)

        if query.work_date is not None:
            fetch = partial(self._activities.list_between, start_date=query.work_date, end_date=query.work_date)
        elif query.start_date is not None:
            fetch = partial(self._activities.list_between, start_date=query.start_date, end_date=query.end_date)
        else:
            fetch = self._activities.list_all
        resolver, items = self._visible_activities(fetch, caller)

        if query.work_date is not None:
            items = [item for item in items if item[1].date == query.work_date]
        if query.start_date is not None:
            items = [item for item in items if query.start_date <= item[1].date <= query.end_date]
        if query.engineer_id and has_full_access(caller.role):
            target = resolver.lookup(query.engineer_id)
            items = [item for item in items if target is not None and item[0] == target]
        if query.status:
            wanted = query.status.strip().lower()
            items = [item for item in items if item[1].status == wanted]

        items.sort(key=self._newest_first, reverse=True)
        offset = (query.page - 1) * query.limit
        return ActivityPage(
            items=items[offset : offset + query.limit],
            total=len(items),
            page=query.page,
            total_pages=math.ceil(len(items) / query.limit),
        )

    def activity_stats(self, *, caller: CallerContext, today: Optional[date] = None) -> ActivityStats:
        today = today or now_local().date()
        _, items = self._visible_activities(
            partial(self._activities.list_between, start_date=today, end_date=today), caller
        )
        items = [item for item in items if item[1].date == today]
        by_status = Counter(a.status for _, a in items)
        items.sort(key=self._newest_first, reverse=True)
        return ActivityStats(
            work_date=today,
            total_activities=len(items),
            active_employees=len({identity for identity, _ in items if identity is not None}),
            present_count=by_status[ActivityStatus.PRESENT.value],
            leave_count=by_status[ActivityStatus.LEAVE.value],
            absent_count=by_status[ActivityStatus.ABSENT.value],
            absentees=[item for item in items if item[1].status == ActivityStatus.ABSENT.value],
        )
