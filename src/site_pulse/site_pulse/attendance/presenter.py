"""Domain results -> JSON-ready dictionaries (camelCase keys, ISO dates)."""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..identity.model import EmployeeIdentity
from ..records.model import ActivityRecord
from .model import DateAttendance, DateSummary, RangeAttendance, RawCounts, Reconciliation
from .service import ActivityPage, ActivityStats, DateSummaryView, EngineerProfile


def _time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value else None


def _datetime(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else None


def _identity(identity: Optional[EmployeeIdentity]) -> dict:
    if identity is None:
        return {"engineerName": None, "engineerId": None, "userId": None}
    return {
        "engineerName": identity.display_name,
        "engineerId": identity.employee_code,
        "userId": identity.internal_id,
    }


def _activity(identity: Optional[EmployeeIdentity], a: ActivityRecord) -> dict:
    return {
        "id": a.id,
        **_identity(identity),
        "date": format_iso_date(a.date),
        "time": _time(a.time),
        "project": a.project,
        "status": a.status,
        "startTime": _time(a.start_time),
        "endTime": _time(a.end_time),
        "problem": a.problem,
        "leaveReason": a.leave_reason,
        "loggedAt": _datetime(a.logged_at),
    }


def summary_to_dict(summary: DateSummary) -> dict:
    return {
        "total": summary.total,
        "present": summary.present,
        "absent": summary.absent,
        "on_leave": summary.on_leave,
        "pending_approval": summary.pending_approval,
        "unknown": summary.unknown,
    }


def counts_to_dict(counts: RawCounts) -> dict:
    return {
        "activityRecords": counts.activities,
        "hourlyReportRecords": counts.hourly_reports,
        "dailyReportRecords": counts.daily_reports,
        "unattributableRecords": counts.unattributable,
        "quarantinedRecords": counts.quarantined,
        "totalRecords": counts.total,
    }


def reconciliation_to_dict(r: Reconciliation) -> dict:
    return {
        **_identity(r.identity),
        "date": format_iso_date(r.work_date),
        "status": r.status.value,
        "hasHourlyReport": r.has_hourly_report,
        "hasDailyReport": r.has_daily_report,
        "hasSubmittedReport": r.has_submitted_report,
        "leaveStatus": r.leave_status.value if r.leave_status else None,
        "leaveType": r.leave_type,
        "leaveOverridden": r.leave_overridden,
        "note": r.note,
    }


def date_attendance_to_dict(attendance: DateAttendance) -> dict:
    return {
        "date": format_iso_date(attendance.work_date),
        "summary": summary_to_dict(attendance.summary),
        "attendance": [reconciliation_to_dict(r) for r in attendance.employees],
        "presentEmployees": attendance.present_employees,
        "absentEmployees": attendance.absent_employees,
        "leaveEmployees": attendance.leave_employees,
        "pendingEmployees": attendance.pending_employees,
        "counts": counts_to_dict(attendance.raw_counts),
    }


def range_attendance_to_dict(result: RangeAttendance) -> dict:
    return {
        "dateRange": {
            "startDate": format_iso_date(result.start_date),
            "endDate": format_iso_date(result.end_date),
        },
        "summary": {
            "totalDays": result.total_days,
            "totalEmployees": result.total_employees,
            **summary_to_dict(result.totals),
        },
        "dailyData": {format_iso_date(d): date_attendance_to_dict(a) for d, a in result.per_date.items()},
        "datesWithData": [format_iso_date(d) for d in result.dates_with_data],
        "counts": counts_to_dict(result.raw_counts),
    }


def date_summary_to_dict(view: DateSummaryView) -> dict:
    attendance = view.attendance
    return {
        "date": format_iso_date(attendance.work_date),
        "summary": summary_to_dict(attendance.summary),
        "activities": [_activity(identity, a) for identity, a in view.activities],
        "dailyReports": [
            {
                "id": d.id,
                **_identity(identity),
                "projectName": d.project,
                "locationType": d.location_type.value if d.location_type else None,
                "activityTarget": d.daily_target_achieved,
                "startTime": _time(d.in_time),
                "endTime": _time(d.out_time),
                "leaveType": d.leave_type,
                "leaveStatus": d.effective_leave_status.value if d.effective_leave_status else None,
            }
            for identity, d in view.daily_reports
        ],
        "hourlyReports": [
            {
                "id": h.id,
                **_identity(identity),
                "timePeriod": h.time_period,
                "projectName": h.project_name,
                "activityTarget": h.achieved,
                "problem": h.problem_faced,
            }
            for identity, h in view.hourly_reports
        ],
        "counts": counts_to_dict(attendance.raw_counts),
    }


def dates_to_list(dates: list[date]) -> list[str]:
    return [format_iso_date(d) for d in dates]


def engineer_profile_to_dict(profile: EngineerProfile) -> dict:
    employee = profile.employee
    return {
        "user": {
            "id": employee.user_id,
            "username": employee.username,
            "employeeId": employee.employee_code,
            "role": employee.role,
            "phone": employee.phone,
        },
        "recentActivity": [
            {
                "date": format_iso_date(e.work_date),
                "time": _time(e.time),
                "project": e.project,
                "status": e.status,
                "type": e.source,
                "activityTarget": e.activity_target,
                "problem": e.problem,
                "leaveReason": e.leave_reason,
                "loggedAt": _datetime(e.logged_at),
            }
            for e in profile.recent
        ],
    }


def activity_page_to_dict(page: ActivityPage) -> dict:
    return {
        "activities": [_activity(identity, a) for identity, a in page.items],
        "total": page.total,
        "page": page.page,
        "totalPages": page.total_pages,
    }


def activity_stats_to_dict(stats: ActivityStats) -> dict:
    return {
        "date": format_iso_date(stats.work_date),
        "totalActivities": stats.total_activities,
        "activeEmployees": stats.active_employees,
        "presentCount": stats.present_count,
        "leaveCount": stats.leave_count,
        "absentCount": stats.absent_count,
        "absentees": [
            {
                "engineerName": identity.display_name if identity else None,
                "engineerId": identity.employee_code if identity else None,
                "reason": a.problem,
            }
            for identity, a in stats.absentees
        ],
    }
