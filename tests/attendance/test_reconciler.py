from datetime import datetime

import pytest

from src.site_pulse.site_pulse.attendance.model import EmployeeDay
from src.site_pulse.site_pulse.attendance.reconciler import StatusReconciler
from src.site_pulse.site_pulse.core.enums import AttendanceStatus, LeaveStatus, LocationType
from src.site_pulse.site_pulse.identity.model import EmployeeIdentity
from tests.builders import D, activity, daily, hourly, leave, ref

E001 = ref(code="E001")
IDENTITY = EmployeeIdentity(employee_code="E001")


def _day(activities=(), hourly_reports=(), daily_reports=()):
    return EmployeeDay(
        identity=IDENTITY,
        work_date=D,
        activities=tuple(activities),
        hourly_reports=tuple(hourly_reports),
        daily_reports=tuple(daily_reports),
    )


@pytest.fixture
def reconciler():
    return StatusReconciler()


def test_activity_leave_status_only_means_on_leave(reconciler):
    day = _day(activities=[activity(E001, "leave")])

    assert reconciler.reconcile(day) == AttendanceStatus.ON_LEAVE


def test_report_overrides_rejected_leave(reconciler):
    day = _day(hourly_reports=[hourly(E001)], daily_reports=[leave(E001, LeaveStatus.REJECTED)])

    result = reconciler.explain(day)

    assert result.status == AttendanceStatus.PRESENT
    assert result.leave_overridden
    assert result.leave_status == LeaveStatus.REJECTED
    assert result.has_hourly_report


def test_site_report_also_overrides_rejected_leave(reconciler):
    day = _day(daily_reports=[leave(E001, LeaveStatus.REJECTED), daily(E001, LocationType.SITE)])

    assert reconciler.reconcile(day) == AttendanceStatus.PRESENT


def test_rejected_leave_without_report_is_absent(reconciler):
    # a self-reported activity is not a submitted report
    day = _day(activities=[activity(E001, "present")], daily_reports=[leave(E001, LeaveStatus.REJECTED)])

    result = reconciler.explain(day)

    assert result.status == AttendanceStatus.ABSENT
    assert not result.leave_overridden


def test_approved_leave_wins_over_report(reconciler):
    day = _day(hourly_reports=[hourly(E001)], daily_reports=[leave(E001, LeaveStatus.APPROVED)])

    assert reconciler.reconcile(day) == AttendanceStatus.ON_LEAVE


def test_pending_leave_is_not_overridden_by_report(reconciler):
    day = _day(
        hourly_reports=[hourly(E001)],
        daily_reports=[leave(E001, LeaveStatus.PENDING), daily(E001, LocationType.OFFICE)],
    )

    assert reconciler.reconcile(day) == AttendanceStatus.PENDING_APPROVAL


def test_cancelled_leave_is_ignored(reconciler):
    assert reconciler.reconcile(_day(daily_reports=[leave(E001, LeaveStatus.CANCELLED)])) == AttendanceStatus.ABSENT
    day = _day(hourly_reports=[hourly(E001)], daily_reports=[leave(E001, LeaveStatus.CANCELLED)])
    assert reconciler.reconcile(day) == AttendanceStatus.PRESENT


def test_report_beats_activity_status_without_leave(reconciler):
    day = _day(activities=[activity(E001, "absent")], daily_reports=[daily(E001, LocationType.SITE)])

    assert reconciler.reconcile(day) == AttendanceStatus.PRESENT


def test_no_leave_no_report_no_activity_is_absent(reconciler):
    assert reconciler.reconcile(_day()) == AttendanceStatus.ABSENT


def test_unknown_activity_status_is_surfaced(reconciler):
    result = reconciler.explain(_day(activities=[activity(E001, "wfh")]))

    assert result.status == AttendanceStatus.UNKNOWN
    assert "wfh" in result.note


def test_latest_activity_wins(reconciler):
    day = _day(
        activities=[
            activity(E001, "absent", logged_at=datetime(2024, 1, 10, 18, 0)),
            activity(E001, "present", logged_at=datetime(2024, 1, 10, 8, 0)),
        ]
    )

    assert reconciler.reconcile(day) == AttendanceStatus.ABSENT


def test_latest_leave_application_wins(reconciler):
    day = _day(
        daily_reports=[
            leave(E001, LeaveStatus.APPROVED, created_at=datetime(2024, 1, 9, 10, 0)),
            leave(E001, LeaveStatus.REJECTED, created_at=datetime(2024, 1, 9, 9, 0)),
        ]
    )

    assert reconciler.reconcile(day) == AttendanceStatus.ON_LEAVE


def test_leave_applications_without_timestamp_fall_back_to_input_order(reconciler):
    day = _day(daily_reports=[leave(E001, LeaveStatus.APPROVED), leave(E001, LeaveStatus.REJECTED)])

    assert reconciler.reconcile(day) == AttendanceStatus.ABSENT


@pytest.mark.parametrize(
    "leave_type,expected",
    [
        ("sick", AttendanceStatus.ON_LEAVE),
        ("Casual", AttendanceStatus.ON_LEAVE),
        ("earned", AttendanceStatus.PENDING_APPROVAL),
        ("sabbatical", AttendanceStatus.PENDING_APPROVAL),
    ],
)
def test_missing_leave_status_is_derived_from_leave_type(reconciler, leave_type, expected):
    day = _day(daily_reports=[leave(E001, None, leave_type=leave_type)])

    assert reconciler.reconcile(day) == expected


def test_reconcile_is_deterministic(reconciler):
    day = _day(activities=[activity(E001, "present")], daily_reports=[leave(E001, LeaveStatus.REJECTED)])

    assert reconciler.explain(day) == reconciler.explain(day)
