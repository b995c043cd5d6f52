from datetime import date

import pytest

from src.site_pulse.site_pulse.attendance.aggregator import AttendanceAggregator
from src.site_pulse.site_pulse.core.enums import AttendanceStatus, LeaveStatus
from src.site_pulse.site_pulse.core.exceptions import ValidationError
from src.site_pulse.site_pulse.identity.model import EmployeeIdentity, EmployeeRef
from src.site_pulse.site_pulse.identity.resolver import IdentityResolver
from src.site_pulse.site_pulse.records.model import RecordSet
from tests.builders import D, activity, daily, hourly, leave, ref

DIRECTORY = [
    EmployeeIdentity(internal_id=1, employee_code="E001", username="alice"),
    EmployeeIdentity(internal_id=2, employee_code="E002", username="bob"),
    EmployeeIdentity(internal_id=3, employee_code="E003", username="carol"),
]


def _aggregator(records: RecordSet) -> AttendanceAggregator:
    return AttendanceAggregator(IdentityResolver(directory=DIRECTORY, refs=records.refs()))


def _assert_consistent(summary):
    assert (
        summary.present + summary.absent + summary.on_leave + summary.pending_approval + summary.unknown
        == summary.total
    )


def test_single_date_summary():
    records = RecordSet(
        activities=(activity(ref(code="E001"), "leave"), activity(ref(name="carol"), "absent")),
        hourly_reports=(hourly(ref(name="bob")),),
        daily_reports=(leave(ref(code="E002"), LeaveStatus.REJECTED),),
    )

    result = _aggregator(records).aggregate_date(D, records)

    assert result.summary.total == 3
    assert result.summary.on_leave == 1
    assert result.summary.present == 1
    assert result.summary.absent == 1
    _assert_consistent(result.summary)
    assert result.present_employees == ["bob"]
    assert result.leave_employees == ["alice"]
    assert result.absent_employees == ["carol"]


def test_employee_without_records_is_not_counted():
    records = RecordSet(activities=(activity(ref(code="E001"), "present"),))

    result = _aggregator(records).aggregate_date(D, records)

    assert result.summary.total == 1
    assert result.summary.absent == 0
    assert [r.identity.employee_code for r in result.employees] == ["E001"]


def test_records_under_different_keys_count_once():
    records = RecordSet(
        activities=(activity(ref(code="E001"), "present"),),
        hourly_reports=(hourly(ref(name="alice")),),
        daily_reports=(daily(ref(user_id=1)),),
    )

    result = _aggregator(records).aggregate_date(D, records)

    assert result.summary.total == 1
    (alice,) = result.employees
    assert alice.status == AttendanceStatus.PRESENT
    assert alice.has_hourly_report and alice.has_daily_report


def test_unattributable_records_only_reach_raw_counts():
    records = RecordSet(
        activities=(activity(EmployeeRef(), "present"), activity(ref(code="E001"), "present")),
    )

    result = _aggregator(records).aggregate_date(D, records)

    assert result.summary.total == 1
    assert result.raw_counts.activities == 2
    assert result.raw_counts.unattributable == 1


def test_pending_and_unknown_are_counted():
    records = RecordSet(
        activities=(activity(ref(code="E003"), "on-site"),),
        daily_reports=(leave(ref(code="E001"), LeaveStatus.PENDING),),
    )

    result = _aggregator(records).aggregate_date(D, records)

    assert result.summary.pending_approval == 1
    assert result.summary.unknown == 1
    assert result.pending_employees == ["alice"]
    _assert_consistent(result.summary)


def test_records_outside_the_date_are_ignored():
    records = RecordSet(activities=(activity(ref(code="E001"), on=date(2024, 1, 9)),))

    result = _aggregator(records).aggregate_date(D, records)

    assert result.summary.total == 0
    assert result.employees == ()


def test_aggregation_is_idempotent():
    records = RecordSet(
        activities=(activity(ref(code="E001"), "present"), activity(ref(name="bob"), "absent")),
        hourly_reports=(hourly(ref(code="E002")),),
    )
    aggregator = _aggregator(records)

    assert aggregator.aggregate_date(D, records) == aggregator.aggregate_date(D, records)


def test_range_skips_days_without_records():
    day1, day2, day3 = date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)
    records = RecordSet(
        activities=(activity(ref(code="E001"), "present", on=day1),),
        hourly_reports=(hourly(ref(name="alice"), on=day3),),
    )

    result = _aggregator(records).aggregate_range(day1, day3, records)

    assert result.total_days == 2
    assert result.total_employees == 1
    assert list(result.per_date) == [day1, day3]
    assert day2 not in result.per_date
    assert result.dates_with_data == [day3, day1]
    assert result.totals.present == 2
    _assert_consistent(result.totals)


def test_range_totals_add_up_per_date_summaries():
    day1, day2 = date(2024, 1, 1), date(2024, 1, 2)
    records = RecordSet(
        activities=(
            activity(ref(code="E001"), "present", on=day1),
            activity(ref(code="E002"), "absent", on=day1),
            activity(ref(code="E002"), "present", on=day2),
            activity(EmployeeRef(), "present", on=day2),
        ),
        daily_reports=(leave(ref(code="E003"), LeaveStatus.APPROVED, on=day2),),
    )

    result = _aggregator(records).aggregate_range(day1, day2, records)

    assert result.total_employees == 3
    assert result.totals.total == sum(a.summary.total for a in result.per_date.values()) == 4
    assert result.totals.on_leave == 1
    assert result.raw_counts.activities == 4
    assert result.raw_counts.unattributable == 1


def test_range_counts_unattributable_records_on_otherwise_empty_days():
    day1, day2 = date(2024, 1, 1), date(2024, 1, 2)
    records = RecordSet(
        activities=(activity(ref(code="E001"), "present", on=day1), activity(EmployeeRef(), "present", on=day2)),
    )

    result = _aggregator(records).aggregate_range(day1, day2, records)

    assert result.total_days == 1
    assert result.raw_counts.activities == 2
    assert result.raw_counts.unattributable == 1


def test_range_rejects_inverted_dates():
    records = RecordSet()

    with pytest.raises(ValidationError):
        _aggregator(records).aggregate_range(date(2024, 1, 3), date(2024, 1, 1), records)


def test_daily_report_without_location_never_counts_as_presence():
    quarantined = daily(ref(code="E002"), None)
    records = RecordSet(daily_reports=(leave(ref(code="E002"), LeaveStatus.REJECTED), quarantined))

    result = _aggregator(records).aggregate_date(D, records)

    (bob,) = result.employees
    assert bob.status == AttendanceStatus.ABSENT
    assert not bob.leave_overridden
    assert result.raw_counts.daily_reports == 2
    assert result.raw_counts.quarantined == 1


def test_quarantined_only_dates_count_raw_but_not_as_days():
    day1, day2 = date(2024, 1, 1), date(2024, 1, 2)
    records = RecordSet(
        activities=(activity(ref(code="E001"), "present", on=day1),),
        daily_reports=(daily(ref(code="E002"), None, on=day2),),
    )

    result = _aggregator(records).aggregate_range(day1, day2, records)

    assert result.total_days == 1
    assert result.total_employees == 1
    assert result.raw_counts.daily_reports == 1
    assert result.raw_counts.quarantined == 1
