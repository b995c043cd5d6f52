from src.site_pulse.site_pulse.attendance.factory import ReconcileStrategyFactory
from src.site_pulse.site_pulse.attendance.model import EmployeeDay
from src.site_pulse.site_pulse.attendance.strategies.approved_leave_strategy import ApprovedLeaveStrategy
from src.site_pulse.site_pulse.attendance.strategies.no_leave_strategy import NoLeaveStrategy
from src.site_pulse.site_pulse.attendance.strategies.pending_leave_strategy import PendingLeaveStrategy
from src.site_pulse.site_pulse.attendance.strategies.rejected_leave_strategy import RejectedLeaveStrategy
from src.site_pulse.site_pulse.core.enums import LeaveStatus
from src.site_pulse.site_pulse.identity.model import EmployeeIdentity
from tests.builders import D, daily, hourly, leave, ref

E001 = ref(code="E001")
IDENTITY = EmployeeIdentity(employee_code="E001")


def _day(*daily_reports, hourly_reports=()):
    return EmployeeDay(identity=IDENTITY, work_date=D, daily_reports=daily_reports, hourly_reports=hourly_reports)


def test_factory_without_leave_uses_no_leave_strategy():
    factory = ReconcileStrategyFactory()

    assert isinstance(factory.for_day(_day(daily(E001))), NoLeaveStrategy)
    assert isinstance(factory.for_day(_day(hourly_reports=(hourly(E001),))), NoLeaveStrategy)


def test_factory_picks_strategy_by_leave_status():
    factory = ReconcileStrategyFactory()

    assert isinstance(factory.for_day(_day(leave(E001, LeaveStatus.APPROVED))), ApprovedLeaveStrategy)
    assert isinstance(factory.for_day(_day(leave(E001, LeaveStatus.REJECTED))), RejectedLeaveStrategy)
    assert isinstance(factory.for_day(_day(leave(E001, LeaveStatus.PENDING))), PendingLeaveStrategy)


def test_factory_ignores_cancelled_leave():
    factory = ReconcileStrategyFactory()

    assert isinstance(factory.for_day(_day(leave(E001, LeaveStatus.CANCELLED))), NoLeaveStrategy)
