from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LeaveStatus
from .model import EmployeeDay
from .strategies.approved_leave_strategy import ApprovedLeaveStrategy
from .strategies.base import ReconcileStrategy
from .strategies.no_leave_strategy import NoLeaveStrategy
from .strategies.pending_leave_strategy import PendingLeaveStrategy
from .strategies.rejected_leave_strategy import RejectedLeaveStrategy


@dataclass
class ReconcileStrategyFactory:
    """Factory Pattern: choose the strategy from the leave application in effect."""

    def for_day(self, day: EmployeeDay) -> ReconcileStrategy:
        leave = day.leave_application
        if leave is None:
            return NoLeaveStrategy()

        status = leave.effective_leave_status
        if status == LeaveStatus.APPROVED:
            return ApprovedLeaveStrategy()
        if status == LeaveStatus.REJECTED:
            return RejectedLeaveStrategy()
        return PendingLeaveStrategy()
