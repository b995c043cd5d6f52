from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import EmployeeDay
from .base import ReconcileStrategy, StatusDecision


class ApprovedLeaveStrategy(ReconcileStrategy):
    """Approved leave is final; a report on the same day does not change it."""

    def decide(self, day: EmployeeDay) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_LEAVE)
