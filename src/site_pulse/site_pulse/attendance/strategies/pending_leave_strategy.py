from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import EmployeeDay
from .base import ReconcileStrategy, StatusDecision


class PendingLeaveStrategy(ReconcileStrategy):
    """Pending leave stays pending even when a report was submitted."""

    def decide(self, day: EmployeeDay) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PENDING_APPROVAL, note="Leave awaiting approval")
