from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import EmployeeDay
from .base import ReconcileStrategy, StatusDecision


class RejectedLeaveStrategy(ReconcileStrategy):
    """Rejected leave: a submitted hourly or site/office report means the employee worked."""

    def decide(self, day: EmployeeDay) -> StatusDecision:
        if day.has_submitted_report:
            return StatusDecision(
                status=AttendanceStatus.PRESENT,
                note="Report submitted overrides rejected leave",
                leave_overridden=True,
            )
        return StatusDecision(status=AttendanceStatus.ABSENT, note="Leave was rejected and no report submitted")
