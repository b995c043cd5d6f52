from __future__ import annotations

import logging

from ...core.enums import ActivityStatus, AttendanceStatus
from ..model import EmployeeDay
from .base import ReconcileStrategy, StatusDecision

logger = logging.getLogger(__name__)

_ACTIVITY_STATUS_MAP = {
    ActivityStatus.PRESENT.value: AttendanceStatus.PRESENT,
    ActivityStatus.ABSENT.value: AttendanceStatus.ABSENT,
    ActivityStatus.LEAVE.value: AttendanceStatus.ON_LEAVE,
}


class NoLeaveStrategy(ReconcileStrategy):
    """No leave in effect: reports first, then the self-reported activity status, else absent."""

    def decide(self, day: EmployeeDay) -> StatusDecision:
        if day.has_submitted_report:
            return StatusDecision(status=AttendanceStatus.PRESENT)

        activity = day.latest_activity
        if activity is None:
            return StatusDecision(status=AttendanceStatus.ABSENT, note="No report submitted")

        status = _ACTIVITY_STATUS_MAP.get(activity.status)
        if status is None:
            logger.warning(
                "Activity %s for %s has unknown status %r",
                activity.id,
                day.identity.display_name,
                activity.status,
            )
            return StatusDecision(status=AttendanceStatus.UNKNOWN, note=f"Unrecognised status {activity.status!r}")
        return StatusDecision(status=status)
