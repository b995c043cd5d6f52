from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus
from .factory import ReconcileStrategyFactory
from .model import EmployeeDay, Reconciliation


class StatusReconciler:
    """Compute the single attendance status of one employee on one date.

    Pure: the same EmployeeDay always yields the same result.
    """

    def __init__(self, strategy_factory: Optional[ReconcileStrategyFactory] = None):
        self._factory = strategy_factory or ReconcileStrategyFactory()

    def reconcile(self, day: EmployeeDay) -> AttendanceStatus:
        return self.explain(day).status

    def explain(self, day: EmployeeDay) -> Reconciliation:
        strategy = self._factory.for_day(day)
        decision = strategy.decide(day)
        leave = day.leave_application
        return Reconciliation(
            identity=day.identity,
            work_date=day.work_date,
            status=decision.status,
            has_hourly_report=day.has_hourly_report,
            has_daily_report=day.has_daily_report,
            leave_status=leave.effective_leave_status if leave else None,
            leave_type=leave.leave_type if leave else None,
            leave_overridden=decision.leave_overridden,
            note=decision.note,
        )
