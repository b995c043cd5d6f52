from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..identity.model import EmployeeIdentity
from .model import ActivityRecord, DailyTargetReportRecord, HourlyReportRecord


class ActivityRepository(Protocol):
    def list_all(self) -> Sequence[ActivityRecord]:
        raise NotImplementedError

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[ActivityRecord]:
        """Activity entries dated start_date..end_date inclusive, newest logged first."""

        raise NotImplementedError

    def list_recent_for(self, identity: EmployeeIdentity, *, limit: int) -> Sequence[ActivityRecord]:
        """Latest entries whose engineer id or name matches the identity."""

        raise NotImplementedError


class ReportingRepository(Protocol):
    def list_hourly_between(self, *, start_date: date, end_date: date) -> Sequence[HourlyReportRecord]:
        raise NotImplementedError

    def list_daily_between(self, *, start_date: date, end_date: date) -> Sequence[DailyTargetReportRecord]:
        """Daily target reports, leave applications included, oldest created first."""

        raise NotImplementedError

    def list_recent_daily_for(self, identity: EmployeeIdentity, *, limit: int) -> Sequence[DailyTargetReportRecord]:
        raise NotImplementedError
