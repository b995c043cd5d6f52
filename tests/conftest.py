from __future__ import annotations

from datetime import date

import pytest

from src.site_pulse.site_pulse.attendance.service import AttendanceService
from src.site_pulse.site_pulse.identity.model import EmployeeIdentity


class InMemoryActivities:
    def __init__(self, records=()):
        self.records = list(records)
        self.calls = []

    def list_all(self):
        return list(self.records)

    def list_between(self, *, start_date: date, end_date: date):
        self.calls.append((start_date, end_date))
        return [r for r in self.records if start_date <= r.date <= end_date]

    def list_recent_for(self, identity: EmployeeIdentity, *, limit: int):
        items = [r for r in self.records if identity.matches(r.employee)]
        items.sort(key=lambda r: r.logged_at, reverse=True)
        return items[:limit]


class InMemoryReports:
    def __init__(self, hourly=(), daily=()):
        self.hourly = list(hourly)
        self.daily = list(daily)

    def list_hourly_between(self, *, start_date: date, end_date: date):
        return [r for r in self.hourly if start_date <= r.report_date <= end_date]

    def list_daily_between(self, *, start_date: date, end_date: date):
        return [r for r in self.daily if start_date <= r.report_date <= end_date]

    def list_recent_daily_for(self, identity: EmployeeIdentity, *, limit: int):
        items = [r for r in self.daily if identity.matches(r.employee)]
        items.sort(key=lambda r: r.report_date, reverse=True)
        return items[:limit]


class InMemoryDirectory:
    def __init__(self, employees=()):
        self.employees = list(employees)

    def list_all(self):
        return list(self.employees)


@pytest.fixture
def make_service():
    def _make(*, activities=(), hourly=(), daily=(), employees=(), **kwargs):
        return AttendanceService(
            InMemoryActivities(activities),
            InMemoryReports(hourly, daily),
            InMemoryDirectory(employees),
            **kwargs,
        )

    return _make
