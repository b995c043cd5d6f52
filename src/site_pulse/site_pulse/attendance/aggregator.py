from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from ..common.validators import require_date_range
from ..core.exceptions import UnattributableRecordError
from ..identity.model import EmployeeIdentity
from ..identity.resolver import IdentityResolver
from ..records.model import RecordSet
from .model import DateAttendance, DateSummary, EmployeeDay, RangeAttendance, RawCounts
from .reconciler import StatusReconciler

logger = logging.getLogger(__name__)

_GroupKey = tuple[EmployeeIdentity, date]


class _DayBuilder:
    def __init__(self):
        self.activities = []
        self.hourly_reports = []
        self.daily_reports = []

    def build(self, identity: EmployeeIdentity, work_date: date) -> EmployeeDay:
        return EmployeeDay(
            identity=identity,
            work_date=work_date,
            activities=tuple(self.activities),
            hourly_reports=tuple(self.hourly_reports),
            daily_reports=tuple(self.daily_reports),
        )


class AttendanceAggregator:
    """Run the reconciler over already-filtered records and roll up the results.

    Records that cannot be attributed to an employee, and daily reports without a
    usable location, are counted in the raw totals only; they never reach a
    per-employee status.
    """

    def __init__(self, resolver: IdentityResolver, reconciler: Optional[StatusReconciler] = None):
        self._resolver = resolver
        self._reconciler = reconciler or StatusReconciler()

    def group(self, records: RecordSet) -> tuple[list[EmployeeDay], dict[date, int]]:
        builders: dict[_GroupKey, _DayBuilder] = defaultdict(_DayBuilder)
        unattributable: dict[date, int] = defaultdict(int)

        streams = (
            ("activity", records.activities, lambda r: r.date, "activities"),
            ("hourly report", records.hourly_reports, lambda r: r.report_date, "hourly_reports"),
            ("daily report", records.daily_reports, lambda r: r.report_date, "daily_reports"),
        )
        for kind, items, date_of, bucket in streams:
            for record in items:
                try:
                    identity = self._resolver.require(record.employee, kind=kind, record_id=record.id)
                except UnattributableRecordError as e:
                    logger.warning("%s; excluded from per-employee attendance", e)
                    unattributable[date_of(record)] += 1
                    continue
                if getattr(record, "is_quarantined", False):
                    continue
                getattr(builders[(identity, date_of(record))], bucket).append(record)

        days = [builder.build(identity, work_date) for (identity, work_date), builder in builders.items()]
        days.sort(key=lambda d: (d.work_date, d.identity.sort_key()))
        return days, dict(unattributable)

    @staticmethod
    def _raw_counts(records: RecordSet, work_date: date, unattributable: dict[date, int]) -> RawCounts:
        return RawCounts(
            activities=sum(1 for r in records.activities if r.date == work_date),
            hourly_reports=sum(1 for r in records.hourly_reports if r.report_date == work_date),
            daily_reports=sum(1 for r in records.daily_reports if r.report_date == work_date),
            unattributable=unattributable.get(work_date, 0),
            quarantined=sum(1 for r in records.daily_reports if r.report_date == work_date and r.is_quarantined),
        )

    def _date_attendance(
        self,
        work_date: date,
        days: list[EmployeeDay],
        records: RecordSet,
        unattributable: dict[date, int],
    ) -> DateAttendance:
        employees = tuple(self._reconciler.explain(day) for day in days)
        return DateAttendance(
            work_date=work_date,
            summary=DateSummary.from_statuses(r.status for r in employees),
            employees=employees,
            raw_counts=self._raw_counts(records, work_date, unattributable),
        )

    def aggregate_date(self, work_date: date, records: RecordSet) -> DateAttendance:
        records = records.between(work_date, work_date)
        days, unattributable = self.group(records)
        return self._date_attendance(work_date, days, records, unattributable)

    def aggregate_range(self, start_date: date, end_date: date, records: RecordSet) -> RangeAttendance:
        require_date_range(start_date, end_date)
        records = records.between(start_date, end_date)
        days, unattributable = self.group(records)

        by_date: dict[date, list[EmployeeDay]] = defaultdict(list)
        for day in days:
            by_date[day.work_date].append(day)

        per_date = {
            work_date: self._date_attendance(work_date, by_date[work_date], records, unattributable)
            for work_date in sorted(by_date)
        }

        totals = DateSummary()
        raw = RawCounts()
        for attendance in per_date.values():
            totals = totals + attendance.summary
            raw = raw + attendance.raw_counts
        # Dates holding only unattributable or quarantined records still count as raw.
        record_dates = {r.date for r in records.activities}
        record_dates.update(r.report_date for r in records.hourly_reports)
        record_dates.update(r.report_date for r in records.daily_reports)
        for work_date in sorted(record_dates):
            if work_date not in per_date:
                raw = raw + self._raw_counts(records, work_date, unattributable)

        return RangeAttendance(
            start_date=start_date,
            end_date=end_date,
            per_date=per_date,
            total_days=len(per_date),
            total_employees=len({day.identity for day in days}),
            totals=totals,
            raw_counts=raw,
        )
