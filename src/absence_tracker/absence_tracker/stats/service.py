from __future__ import annotations

import math
from collections import Counter
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..absences.model import AbsenceRecord
from ..absences.service import AbsenceTrackerService
from ..common.datetime_utils import now_local
from ..common.time_utils import duration_minutes, format_duration
from ..core.constants import TOP_EMPLOYEES_LIMIT, TOP_TYPES_LIMIT, UNKNOWN_EMPLOYEE
from ..core.enums import AbsenceType
from ..core.exceptions import AggregationDataError, ValidationError
from ..employees.model import Employee
from .export import build_csv_rows
from .model import AbsenceFilter, DashboardReport, DateRange, DurationStats, GroupedCounts, MonthlyMetrics


def employee_names(employees: Iterable[Employee]) -> dict[str, str]:
    return {e.id: e.name for e in employees}


def resolve_name(names: Mapping[str, str], employee_id: str) -> str:
    return names.get(employee_id, UNKNOWN_EMPLOYEE)


def in_range(absences: Iterable[AbsenceRecord], date_range: Optional[DateRange]) -> list[AbsenceRecord]:
    date_range = date_range or DateRange()
    return [a for a in absences if date_range.contains(a.date)]


def _sorted_desc(counts: Mapping) -> list[tuple]:
    # Stable: equal counts keep first-encountered order.
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)


def monthly_metrics(
    employees: Sequence[Employee],
    absences: Iterable[AbsenceRecord],
    *,
    now: Optional[datetime] = None,
) -> MonthlyMetrics:
    """Headline metrics for the current calendar month.

    Independent of any dashboard filter: the month is taken from ``now``
    (wall clock by default). Ties for the most common type go to the type
    encountered first.
    """

    month_prefix = (now or now_local()).strftime("%Y-%m")
    this_month = [a for a in absences if a.date[:7] == month_prefix]
    type_counts = Counter(a.type for a in this_month)
    ranked = _sorted_desc(type_counts)
    return MonthlyMetrics(
        total_employees=len(employees),
        absences_this_month=len(this_month),
        most_common_type=ranked[0][0] if ranked else None,
    )


def grouped_counts(
    employees: Iterable[Employee],
    absences: Iterable[AbsenceRecord],
    date_range: Optional[DateRange] = None,
) -> GroupedCounts:
    names = employee_names(employees)
    filtered = in_range(absences, date_range)
    by_type: dict[AbsenceType, int] = {}
    by_employee: dict[str, int] = {}
    for a in filtered:
        by_type[a.type] = by_type.get(a.type, 0) + 1
        name = resolve_name(names, a.employee_id)
        by_employee[name] = by_employee.get(name, 0) + 1
    return GroupedCounts(by_type=by_type, by_employee=_sorted_desc(by_employee))


def absence_minutes(absence: AbsenceRecord) -> int:
    try:
        return duration_minutes(absence.start_time, absence.end_time, allow_over_midnight=False)
    except ValidationError as exc:
        raise AggregationDataError(f"Absence {absence.id} has an invalid time range: {exc}", absence_id=absence.id) from exc


def duration_stats(
    employees: Iterable[Employee],
    absences: Iterable[AbsenceRecord],
    date_range: Optional[DateRange] = None,
) -> DurationStats:
    names = employee_names(employees)
    filtered = in_range(absences, date_range)

    total = 0
    minutes_by_employee: dict[str, int] = {}
    counts_by_type: dict[AbsenceType, int] = {}
    for a in filtered:
        mins = absence_minutes(a)
        total += mins
        name = resolve_name(names, a.employee_id)
        minutes_by_employee[name] = minutes_by_employee.get(name, 0) + mins
        counts_by_type[a.type] = counts_by_type.get(a.type, 0) + 1

    active_days = len({a.date for a in filtered}) or 1
    avg = math.floor(total / active_days + 0.5)

    return DurationStats(
        total_minutes=total,
        total_formatted=format_duration(total),
        top_employees_by_duration=_sorted_desc(minutes_by_employee)[:TOP_EMPLOYEES_LIMIT],
        top_types=_sorted_desc(counts_by_type)[:TOP_TYPES_LIMIT],
        avg_per_day_minutes=avg,
        avg_per_day_formatted=format_duration(avg),
        count=len(filtered),
    )


def filter_absences(absences: Iterable[AbsenceRecord], criteria: Optional[AbsenceFilter] = None) -> list[AbsenceRecord]:
    """Dashboard table rows: filtered, most recent date first."""

    criteria = criteria or AbsenceFilter()
    out = [
        a
        for a in in_range(absences, criteria.date_range)
        if (criteria.employee_id is None or a.employee_id == criteria.employee_id)
        and (criteria.absence_type is None or a.type == criteria.absence_type)
    ]
    out.sort(key=lambda a: a.date, reverse=True)
    return out


class DashboardService:
    """Use case: build the dashboard from one snapshot of the data store."""

    def __init__(self, tracker: AbsenceTrackerService):
        self._tracker = tracker

    def snapshot(self) -> tuple[list[Employee], list[AbsenceRecord]]:
        return list(self._tracker.list_employees()), list(self._tracker.list_absences())

    def build_report(self, criteria: Optional[AbsenceFilter] = None, *, now: Optional[datetime] = None) -> DashboardReport:
        criteria = criteria or AbsenceFilter()
        employees, absences = self.snapshot()
        table = filter_absences(absences, criteria)
        return DashboardReport(
            metrics=monthly_metrics(employees, absences, now=now),
            counts=grouped_counts(employees, absences, criteria.date_range),
            durations=duration_stats(employees, absences, criteria.date_range),
            rows=build_csv_rows(employees, table),
        )
