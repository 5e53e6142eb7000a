from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AbsenceType


@dataclass(frozen=True)
class DateRange:
    """Inclusive ISO date window; a missing bound is unbounded.

    ISO dates compare correctly as strings, so no parsing is needed.
    """

    start: Optional[str] = None
    end: Optional[str] = None

    def contains(self, iso_date: str) -> bool:
        if self.start and iso_date < self.start:
            return False
        if self.end and iso_date > self.end:
            return False
        return True


@dataclass(frozen=True)
class AbsenceFilter:
    """Dashboard table filter (date range + optional employee / type)."""

    date_range: DateRange = field(default_factory=DateRange)
    employee_id: Optional[str] = None
    absence_type: Optional[AbsenceType] = None


@dataclass(frozen=True)
class MonthlyMetrics:
    total_employees: int
    absences_this_month: int
    most_common_type: Optional[AbsenceType]


@dataclass(frozen=True)
class GroupedCounts:
    by_type: dict[AbsenceType, int]
    by_employee: list[tuple[str, int]]


@dataclass(frozen=True)
class DurationStats:
    total_minutes: int
    total_formatted: str
    top_employees_by_duration: list[tuple[str, int]]
    top_types: list[tuple[AbsenceType, int]]
    avg_per_day_minutes: int
    avg_per_day_formatted: str
    count: int


@dataclass(frozen=True)
class DashboardReport:
    metrics: MonthlyMetrics
    counts: GroupedCounts
    durations: DurationStats
    rows: list[dict]
