from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.time_utils import duration_minutes
from ..common.validators import optional_text, require_absence_type, require_iso_date, require_non_empty
from ..core.enums import AbsenceType
from ..core.exceptions import InvertedTimeRange
from ..employees.model import Employee
from ..store.base import DataStore
from .model import AbsenceRecord, NewAbsence

logger = logging.getLogger(__name__)


class AbsenceTrackerService:
    """Use case facade over whichever DataStore is active.

    Input is validated here regardless of backend; backend failures
    (TransportError, PersistenceError, NotFound, InvalidReference) propagate
    unchanged. Nothing is retried.
    """

    def __init__(self, store: DataStore):
        self._store = store

    @property
    def store(self) -> DataStore:
        return self._store

    # -------------------- Employees --------------------

    def list_employees(self) -> Sequence[Employee]:
        return self._store.list_employees()

    def list_employees_sorted(self) -> list[Employee]:
        return sorted(self._store.list_employees(), key=lambda e: e.name.casefold())

    def create_employee(self, name: str, role: str) -> Employee:
        name = require_non_empty(name, "name")
        role = require_non_empty(role, "role")
        employee = self._store.create_employee(name=name, role=role)
        logger.info("employee created: %s (%s)", employee.name, employee.id)
        return employee

    def update_employee(self, employee_id: str, name: str, role: str) -> Employee:
        employee_id = require_non_empty(employee_id, "id")
        name = require_non_empty(name, "name")
        role = require_non_empty(role, "role")
        return self._store.update_employee(employee_id, name=name, role=role)

    def delete_employee(self, employee_id: str) -> None:
        employee_id = require_non_empty(employee_id, "id")
        self._store.delete_employee(employee_id)
        logger.info("employee deleted: %s", employee_id)

    # -------------------- Absences --------------------

    def list_absences(self, employee_id: Optional[str] = None) -> Sequence[AbsenceRecord]:
        return self._store.list_absences(employee_id or None)

    def list_absences_for_day(self, employee_id: str, day: date | str) -> list[AbsenceRecord]:
        """One employee's absences on a given day, ordered by start time."""

        day_s = day.isoformat() if isinstance(day, date) else require_iso_date(day)
        items = [a for a in self._store.list_absences(employee_id) if a.date == day_s]
        items.sort(key=lambda a: a.start_time)
        return items

    def create_absence(
        self,
        employee_id: str,
        absence_date: str,
        absence_type: AbsenceType | str,
        start_time: str,
        end_time: str,
        notes: Optional[str] = None,
    ) -> AbsenceRecord:
        new = NewAbsence(
            employee_id=require_non_empty(employee_id, "employeeId"),
            date=require_iso_date(absence_date),
            type=require_absence_type(absence_type),
            start_time=require_non_empty(start_time, "startTime"),
            end_time=require_non_empty(end_time, "endTime"),
            notes=optional_text(notes, "notes"),
        )
        # Raises InvalidTimeFormat / InvertedTimeRange; zero-length ranges are refused too.
        if duration_minutes(new.start_time, new.end_time) == 0:
            raise InvertedTimeRange("Start time must be before end time")
        record = self._store.create_absence(new)
        logger.info("absence recorded: %s %s %s-%s", record.employee_id, record.date, record.start_time, record.end_time)
        return record

    def record_absence_today(
        self,
        employee_id: str,
        absence_type: AbsenceType | str,
        start_time: str,
        end_time: str,
        notes: Optional[str] = None,
        *,
        today: Optional[date] = None,
    ) -> AbsenceRecord:
        """Submission flow of the clocking form: one absence dated today."""

        day = today or now_local().date()
        return self.create_absence(employee_id, day.isoformat(), absence_type, start_time, end_time, notes)

    def delete_absence(self, absence_id: str) -> None:
        absence_id = require_non_empty(absence_id, "id")
        self._store.delete_absence(absence_id)

    def health(self) -> bool:
        return self._store.ping()
