from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..absences.model import AbsenceRecord, NewAbsence
from ..common.ids import generate_id
from ..core.constants import ABSENCES_KEY, EMPLOYEES_KEY, SEED_EMPLOYEES
from ..core.exceptions import InvalidReference, NotFound, PersistenceError
from ..employees.model import Employee
from .base import DataStore
from .document_store import JsonDocumentStore

logger = logging.getLogger(__name__)


class LocalDataStore(DataStore):
    """Backend over the local key-document store.

    Two documents: ``employees`` and ``absences``, each the full ordered
    collection. Every mutation is a read-modify-write of a whole document.
    Referential checks and the employee -> absences cascade are done here
    since the store enforces no constraint.
    """

    def __init__(self, documents: JsonDocumentStore, *, id_factory: Callable[[], str] = generate_id):
        self._documents = documents
        self._new_id = id_factory

    def _load(self, key: str) -> list:
        if not self._documents.has(key):
            seed = [dict(e) for e in SEED_EMPLOYEES] if key == EMPLOYEES_KEY else []
            self._documents.set(key, seed)
            logger.info("seeded local document %s (%d items)", key, len(seed))
            return seed
        data = self._documents.get(key)
        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceError(f"Document {key!r} is not a list")
        return data

    def _employees(self) -> List[Employee]:
        return [Employee.from_dict(d) for d in self._load(EMPLOYEES_KEY)]

    def _absences(self) -> List[AbsenceRecord]:
        return [AbsenceRecord.from_dict(d) for d in self._load(ABSENCES_KEY)]

    def _save_employees(self, employees: Sequence[Employee]) -> None:
        self._documents.set(EMPLOYEES_KEY, [e.to_dict() for e in employees])

    def _save_absences(self, absences: Sequence[AbsenceRecord]) -> None:
        self._documents.set(ABSENCES_KEY, [a.to_dict() for a in absences])

    def list_employees(self) -> Sequence[Employee]:
        return self._employees()

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        for e in self._employees():
            if e.id == employee_id:
                return e
        return None

    def create_employee(self, *, name: str, role: str) -> Employee:
        employees = self._employees()
        employee = Employee(id=self._new_id(), name=name, role=role)
        self._save_employees([*employees, employee])
        logger.debug("created employee %s", employee.id)
        return employee

    def update_employee(self, employee_id: str, *, name: str, role: str) -> Employee:
        employees = self._employees()
        for i, e in enumerate(employees):
            if e.id == employee_id:
                updated = Employee(id=e.id, name=name, role=role)
                employees[i] = updated
                self._save_employees(employees)
                return updated
        raise NotFound(f"Employee {employee_id} not found")

    def delete_employee(self, employee_id: str) -> None:
        employees = self._employees()
        remaining = [e for e in employees if e.id != employee_id]
        if len(remaining) == len(employees):
            raise NotFound(f"Employee {employee_id} not found")
        absences = self._absences()
        kept = [a for a in absences if a.employee_id != employee_id]
        # Absences first: a failed second write never leaves orphaned absences.
        self._save_absences(kept)
        self._save_employees(remaining)
        logger.debug("deleted employee %s and %d absence(s)", employee_id, len(absences) - len(kept))

    def list_absences(self, employee_id: Optional[str] = None) -> Sequence[AbsenceRecord]:
        absences = self._absences()
        if employee_id is not None:
            absences = [a for a in absences if a.employee_id == employee_id]
        return absences

    def create_absence(self, new: NewAbsence) -> AbsenceRecord:
        if self.get_employee(new.employee_id) is None:
            raise InvalidReference(f"Invalid employeeId: {new.employee_id}")
        absences = self._absences()
        record = AbsenceRecord.from_new(self._new_id(), new)
        self._save_absences([*absences, record])
        logger.debug("created absence %s for employee %s", record.id, record.employee_id)
        return record

    def delete_absence(self, absence_id: str) -> None:
        absences = self._absences()
        remaining = [a for a in absences if a.id != absence_id]
        if len(remaining) == len(absences):
            raise NotFound(f"Absence {absence_id} not found")
        self._save_absences(remaining)

    def ping(self) -> bool:
        self._load(EMPLOYEES_KEY)
        self._load(ABSENCES_KEY)
        return True
