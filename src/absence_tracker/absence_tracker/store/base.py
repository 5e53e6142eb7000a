from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..absences.model import AbsenceRecord, NewAbsence
from ..employees.model import Employee


class DataStore(ABC):
    """Persistence contract shared by every backend.

    Exactly one implementation is active per process, chosen once at startup
    (see ``container.build_container``).
    """

    @abstractmethod
    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    @abstractmethod
    def get_employee(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    @abstractmethod
    def create_employee(self, *, name: str, role: str) -> Employee:
        raise NotImplementedError

    @abstractmethod
    def update_employee(self, employee_id: str, *, name: str, role: str) -> Employee:
        """Raises NotFound if the employee does not exist."""

        raise NotImplementedError

    @abstractmethod
    def delete_employee(self, employee_id: str) -> None:
        """Delete the employee and every absence referencing it.

        Raises NotFound if the employee does not exist.
        """

        raise NotImplementedError

    @abstractmethod
    def list_absences(self, employee_id: Optional[str] = None) -> Sequence[AbsenceRecord]:
        raise NotImplementedError

    @abstractmethod
    def create_absence(self, new: NewAbsence) -> AbsenceRecord:
        """Raises InvalidReference if ``new.employee_id`` is not a live employee."""

        raise NotImplementedError

    @abstractmethod
    def delete_absence(self, absence_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> bool:
        """Health check; raises a BackendError when the backend is unavailable."""

        raise NotImplementedError
