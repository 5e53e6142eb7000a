from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import AbsenceType
from ..core.exceptions import PersistenceError


@dataclass(frozen=True)
class NewAbsence:
    """Input for the submission flow: an absence without its id yet."""

    employee_id: str
    date: str
    type: AbsenceType
    start_time: str
    end_time: str
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "date": self.date,
            "type": self.type.value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AbsenceRecord:
    """Domain entity: one bounded absence of an employee on a calendar day.

    Serialized with the camelCase keys used by the HTTP surface and the local
    document store.
    """

    id: str
    employee_id: str
    date: str
    type: AbsenceType
    start_time: str
    end_time: str
    notes: Optional[str] = None

    @classmethod
    def from_new(cls, absence_id: str, new: NewAbsence) -> "AbsenceRecord":
        return cls(
            id=absence_id,
            employee_id=new.employee_id,
            date=new.date,
            type=new.type,
            start_time=new.start_time,
            end_time=new.end_time,
            notes=new.notes,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": self.date,
            "type": self.type.value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AbsenceRecord":
        try:
            return cls(
                id=str(data["id"]),
                employee_id=str(data["employeeId"]),
                date=str(data["date"]),
                type=AbsenceType(data["type"]),
                start_time=str(data["startTime"]),
                end_time=str(data["endTime"]),
                notes=data.get("notes"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Malformed absence document: {data!r}") from exc
