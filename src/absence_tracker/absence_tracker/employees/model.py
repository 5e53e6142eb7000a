from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.exceptions import PersistenceError


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no persistence code). ``id`` is opaque and never changes.
    """

    id: str
    name: str
    role: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "role": self.role}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Employee":
        try:
            return cls(id=str(data["id"]), name=str(data["name"]), role=str(data["role"]))
        except (KeyError, TypeError) as exc:
            raise PersistenceError(f"Malformed employee document: {data!r}") from exc
