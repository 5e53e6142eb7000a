from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import mysql.connector

from ..absences.model import AbsenceRecord, NewAbsence
from ..common.ids import generate_id
from ..core.enums import AbsenceType
from ..core.exceptions import InvalidReference, NotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ER_NO_REFERENCED_ROW, db_cursor, fetchall, fetchone, normalize_mysql_date
from ..employees.model import Employee
from .base import DataStore

logger = logging.getLogger(__name__)

_ABSENCE_COLUMNS = "id, employeeId, date, type, startTime, endTime, notes"


def _row_to_absence(row: dict) -> AbsenceRecord:
    return AbsenceRecord(
        id=row["id"],
        employee_id=row["employeeId"],
        date=normalize_mysql_date(row["date"]),
        type=AbsenceType(row["type"]),
        start_time=row["startTime"],
        end_time=row["endTime"],
        notes=row.get("notes"),
    )


class MySQLDataStore(DataStore):
    """Relational backend behind the HTTP surface.

    One statement per operation; the employee -> absences cascade is the
    ``ON DELETE CASCADE`` foreign key of ``database/schema.sql``. An absence
    inserted concurrently with its employee's deletion can still race
    (accepted, no multi-statement transaction is used).
    """

    def __init__(self, conn_factory: DatabaseConnection, *, id_factory: Callable[[], str] = generate_id):
        self._conn_factory = conn_factory
        self._new_id = id_factory

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, role FROM employees ORDER BY name ASC")
            return [Employee(id=r["id"], name=r["name"], role=r["role"]) for r in fetchall(cur)]

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, role FROM employees WHERE id=%s", (employee_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Employee(id=row["id"], name=row["name"], role=row["role"])

    def create_employee(self, *, name: str, role: str) -> Employee:
        employee = Employee(id=self._new_id(), name=name, role=role)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO employees (id, name, role) VALUES (%s, %s, %s)",
                (employee.id, employee.name, employee.role),
            )
        return employee

    def update_employee(self, employee_id: str, *, name: str, role: str) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM employees WHERE id=%s", (employee_id,))
            if not fetchone(cur):
                raise NotFound(f"Employee {employee_id} not found")
            cur.execute("UPDATE employees SET name=%s, role=%s WHERE id=%s", (name, role, employee_id))
        return Employee(id=employee_id, name=name, role=role)

    def delete_employee(self, employee_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_id,))
            if cur.rowcount == 0:
                raise NotFound(f"Employee {employee_id} not found")
        logger.debug("deleted employee %s (absences cascaded by FK)", employee_id)

    def list_absences(self, employee_id: Optional[str] = None) -> Sequence[AbsenceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_id:
                cur.execute(
                    f"SELECT {_ABSENCE_COLUMNS} FROM absences WHERE employeeId=%s ORDER BY date DESC",
                    (employee_id,),
                )
            else:
                cur.execute(f"SELECT {_ABSENCE_COLUMNS} FROM absences ORDER BY date DESC")
            return [_row_to_absence(r) for r in fetchall(cur)]

    def create_absence(self, new: NewAbsence) -> AbsenceRecord:
        record = AbsenceRecord.from_new(self._new_id(), new)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO absences ({_ABSENCE_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
                    (
                        record.id,
                        record.employee_id,
                        record.date,
                        record.type.value,
                        record.start_time,
                        record.end_time,
                        record.notes,
                    ),
                )
        except mysql.connector.IntegrityError as exc:
            if exc.errno == ER_NO_REFERENCED_ROW:
                raise InvalidReference(f"Invalid employeeId: {new.employee_id}") from exc
            raise
        return record

    def delete_absence(self, absence_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM absences WHERE id=%s", (absence_id,))
            if cur.rowcount == 0:
                raise NotFound(f"Absence {absence_id} not found")

    def ping(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS ok")
            row = fetchone(cur)
            return bool(row and row.get("ok"))
