from __future__ import annotations

from datetime import date

import mysql.connector
import pytest

from absence_tracker.absences.model import NewAbsence
from absence_tracker.core.enums import AbsenceType
from absence_tracker.core.exceptions import InvalidReference, NotFound
from absence_tracker.store.mysql_store import MySQLDataStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0
        self._rows = []

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        outcome = self._conn.outcomes.pop(0) if self._conn.outcomes else {}
        if isinstance(outcome, Exception):
            raise outcome
        self._rows = list(outcome.get("rows", []))
        self.rowcount = outcome.get("rowcount", len(self._rows))

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.executed = []
        self.committed = 0
        self.rolled_back = 0

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed += 1

    def rollback(self):
        self.rolled_back += 1

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, *outcomes):
        self.conn = FakeConnection(outcomes)

    def connect(self):
        return self.conn


def _store(*outcomes):
    factory = FakeConnFactory(*outcomes)
    return MySQLDataStore(factory, id_factory=lambda: "new-id"), factory.conn


def test_list_absences_normalizes_dates():
    row = {
        "id": "a1",
        "employeeId": "1",
        "date": date(2025, 1, 15),
        "type": "Maladie",
        "startTime": "09:00",
        "endTime": "10:30",
        "notes": None,
    }
    store, conn = _store({"rows": [row]})

    (rec,) = store.list_absences("1")

    assert rec.date == "2025-01-15"
    assert rec.type is AbsenceType.SICKNESS
    sql, params = conn.executed[0]
    assert "WHERE employeeId=%s ORDER BY date DESC" in sql
    assert params == ("1",)


def test_create_absence_maps_foreign_key_violation():
    fk_error = mysql.connector.IntegrityError(msg="a foreign key constraint fails", errno=1452)
    store, conn = _store(fk_error)

    with pytest.raises(InvalidReference):
        store.create_absence(NewAbsence("ghost", "2025-01-15", AbsenceType.LATE, "09:00", "09:10"))
    assert conn.rolled_back == 1


def test_other_integrity_errors_propagate():
    dup = mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062)
    store, _ = _store(dup)
    with pytest.raises(mysql.connector.IntegrityError):
        store.create_absence(NewAbsence("1", "2025-01-15", AbsenceType.LATE, "09:00", "09:10"))


def test_create_employee_uses_generated_id():
    store, conn = _store({"rowcount": 1})
    emp = store.create_employee(name="Alice", role="Dev")
    assert emp.id == "new-id"
    assert conn.executed[0][1] == ("new-id", "Alice", "Dev")
    assert conn.committed == 1


def test_update_unknown_employee_raises_not_found():
    store, conn = _store({"rows": []})
    with pytest.raises(NotFound):
        store.update_employee("x", name="A", role="B")
    assert len(conn.executed) == 1


def test_update_existing_employee():
    store, conn = _store({"rows": [{"id": "1"}]}, {"rowcount": 0})
    emp = store.update_employee("1", name="Alice", role="Lead")
    assert (emp.id, emp.role) == ("1", "Lead")
    assert conn.executed[1][1] == ("Alice", "Lead", "1")


def test_delete_relies_on_rowcount():
    store, _ = _store({"rowcount": 0})
    with pytest.raises(NotFound):
        store.delete_employee("x")

    store, conn = _store({"rowcount": 1})
    store.delete_employee("1")
    assert conn.executed[0][0] == "DELETE FROM employees WHERE id=%s"
