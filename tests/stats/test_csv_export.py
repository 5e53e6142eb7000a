from __future__ import annotations

import csv
import io
from datetime import date

from absence_tracker.absences.model import AbsenceRecord
from absence_tracker.core.enums import AbsenceType
from absence_tracker.employees.model import Employee
from absence_tracker.stats.export import build_csv_rows, export_csv, export_filename

ALICE = Employee(id="A", name="Alice", role="Dev")


def _abs(id_, employee_id="A", notes=None):
    return AbsenceRecord(
        id=id_,
        employee_id=employee_id,
        date="2025-01-15",
        type=AbsenceType.PAID_LEAVE,
        start_time="09:00",
        end_time="12:00",
        notes=notes,
    )


def test_export_starts_with_bom_and_header():
    content = export_csv([ALICE], [_abs("1")])
    assert content.startswith("\ufeff")
    lines = content[1:].split("\n")
    assert lines[0] == "Employé,Date,Type,Heure de début,Heure de fin,Notes"
    assert lines[1] == "Alice,2025-01-15,Congés Payés,09:00,12:00,"
    assert len(lines) == 2


def test_cells_are_quoted_only_when_needed():
    content = export_csv([ALICE], [_abs("1", notes='Rendez-vous "médecin", puis\nrepos'), _abs("2", notes="simple")])
    body = content[1:]
    assert '"Rendez-vous ""médecin"", puis\nrepos"' in body
    assert body.endswith(",simple")

    rows = list(csv.reader(io.StringIO(body)))
    assert rows[1][5] == 'Rendez-vous "médecin", puis\nrepos'


def test_unknown_employee_and_missing_notes():
    (row,) = build_csv_rows([ALICE], [_abs("1", employee_id="ghost")])
    assert row["employee_name"] == "Unknown"
    assert row["notes"] == ""


def test_export_filename():
    assert export_filename(date(2025, 1, 31)) == "export-absences-2025-01-31.csv"
