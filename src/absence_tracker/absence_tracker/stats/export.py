"""CSV export of the filtered absence table.

The output is a ``str`` prefixed with a UTF-8 byte-order mark so spreadsheet
tools detect the encoding; encode it with plain ``utf-8`` when writing.
"""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable

from ..absences.model import AbsenceRecord
from ..common.datetime_utils import parse_iso_date
from ..core.constants import CSV_BOM, CSV_DATE_FORMAT, CSV_HEADERS, UNKNOWN_EMPLOYEE
from ..employees.model import Employee

FIELDNAMES = ("employee_name", "date", "type", "start_time", "end_time", "notes")


def _format_date(iso_date: str) -> str:
    try:
        return parse_iso_date(iso_date).strftime(CSV_DATE_FORMAT)
    except ValueError:
        return iso_date


def build_csv_rows(employees: Iterable[Employee], absences: Iterable[AbsenceRecord]) -> list[dict]:
    names = {e.id: e.name for e in employees}
    return [
        {
            "employee_name": names.get(a.employee_id, UNKNOWN_EMPLOYEE),
            "date": _format_date(a.date),
            "type": a.type.value,
            "start_time": a.start_time,
            "end_time": a.end_time,
            "notes": a.notes or "",
        }
        for a in absences
    ]


def export_csv(employees: Iterable[Employee], absences: Iterable[AbsenceRecord]) -> str:
    out = io.StringIO()
    # QUOTE_MINIMAL: a cell is quoted (inner quotes doubled) only when it holds a comma, quote or newline.
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in build_csv_rows(employees, absences):
        writer.writerow([row[k] for k in FIELDNAMES])
    return CSV_BOM + out.getvalue().rstrip("\n")


def export_filename(today: date) -> str:
    return f"export-absences-{today.isoformat()}.csv"
