"""Export absences through the configured backend (local store or remote API) to CSV."""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "absence_tracker"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from absence_tracker.common.datetime_utils import now_local
from absence_tracker.common.logging_utils import configure_logging
from absence_tracker.common.validators import require_absence_type
from absence_tracker.container import build_container_from_settings
from absence_tracker.stats.export import export_csv, export_filename
from absence_tracker.stats.model import AbsenceFilter, DateRange
from absence_tracker.stats.service import filter_absences


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--start", help="first date (YYYY-MM-DD), inclusive")
    parser.add_argument("--end", help="last date (YYYY-MM-DD), inclusive")
    parser.add_argument("--employee", help="employee id")
    parser.add_argument("--type", dest="absence_type", help="absence type, e.g. Maladie")
    parser.add_argument("--out", help="output file (default: export-absences-<today>.csv)")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container_from_settings(settings)

    criteria = AbsenceFilter(
        date_range=DateRange(start=args.start, end=args.end),
        employee_id=args.employee,
        absence_type=require_absence_type(args.absence_type) if args.absence_type else None,
    )
    employees, absences = container.dashboard.snapshot()
    rows = filter_absences(absences, criteria)
    if not rows:
        print("Nothing to export")
        return 1

    out = Path(args.out or export_filename(now_local().date()))
    out.write_text(export_csv(employees, rows), encoding="utf-8")
    print(f"OK: {len(rows)} absence(s) -> {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
