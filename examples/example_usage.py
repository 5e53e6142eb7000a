"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; the logic lives in the services.
"""

import importlib

from config import get_settings_module

from absence_tracker.common.time_utils import format_duration
from absence_tracker.container import build_container_from_settings
from absence_tracker.stats.model import AbsenceFilter, DateRange


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    alice = container.tracker.list_employees_sorted()[0]
    container.tracker.record_absence_today(alice.id, "Retard", "09:00", "09:25", "Train en retard")

    report = container.dashboard.build_report(AbsenceFilter(date_range=DateRange(start="2025-01-01")))
    print(report.metrics)
    print("total:", format_duration(report.durations.total_minutes))


if __name__ == "__main__":
    main()
