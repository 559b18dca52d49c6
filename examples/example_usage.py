"""Example: drive the service layer directly (no Flask) on the in-memory store."""

from datetime import date
from pathlib import Path

from src.attendance_points.attendance_points.container import build_container
from src.attendance_points.attendance_points.database.memory_store import InMemoryStore
from src.attendance_points.attendance_points.geo.location import StaticLocationProvider


def main():
    store = InMemoryStore.from_json_file(Path(__file__).with_name("seed_documents.json"))
    container = build_container(settings={}, store=store)

    report = container.payroll_report_service.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 3, 7))
    for row in report.summary:
        print(row)

    record_id = container.attendance_service.check_in(
        "emp-ali",
        locate=StaticLocationProvider(latitude=33.3153, longitude=44.3662),
    )
    print("checked in:", record_id)


if __name__ == "__main__":
    main()
