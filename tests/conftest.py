from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_points.attendance_points.database.memory_store import InMemoryStore
from src.attendance_points.attendance_points.employees.model import Branch, Department, Employee

# Geofence center of "br-1"; tests check in from these coordinates.
BRANCH_LAT = 33.3152
BRANCH_LON = 44.3661


def make_store() -> InMemoryStore:
    store = InMemoryStore()
    store.branches.items["br-1"] = Branch(
        branch_id="br-1",
        name="Main Office",
        latitude=BRANCH_LAT,
        longitude=BRANCH_LON,
        radius=100,
    )
    store.departments.items["dep-1"] = Department(
        department_id="dep-1",
        name="Operations",
        branch_id="br-1",
        attendance_grace_period=10,
        absence_limit_minutes=120,
        late_deduction_points_per_minute=0.5,
        overtime_points_per_minute=1,
        exempt_employee_ids=frozenset({"emp-boss"}),
    )
    store.departments.items["dep-remote"] = Department(department_id="dep-remote", name="Remote")
    store.employees.items["emp-1"] = Employee(
        employee_id="emp-1", name="Ali", department_id="dep-1", shift="morning", salary=900_000
    )
    store.employees.items["emp-boss"] = Employee(
        employee_id="emp-boss", name="Omar", department_id="dep-1", shift="morning", salary=1_500_000
    )
    store.employees.items["emp-nodept"] = Employee(employee_id="emp-nodept", name="Nadia")
    store.employees.items["emp-remote"] = Employee(employee_id="emp-remote", name="Rami", department_id="dep-remote")
    return store


@pytest.fixture
def store() -> InMemoryStore:
    return make_store()


@pytest.fixture
def at():
    """Build a datetime on 2025-03-02 (a Sunday) from "HH:MM"."""

    def _at(hhmm: str, day: int = 2) -> datetime:
        hours, minutes = hhmm.split(":")
        return datetime(2025, 3, day, int(hours), int(minutes))

    return _at
