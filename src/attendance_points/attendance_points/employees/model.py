from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..core.constants import (
    DEFAULT_ABSENCE_LIMIT_MINUTES,
    DEFAULT_GRACE_MINUTES,
    DEFAULT_LATE_DEDUCTION_POINTS_PER_MINUTE,
    DEFAULT_OVERTIME_POINTS_PER_MINUTE,
)


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object, no store access. Exemption lives on the department.
    """

    employee_id: str
    name: str
    department_id: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    shift: Optional[str] = None
    branch_id: Optional[str] = None
    salary: float = 0.0


@dataclass(frozen=True)
class Department:
    """Domain entity: Department with its attendance policy."""

    department_id: str
    name: str
    branch_id: Optional[str] = None
    attendance_grace_period: int = DEFAULT_GRACE_MINUTES
    absence_limit_minutes: int = DEFAULT_ABSENCE_LIMIT_MINUTES
    late_deduction_points_per_minute: float = DEFAULT_LATE_DEDUCTION_POINTS_PER_MINUTE
    overtime_points_per_minute: float = DEFAULT_OVERTIME_POINTS_PER_MINUTE
    exempt_employee_ids: FrozenSet[str] = field(default_factory=frozenset)

    def is_exempt(self, employee_id: str) -> bool:
        return employee_id in self.exempt_employee_ids


@dataclass(frozen=True)
class Branch:
    """Domain entity: Branch with its geofence (center + radius in meters)."""

    branch_id: str
    name: str
    latitude: float
    longitude: float
    radius: float


def resolve_branch_id(employee: Employee, department: Optional[Department]) -> Optional[str]:
    """Department branch first, then the employee's own override."""
    if department and department.branch_id:
        return department.branch_id
    return employee.branch_id
