from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class EvaluatedRecord:
    """Read-model: an attendance record with its derived policy fields (never persisted)."""

    record: AttendanceRecord
    late_minutes: int = 0
    overtime_minutes: int = 0
    overtime_points: float = 0.0
    late_deduction_points: float = 0.0
    net_points: float = 0.0
    salary_deduction_days: int = 0
    is_absent: bool = False
    has_full_day_leave: bool = False
    has_time_leave: bool = False
    note: Optional[str] = None

    @property
    def employee_id(self) -> str:
        return self.record.employee_id
