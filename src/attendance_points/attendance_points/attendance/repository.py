from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_latest_for_employee(self, employee_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: str,
        branch_id: Optional[str],
        check_in_time: datetime,
        employee_name: Optional[str] = None,
        branch_name: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def update_checkout(self, *, record_id: str, check_out_time: datetime) -> bool:
        raise NotImplementedError

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records whose check-in falls on a day in [start_date, end_date]."""

        raise NotImplementedError

    def clear_all(self) -> int:
        """Administrative bulk delete. Returns number of removed records."""

        raise NotImplementedError
