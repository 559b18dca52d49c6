from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in, closed by at most one check-out."""

    record_id: str
    employee_id: str
    branch_id: Optional[str]
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    status: AttendanceStatus = AttendanceStatus.CHECKED_IN
    employee_name: Optional[str] = None
    branch_name: Optional[str] = None

    @property
    def work_date(self) -> date:
        return self.check_in_time.date()

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


def latest_record(records) -> Optional[AttendanceRecord]:
    """The record with the most recent check-in defines the current state."""
    items = list(records)
    if not items:
        return None
    return max(items, key=lambda r: r.check_in_time)
