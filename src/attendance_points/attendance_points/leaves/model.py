from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: leave request.

    full_day leaves use start_date/end_date (inclusive); time leaves use
    leave_date + start_time/end_time ("HH:MM").
    """

    request_id: str
    employee_id: str
    type: LeaveType
    status: RequestStatus = RequestStatus.PENDING
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    leave_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    deduct_salary: bool = True
    reason: str = ""
    submitted_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class LeaveFlags:
    has_full_day_leave: bool = False
    has_time_leave: bool = False


NO_LEAVE = LeaveFlags()
