from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from ..common.datetime_utils import as_date
from ..core.enums import LeaveType, RequestStatus
from .model import LeaveFlags, LeaveRequest


class LeaveIntersector:
    """Decide which approved leaves cover a given calendar day."""

    def covers(self, leave: LeaveRequest, target: date | datetime) -> bool:
        if leave.status != RequestStatus.APPROVED:
            return False

        day = as_date(target)
        if leave.type == LeaveType.FULL_DAY:
            if leave.start_date is None or leave.end_date is None:
                return False
            return as_date(leave.start_date) <= day <= as_date(leave.end_date)

        if leave.type == LeaveType.TIME:
            return leave.leave_date is not None and as_date(leave.leave_date) == day

        return False

    def flags_for(self, leaves: Iterable[LeaveRequest], target: date | datetime) -> LeaveFlags:
        full_day = False
        timed = False
        for leave in leaves:
            if not self.covers(leave, target):
                continue
            if leave.type == LeaveType.FULL_DAY:
                full_day = True
            else:
                timed = True
        return LeaveFlags(has_full_day_leave=full_day, has_time_leave=timed)
