from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local, parse_hhmm
from ..common.validators import require_non_empty
from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewLeave:
    type: LeaveType
    reason: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    leave_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    deduct_salary: bool = True


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def submit(self, *, employee_id: str, leave: NewLeave, now: datetime | None = None) -> str:
        reason = require_non_empty(leave.reason, "Leave reason")

        if leave.type == LeaveType.FULL_DAY:
            if not leave.start_date or not leave.end_date:
                raise ValidationError("Start and end dates are required for a full-day leave")
            if leave.end_date < leave.start_date:
                raise ValidationError("End date must be on or after the start date")
            fields = dict(start_date=leave.start_date, end_date=leave.end_date, leave_date=None, start_time=None, end_time=None)
        elif leave.type == LeaveType.TIME:
            if not leave.leave_date:
                raise ValidationError("A date is required for a time leave")
            start_t = parse_hhmm(leave.start_time)
            end_t = parse_hhmm(leave.end_time)
            if start_t is None or end_t is None:
                raise ValidationError("Invalid time (HH:MM)")
            if end_t <= start_t:
                raise ValidationError("Leave end time must be after its start time")
            fields = dict(
                start_date=None,
                end_date=None,
                leave_date=leave.leave_date,
                start_time=start_t.strftime("%H:%M"),
                end_time=end_t.strftime("%H:%M"),
            )
        else:
            raise ValidationError("Unknown leave type")

        request_id = self._leaves.create(
            employee_id=employee_id,
            type=leave.type,
            deduct_salary=bool(leave.deduct_salary),
            reason=reason,
            submitted_at=now or now_local(),
            **fields,
        )
        logger.info("leave submitted: employee=%s request=%s type=%s", employee_id, request_id, leave.type.value)
        return request_id

    def _decide(self, *, request_id: str, status: RequestStatus, reviewer_id: str, rejection_reason: Optional[str]) -> None:
        req = self._leaves.get_by_id(request_id)
        if not req:
            raise ValidationError("Request does not exist")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been processed")

        ok = self._leaves.decide(
            request_id=request_id,
            status=status,
            reviewed_by=reviewer_id,
            reviewed_at=now_local(),
            rejection_reason=rejection_reason,
        )
        if not ok:
            raise ValidationError("Updating the request failed")
        logger.info("leave %s: request=%s reviewer=%s", status.value, request_id, reviewer_id)

    def approve(self, *, request_id: str, reviewer_id: str) -> None:
        self._decide(request_id=request_id, status=RequestStatus.APPROVED, reviewer_id=reviewer_id, rejection_reason=None)

    def reject(self, *, request_id: str, reviewer_id: str, reason: str = "") -> None:
        self._decide(
            request_id=request_id,
            status=RequestStatus.REJECTED,
            reviewer_id=reviewer_id,
            rejection_reason=(reason or "").strip() or None,
        )

    def list_for_employee(self, employee_id: str) -> list[LeaveRequest]:
        return list(self._leaves.list_for_employee(employee_id))
