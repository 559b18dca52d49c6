from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT request_id, employee_id, leave_type, status, start_date, end_date, leave_date,
           start_time, end_time, deduct_salary, reason, submitted_at, reviewed_by, reviewed_at, rejection_reason
    FROM leave_requests
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(r["request_id"]),
        employee_id=str(r["employee_id"]),
        type=LeaveType(r["leave_type"]),
        status=RequestStatus(r["status"]),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
        leave_date=r.get("leave_date"),
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        deduct_salary=bool(r.get("deduct_salary")),
        reason=r.get("reason") or "",
        submitted_at=r.get("submitted_at"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: str,
        type: LeaveType,
        start_date: Optional[date],
        end_date: Optional[date],
        leave_date: Optional[date],
        start_time: Optional[str],
        end_time: Optional[str],
        deduct_salary: bool,
        reason: str,
        submitted_at: datetime,
    ) -> str:
        request_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(request_id, employee_id, leave_type, status, start_date, end_date,
                                           leave_date, start_time, end_time, deduct_salary, reason, submitted_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_id,
                    employee_id,
                    type.value,
                    RequestStatus.PENDING.value,
                    start_date,
                    end_date,
                    leave_date,
                    start_time,
                    end_time,
                    1 if deduct_salary else 0,
                    reason,
                    submitted_at,
                ),
            )
        return request_id

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE request_id=%s", (request_id,))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_employee(self, employee_id: str, *, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        sql = _SELECT + " WHERE employee_id=%s"
        params: list = [employee_id]
        if status:
            sql += " AND status=%s"
            params.append(status.value)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY submitted_at DESC", tuple(params))
            return [_to_leave(r) for r in fetchall(cur)]

    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        sql = (
            _SELECT
            + """
            WHERE status=%s
              AND (
                (leave_type=%s AND start_date <= %s AND end_date >= %s)
                OR (leave_type=%s AND leave_date BETWEEN %s AND %s)
              )
            """
        )
        params: list = [
            RequestStatus.APPROVED.value,
            LeaveType.FULL_DAY.value,
            end_date,
            start_date,
            LeaveType.TIME.value,
            start_date,
            end_date,
        ]
        if employee_id:
            sql += " AND employee_id=%s"
            params.append(employee_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s, rejection_reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, reviewed_by, reviewed_at, rejection_reason, request_id, RequestStatus.PENDING.value),
            )
            return cur.rowcount == 1
