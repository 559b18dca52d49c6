from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.record_id, a.employee_id, a.employee_name, a.branch_id, a.branch_name, a.check_in_time, a.check_out_time, a.status"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        employee_id=str(r["employee_id"]),
        branch_id=r.get("branch_id"),
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        employee_name=r.get("employee_name"),
        branch_name=r.get("branch_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_employee(self, employee_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.employee_id=%s
                ORDER BY a.check_in_time DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.employee_id=%s
                ORDER BY a.check_in_time DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: str,
        branch_id: Optional[str],
        check_in_time: datetime,
        employee_name: Optional[str] = None,
        branch_name: Optional[str] = None,
    ) -> str:
        record_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(record_id, employee_id, employee_name, branch_id, branch_name, check_in_time, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record_id,
                    employee_id,
                    employee_name,
                    branch_id,
                    branch_name,
                    check_in_time,
                    AttendanceStatus.CHECKED_IN.value,
                ),
            )
        return record_id

    def update_checkout(self, *, record_id: str, check_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, status=%s
                WHERE record_id=%s AND check_out_time IS NULL AND check_in_time <= %s
                """,
                (check_out_time, AttendanceStatus.CHECKED_OUT.value, record_id, check_out_time),
            )
            return cur.rowcount == 1

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["a.check_in_time >= %s", "a.check_in_time < %s"]
        params: list = [
            datetime.combine(start_date, datetime.min.time()),
            datetime.combine(end_date + timedelta(days=1), datetime.min.time()),
        ]
        if employee_id:
            where.append("a.employee_id=%s")
            params.append(employee_id)
        if department_id:
            where.append("e.dept_id=%s")
            params.append(department_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                LEFT JOIN employees e ON e.employee_id = a.employee_id
                WHERE {" AND ".join(where)}
                ORDER BY a.check_in_time
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def clear_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance")
            return int(cur.rowcount or 0)
