from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Department
from .repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, dept_id: Optional[str] = None) -> list[Department]:
        params = (dept_id,) if dept_id else ()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT dept_id, dept_name, branch_id, attendance_grace_period, absence_limit_minutes,
                       late_deduction_points_per_minute, overtime_points_per_minute
                FROM departments
                """
                + (" WHERE dept_id=%s" if dept_id else " ORDER BY dept_name"),
                params,
            )
            rows = fetchall(cur)

            cur.execute(
                "SELECT dept_id, employee_id FROM department_exemptions" + (" WHERE dept_id=%s" if dept_id else ""),
                params,
            )
            exempt: dict[str, set[str]] = defaultdict(set)
            for r in fetchall(cur):
                exempt[str(r["dept_id"])].add(str(r["employee_id"]))

        return [
            Department(
                department_id=str(r["dept_id"]),
                name=r["dept_name"],
                branch_id=r.get("branch_id"),
                attendance_grace_period=int(r.get("attendance_grace_period") or 0),
                absence_limit_minutes=int(r["absence_limit_minutes"]),
                late_deduction_points_per_minute=float(r.get("late_deduction_points_per_minute") or 0),
                overtime_points_per_minute=float(r.get("overtime_points_per_minute") or 0),
                exempt_employee_ids=frozenset(exempt.get(str(r["dept_id"]), ())),
            )
            for r in rows
        ]

    def get_by_id(self, department_id: str) -> Optional[Department]:
        found = self._load(department_id)
        return found[0] if found else None

    def list_all(self) -> Sequence[Department]:
        return self._load()
