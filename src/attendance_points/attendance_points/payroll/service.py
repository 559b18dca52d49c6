from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..employees.model import Employee
from ..employees.repository import DepartmentRepository, EmployeeRepository
from ..leaves.repository import LeaveRepository
from ..policy.evaluator import PolicyEvaluator
from ..policy.model import EvaluatedRecord
from .converter import PointsConverter


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class PayrollReportService:
    """Evaluate every record in a period and fold the results per employee."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        leaves: LeaveRepository,
        *,
        evaluator: Optional[PolicyEvaluator] = None,
        converter: Optional[PointsConverter] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._departments = departments
        self._leaves = leaves
        self._evaluator = evaluator or PolicyEvaluator()
        self._converter = converter or PointsConverter()

    def evaluate_period(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
        department_id: Optional[str] = None,
        employees: Optional[dict[str, Employee]] = None,
    ) -> list[EvaluatedRecord]:
        records = self._attendance.list_between(
            start_date=start,
            end_date=end,
            employee_id=employee_id,
            department_id=department_id,
        )
        if employees is None:
            employees = {e.employee_id: e for e in self._employees.list_all()}
        departments = {d.department_id: d for d in self._departments.list_all()}

        leaves_by_employee = defaultdict(list)
        for lv in self._leaves.list_approved_overlapping(start_date=start, end_date=end, employee_id=employee_id):
            leaves_by_employee[lv.employee_id].append(lv)

        out: list[EvaluatedRecord] = []
        for r in records:
            employee = employees.get(r.employee_id)
            department = departments.get(employee.department_id) if employee and employee.department_id else None
            out.append(
                self._evaluator.evaluate_for(
                    r,
                    employee=employee,
                    department=department,
                    leaves=leaves_by_employee.get(r.employee_id, ()),
                )
            )
        return out

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> ReportData:
        employees = {e.employee_id: e for e in self._employees.list_all()}
        evaluated = self.evaluate_period(
            start=start,
            end=end,
            employee_id=employee_id,
            department_id=department_id,
            employees=employees,
        )

        salaries = {eid: e.salary for eid, e in employees.items()}
        totals = self._converter.convert(evaluated, salaries)

        rows = [self._to_row(ev) for ev in sorted(evaluated, key=lambda ev: ev.record.check_in_time)]

        summary = []
        for employee_id_, s in totals.items():
            employee = employees.get(employee_id_)
            summary.append(
                {
                    "employee_id": employee_id_,
                    "employee_name": employee.name if employee else "-",
                    "records": s.record_count,
                    "total_late_minutes": s.total_late_minutes,
                    "total_overtime_minutes": s.total_overtime_minutes,
                    "total_points": round(s.total_points, 2),
                    "points_in_currency": round(s.points_in_currency, 2),
                    "daily_salary": round(s.daily_salary, 2),
                    "total_deduction_days": s.total_deduction_days,
                    "total_deduction_currency": round(s.total_deduction_currency, 2),
                }
            )

        summary.sort(key=lambda x: x["total_points"], reverse=True)
        return ReportData(rows=rows, summary=summary)

    @staticmethod
    def _to_row(ev: EvaluatedRecord) -> dict:
        r = ev.record
        return {
            "record_id": r.record_id,
            "employee_id": r.employee_id,
            "employee_name": r.employee_name or "-",
            "branch_name": r.branch_name or "-",
            "work_date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M"),
            "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else "-",
            "late_minutes": ev.late_minutes,
            "overtime_minutes": ev.overtime_minutes,
            "net_points": round(ev.net_points, 2),
            "salary_deduction_days": ev.salary_deduction_days,
            "is_absent": ev.is_absent,
            "has_full_day_leave": ev.has_full_day_leave,
            "has_time_leave": ev.has_time_leave,
        }
