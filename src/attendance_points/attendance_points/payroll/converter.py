from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..policy.model import EvaluatedRecord
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator


@dataclass(frozen=True)
class PointsSummary:
    employee_id: str
    total_points: float
    points_in_currency: float
    daily_salary: float
    total_deduction_days: int
    total_deduction_currency: float
    total_late_minutes: int = 0
    total_overtime_minutes: int = 0
    total_late_deduction_points: float = 0.0
    record_count: int = 0


@dataclass
class _Acc:
    points: float = 0.0
    deduction_days: int = 0
    late_minutes: int = 0
    overtime_minutes: int = 0
    late_deduction_points: float = 0.0
    count: int = 0


class PointsConverter:
    """Fold evaluated records into per-employee point and currency totals."""

    def __init__(self, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    def convert(
        self,
        evaluated: Iterable[EvaluatedRecord],
        salaries: Mapping[str, float],
    ) -> dict[str, PointsSummary]:
        acc: dict[str, _Acc] = {}
        for ev in evaluated:
            a = acc.setdefault(ev.employee_id, _Acc())
            a.points += ev.net_points
            a.deduction_days += ev.salary_deduction_days
            a.late_minutes += ev.late_minutes
            a.overtime_minutes += ev.overtime_minutes
            a.late_deduction_points += ev.late_deduction_points
            a.count += 1

        out: dict[str, PointsSummary] = {}
        for employee_id, a in acc.items():
            daily = self._calculator.daily_salary(salaries.get(employee_id, 0.0))
            out[employee_id] = PointsSummary(
                employee_id=employee_id,
                total_points=a.points,
                points_in_currency=self._calculator.points_in_currency(a.points),
                daily_salary=daily,
                total_deduction_days=a.deduction_days,
                total_deduction_currency=a.deduction_days * daily,
                total_late_minutes=a.late_minutes,
                total_overtime_minutes=a.overtime_minutes,
                total_late_deduction_points=a.late_deduction_points,
                record_count=a.count,
            )
        return out
