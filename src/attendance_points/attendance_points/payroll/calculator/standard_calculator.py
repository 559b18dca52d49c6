from __future__ import annotations

from ...core.constants import DAYS_PER_SALARY_MONTH, DEFAULT_POINT_VALUE
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: fixed currency per point, daily rate = monthly / 30."""

    def __init__(self, *, point_value: float = DEFAULT_POINT_VALUE, days_per_month: int = DAYS_PER_SALARY_MONTH):
        if days_per_month <= 0:
            raise ValueError("days_per_month must be positive")
        self.point_value = float(point_value)
        self.days_per_month = int(days_per_month)

    def points_in_currency(self, points: float) -> float:
        return float(points) * self.point_value

    def daily_salary(self, monthly_salary: float) -> float:
        return float(monthly_salary or 0) / self.days_per_month
