from __future__ import annotations

from abc import ABC, abstractmethod


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def points_in_currency(self, points: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def daily_salary(self, monthly_salary: float) -> float:
        raise NotImplementedError
