from __future__ import annotations

from .base import AbsenceDecision, AbsenceStrategy


class PresentStrategy(AbsenceStrategy):
    """Present for the day, no deduction."""

    def decide(self, *, late_minutes: int, absence_limit_minutes: int) -> AbsenceDecision:
        return AbsenceDecision(is_absent=False, salary_deduction_days=0)
