from __future__ import annotations

from .base import AbsenceDecision, AbsenceStrategy


class FullDayLeaveStrategy(AbsenceStrategy):
    """Approved full-day leave: absent, one day withheld, lateness irrelevant."""

    def decide(self, *, late_minutes: int, absence_limit_minutes: int) -> AbsenceDecision:
        return AbsenceDecision(is_absent=True, salary_deduction_days=1, note="Full-day leave")
