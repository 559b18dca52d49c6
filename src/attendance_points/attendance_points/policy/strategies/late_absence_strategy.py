from __future__ import annotations

from .base import AbsenceDecision, AbsenceStrategy


class LateAbsenceStrategy(AbsenceStrategy):
    """Lateness beyond the absence limit counts as an unleaved absence."""

    def decide(self, *, late_minutes: int, absence_limit_minutes: int) -> AbsenceDecision:
        return AbsenceDecision(
            is_absent=True,
            salary_deduction_days=1,
            note=f"Late {late_minutes} min, over the {absence_limit_minutes} min absence limit",
        )
