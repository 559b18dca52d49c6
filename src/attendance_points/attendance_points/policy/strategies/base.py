from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AbsenceDecision:
    is_absent: bool
    salary_deduction_days: int
    note: Optional[str] = None


class AbsenceStrategy(ABC):
    """Strategy Pattern: encapsulate how absence and salary deduction are decided for one record."""

    @abstractmethod
    def decide(self, *, late_minutes: int, absence_limit_minutes: int) -> AbsenceDecision:
        raise NotImplementedError
