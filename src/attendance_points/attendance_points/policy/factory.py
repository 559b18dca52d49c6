from __future__ import annotations

from dataclasses import dataclass

from ..leaves.model import LeaveFlags
from .strategies.base import AbsenceStrategy
from .strategies.full_day_leave_strategy import FullDayLeaveStrategy
from .strategies.late_absence_strategy import LateAbsenceStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AbsenceStrategyFactory:
    """Factory Pattern: choose the absence strategy for one record.

    Full-day leave and late absence never both apply, so a record is deducted
    at most one day.
    """

    def for_record(self, *, leave_flags: LeaveFlags, late_minutes: int, absence_limit_minutes: int) -> AbsenceStrategy:
        if leave_flags.has_full_day_leave:
            return FullDayLeaveStrategy()
        if late_minutes > absence_limit_minutes:
            return LateAbsenceStrategy()
        return PresentStrategy()
