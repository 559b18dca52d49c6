from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import now_local, parse_hhmm
from ..core.enums import ShiftPreset
from ..employees.model import Employee
from .model import DEFAULT_PRESET, SHIFT_PRESETS, ShiftWindow


class ShiftResolver:
    """Resolve an employee's expected shift window for a calendar day.

    Explicit start/end times win over the named preset; malformed times count
    as missing. A window whose end falls before its start is an overnight
    shift and ends on the following day.
    """

    def resolve(self, employee: Employee, *, on: Optional[date] = None) -> ShiftWindow:
        day = on or now_local().date()

        start_t = parse_hhmm(employee.start_time)
        end_t = parse_hhmm(employee.end_time)
        if start_t is not None and end_t is not None:
            return self._window(day, start_t, end_t)

        start_t, end_t = SHIFT_PRESETS[self._preset(employee.shift)]
        return self._window(day, start_t, end_t)

    def window_for(self, employee: Employee, moment: datetime) -> ShiftWindow:
        """The shift a moment belongs to.

        A moment before the start of that day's shift but still inside the
        previous day's overnight shift belongs to the previous shift.
        """
        window = self.resolve(employee, on=moment.date())
        if moment < window.start:
            previous = self.resolve(employee, on=moment.date() - timedelta(days=1))
            if moment < previous.end:
                return previous
        return window

    @staticmethod
    def _preset(value: Optional[str]) -> ShiftPreset:
        try:
            return ShiftPreset(str(value or "").strip().lower())
        except ValueError:
            return DEFAULT_PRESET

    @staticmethod
    def _window(day: date, start_t: time, end_t: time) -> ShiftWindow:
        start = datetime.combine(day, start_t)
        end = datetime.combine(day, end_t)
        if end < start:
            end += timedelta(hours=24)
        return ShiftWindow(start=start, end=end)
