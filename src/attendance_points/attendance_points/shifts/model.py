from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.enums import ShiftPreset


@dataclass(frozen=True)
class ShiftWindow:
    """Expected start/end instants of an employee's shift on one day."""

    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


# (start, end) per preset; an end before the start rolls over to the next day.
SHIFT_PRESETS: dict[ShiftPreset, tuple[time, time]] = {
    ShiftPreset.MORNING: (time(9, 0), time(17, 0)),
    ShiftPreset.EVENING: (time(17, 0), time(1, 0)),
    ShiftPreset.NIGHT: (time(1, 0), time(9, 0)),
}

DEFAULT_PRESET = ShiftPreset.MORNING
