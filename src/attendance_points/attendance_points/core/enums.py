from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """State of a single attendance record."""

    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class ShiftPreset(str, Enum):
    MORNING = "morning"
    EVENING = "evening"
    NIGHT = "night"


class LeaveType(str, Enum):
    FULL_DAY = "full_day"
    TIME = "time"


class RequestStatus(str, Enum):
    """Approval state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
