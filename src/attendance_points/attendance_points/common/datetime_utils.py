from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Optional

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse "HH:MM" into a time, or None when missing/malformed."""
    if not value:
        return None
    m = _HHMM.match(str(value))
    if not m:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        return None
    return time(hour=hours, minute=minutes)


def round_minutes(delta: timedelta) -> int:
    """Whole minutes in delta, halves rounded up."""
    return int(math.floor(delta.total_seconds() / 60 + 0.5))


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
