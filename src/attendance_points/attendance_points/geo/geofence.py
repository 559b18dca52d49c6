from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.exceptions import LocationUnavailable, NoBranchAssigned, OutOfRange
from ..employees.model import Branch
from .distance import haversine_distance
from .location import LocationProvider, LocationReading, is_valid_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeofenceDecision:
    accepted: bool
    exempt: bool
    branch: Optional[Branch] = None
    distance: Optional[float] = None
    reading: Optional[LocationReading] = None


class GeofenceValidator:
    """Accept or reject a check-in location against a branch's circular geofence.

    The only blocking step is the location read, which is bounded by
    ``timeout_seconds`` and never retried here. Rejections are raised as
    CheckInRejected subclasses so the caller can show them to the employee as-is.
    """

    def __init__(self, *, timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS):
        self._timeout = float(timeout_seconds)

    def validate(self, *, exempt: bool, branch: Optional[Branch], locate: LocationProvider) -> GeofenceDecision:
        if exempt:
            return GeofenceDecision(accepted=True, exempt=True, branch=branch)

        if branch is None:
            raise NoBranchAssigned()

        try:
            reading = locate(timeout=self._timeout)
        except (TimeoutError, OSError) as e:
            raise LocationUnavailable(f"Could not get the current location: {e}") from e

        if not is_valid_position(reading.latitude, reading.longitude):
            raise LocationUnavailable("The device reported an invalid position")

        distance = haversine_distance(reading.latitude, reading.longitude, branch.latitude, branch.longitude)
        if not distance <= branch.radius:
            logger.warning(
                "geofence rejected: branch=%s distance=%.1fm radius=%.1fm",
                branch.branch_id,
                distance,
                branch.radius,
            )
            raise OutOfRange(distance=distance, radius=branch.radius, branch_name=branch.name)

        return GeofenceDecision(accepted=True, exempt=False, branch=branch, distance=distance, reading=reading)
