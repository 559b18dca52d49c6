from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.exceptions import LocationUnavailable


def is_valid_position(latitude: float, longitude: float) -> bool:
    """Finite coordinates within ±90° latitude and ±180° longitude."""
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


@dataclass(frozen=True)
class LocationReading:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


class LocationProvider(Protocol):
    """Delivers one position reading on request.

    Implementations raise LocationUnavailable (or TimeoutError/OSError) when no
    reading can be produced within ``timeout`` seconds.
    """

    def __call__(self, *, timeout: float) -> LocationReading:
        raise NotImplementedError


@dataclass(frozen=True)
class StaticLocationProvider:
    """Provider for a position the client already measured (e.g. sent in a request body)."""

    latitude: Optional[float]
    longitude: Optional[float]
    accuracy: Optional[float] = None

    def __call__(self, *, timeout: float) -> LocationReading:
        if self.latitude is None or self.longitude is None:
            raise LocationUnavailable("No location was provided by the device")
        latitude, longitude = float(self.latitude), float(self.longitude)
        if not is_valid_position(latitude, longitude):
            raise LocationUnavailable("The device reported an invalid position")
        return LocationReading(latitude=latitude, longitude=longitude, accuracy=self.accuracy)
