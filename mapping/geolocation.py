"""
Purpose: Device geolocation contract.
What it does:
Describes the options passed to the device and the failures it can report.
The panel talks to any object exposing

    get_current_position(success, error, options)

where `success` receives a mapping.models.UserLocation and `error` receives a
GeolocationError. A missing geolocator means the device has no support.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GeolocationErrorCode(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


class GeolocationError(Exception):
    """Raised (or passed to the error callback) when no fix could be obtained."""

    def __init__(self, code: GeolocationErrorCode, message: str = ""):
        super().__init__(message or code.value)
        self.code = code


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool = True
    timeout_ms: int = 15000
    maximum_age_ms: int = 0


def is_accurate(accuracy_meters, threshold_meters: float) -> bool:
    """A fix without a reported accuracy is treated as inaccurate."""
    if accuracy_meters is None:
        return False
    return accuracy_meters <= threshold_meters
