"""
Purpose: Core data models for the map/routing panel.
What it does:
Defines the user location fix, the route destination and the normalized
route result without relying on any maps SDK types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from directory.models import HealthUnit

LatLng = Tuple[float, float]

UNKNOWN_NAME = "Nome não disponível"
UNKNOWN_ADDRESS = "Não informado"


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class MarkerKind(str, Enum):
    """The panel keeps at most one marker of each kind."""
    USER_LOCATION = "user_location"
    DESTINATION = "destination"


class LocationSource(str, Enum):
    GPS = "gps"
    MANUAL = "manual"


@dataclass(frozen=True)
class UserLocation:
    """
    A single location fix. A new fix supersedes the previous one.
    """
    lat: float
    lng: float
    accuracy_meters: Optional[float] = None
    source: LocationSource = LocationSource.GPS

    @property
    def position(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Destination:
    """
    The health unit targeted for route computation.
    `external_id` is the maps place id of the unit.
    """
    external_id: str
    name: str
    formatted_address: str

    @classmethod
    def from_unit(cls, unit: HealthUnit) -> Destination:
        return cls(
            external_id=unit.id,
            name=unit.display_name or UNKNOWN_NAME,
            formatted_address=unit.formatted_address or UNKNOWN_ADDRESS,
        )


@dataclass(frozen=True)
class RouteLeg:
    distance_text: str
    duration_text: str
    distance_meters: Optional[float] = None
    duration_seconds: Optional[float] = None
    end_location: Optional[LatLng] = None


@dataclass(frozen=True)
class RouteResult:
    """
    Normalized output of a directions request: the first route's legs plus
    the encoded overview polyline used to draw the path.
    """
    legs: Tuple[RouteLeg, ...]
    polyline: Optional[str] = None
    summary: Optional[str] = None

    @property
    def first_leg(self) -> RouteLeg:
        return self.legs[0]
