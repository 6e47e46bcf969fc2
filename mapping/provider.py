"""
Purpose: The maps capability injected into the routing panel.
What it does:
- MapCanvas: the map widget state (center, zoom, markers, drawn directions)
- Marker: an overlay handle that can remove itself from its canvas
- MapProvider: creation of the canvas and overlays, plus the three remote
  capabilities the panel needs (address autocomplete, place lookup, routing)

Concrete providers only implement the remote part (see mapping/google_maps.py).
Tests substitute a fake provider.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import LatLng, MarkerKind, RouteResult, TravelMode


class RoutingError(Exception):
    """No route found, or the routing service failed."""
    pass


class PlacesError(Exception):
    """Autocomplete or place lookup failed."""
    pass


@dataclass(frozen=True)
class PlacePrediction:
    place_id: str
    description: str


@dataclass(frozen=True)
class Place:
    place_id: str
    lat: float
    lng: float
    name: Optional[str] = None
    formatted_address: Optional[str] = None

    @property
    def position(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass
class MapCanvas:
    center: LatLng
    zoom: int
    markers: Dict[int, "Marker"] = field(default_factory=dict)
    directions: Optional[RouteResult] = None

    def set_center(self, position: LatLng, zoom: Optional[int] = None) -> None:
        self.center = position
        if zoom is not None:
            self.zoom = zoom

    def markers_of(self, kind: MarkerKind) -> List["Marker"]:
        return [marker for marker in self.markers.values() if marker.kind == kind]


@dataclass
class Marker:
    marker_id: int
    position: LatLng
    title: str
    kind: MarkerKind
    icon: Optional[str] = None
    canvas: Optional[MapCanvas] = None

    @property
    def on_map(self) -> bool:
        return self.canvas is not None

    def remove(self) -> None:
        if self.canvas is not None:
            self.canvas.markers.pop(self.marker_id, None)
            self.canvas = None


class MapProvider(ABC):
    def __init__(self):
        self._marker_ids = itertools.count(1)

    # --- map widget ---

    def create_map(self, center: LatLng, zoom: int) -> MapCanvas:
        return MapCanvas(center=center, zoom=zoom)

    def place_marker(
        self,
        canvas: MapCanvas,
        position: LatLng,
        title: str,
        kind: MarkerKind,
        icon: Optional[str] = None,
    ) -> Marker:
        marker = Marker(
            marker_id=next(self._marker_ids),
            position=position,
            title=title,
            kind=kind,
            icon=icon,
            canvas=canvas,
        )
        canvas.markers[marker.marker_id] = marker
        return marker

    def render_route(self, canvas: MapCanvas, route: RouteResult) -> None:
        canvas.directions = route

    def clear_route(self, canvas: MapCanvas) -> None:
        canvas.directions = None

    # --- remote capabilities ---

    @abstractmethod
    def autocomplete(self, text: str, country: str, types: List[str]) -> List[PlacePrediction]:
        """Address suggestions restricted to one country. Raises PlacesError."""

    @abstractmethod
    def place_details(self, place_id: str) -> Place:
        """Coordinates of a selected suggestion. Raises PlacesError."""

    @abstractmethod
    def compute_route(self, origin: LatLng, destination_place_id: str, mode: TravelMode) -> RouteResult:
        """Route from a coordinate to a place id. Raises RoutingError."""
