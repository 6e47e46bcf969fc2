"""
Purpose: Central configuration for the map/routing panel.
What it does:

Stores all tunable thresholds for location acquisition and route drawing:

ACCURACY_THRESHOLD_METERS = 50
GEOLOCATION_TIMEOUT_MS = 15000
DEFAULT_CENTER = São Luís (-2.53073, -44.3068)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

from .models import TravelMode

MARKER_ICON_BASE = "https://maps.google.com/mapfiles/ms/icons"


@dataclass(frozen=True)
class MapPolicy:
    """
    Central configuration for geolocation, manual address entry and routing.
    """

    # --- Map widget ---
    default_center: Tuple[float, float] = (-2.53073, -44.3068)
    default_zoom: int = 13
    # zoom used when centering on the user
    focus_zoom: int = 16

    # --- Device geolocation ---
    # Fixes reporting a larger uncertainty radius open the manual address prompt.
    accuracy_threshold_meters: float = 50.0
    enable_high_accuracy: bool = True
    geolocation_timeout_ms: int = 15000
    # 0 means a cached fix is never reused
    maximum_age_ms: int = 0

    # --- Manual address entry ---
    country: str = "BR"
    autocomplete_types: List[str] = field(default_factory=lambda: ["address"])
    # accuracy assigned to a geocoded address
    manual_accuracy_meters: float = 10.0

    # --- Routing ---
    travel_mode: TravelMode = TravelMode.DRIVING

    # --- Marker icons ---
    gps_icon: str = f"{MARKER_ICON_BASE}/blue-dot.png"
    manual_icon: str = f"{MARKER_ICON_BASE}/green-dot.png"
    destination_icon: str = f"{MARKER_ICON_BASE}/red-dot.png"

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.accuracy_threshold_meters <= 0:
            raise ValueError("accuracy_threshold_meters must be > 0")

        if self.geolocation_timeout_ms <= 0:
            raise ValueError("geolocation_timeout_ms must be > 0")

        if self.maximum_age_ms < 0:
            raise ValueError("maximum_age_ms must be >= 0")

        if len(self.country) != 2:
            raise ValueError("country must be a two-letter ISO code")

        if self.manual_accuracy_meters > self.accuracy_threshold_meters:
            raise ValueError("manual_accuracy_meters must not exceed the accuracy threshold")


def default_map_policy() -> MapPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MapPolicy()
    p.validate()
    return p
