#Marks mapping as a package.
#Re-exports the panel, the provider interface and the Google adapter so other
#modules import from mapping without knowing internal file names.
#No business logic.

from .google_maps import GoogleMapsProvider
from .models import Destination, MarkerKind, RouteResult, TravelMode, UserLocation
from .panel import RoutingPanel
from .provider import MapCanvas, MapProvider, Marker, PlacesError, RoutingError
from .state import LocationStatus, PanelState, PanelView

__all__ = [
    "GoogleMapsProvider",
    "Destination",
    "MarkerKind",
    "RouteResult",
    "TravelMode",
    "UserLocation",
    "RoutingPanel",
    "MapCanvas",
    "MapProvider",
    "Marker",
    "PlacesError",
    "RoutingError",
    "LocationStatus",
    "PanelState",
    "PanelView",
]
