#Purpose: The Google Maps "adapter/client".
#Sole responsibility: talk to the Google Maps web services via HTTP and return
#normalized outputs (RouteResult, PlacePrediction, Place).
#Encapsulates Google-specific details:
#coordinate formatting ("lat,lng") and "place_id:" destinations
#URL construction (/directions/json, /place/autocomplete/json, /place/details/json)
#status codes in the JSON body ("OK", "ZERO_RESULTS", ...)
#It should not contain panel state or user messages.


from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, List, Optional

import requests

from .models import LatLng, RouteLeg, RouteResult, TravelMode
from .provider import MapProvider, Place, PlacePrediction, PlacesError, RoutingError

# Example in .env:
# GOOGLE_MAPS_API_KEY=...
# GOOGLE_MAPS_BASE_URL=https://maps.googleapis.com/maps/api
load_dotenv()
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")
GOOGLE_MAPS_BASE_URL = os.getenv("GOOGLE_MAPS_BASE_URL", "https://maps.googleapis.com/maps/api")
MAPS_TIMEOUT = float(os.getenv("MAPS_TIMEOUT", "10"))

PLACE_FIELDS = "place_id,geometry,name,formatted_address"

logger = logging.getLogger(__name__)


def format_latlng(position: LatLng) -> str:
    lat, lng = position
    return f"{lat},{lng}"


def parse_route(data: Dict[str, Any]) -> RouteResult:
    """
    Normalize a Directions response. Only the first route is kept
    (Google may return alternatives).
    """
    route = data["routes"][0]
    legs = []
    for leg in route.get("legs", []):
        end = leg.get("end_location")
        legs.append(
            RouteLeg(
                distance_text=leg.get("distance", {}).get("text", ""),
                duration_text=leg.get("duration", {}).get("text", ""),
                distance_meters=leg.get("distance", {}).get("value"),
                duration_seconds=leg.get("duration", {}).get("value"),
                end_location=(end["lat"], end["lng"]) if end else None,
            )
        )
    if not legs:
        raise RoutingError("Route has no legs")

    return RouteResult(
        legs=tuple(legs),
        polyline=route.get("overview_polyline", {}).get("points"),
        summary=route.get("summary"),
    )


class GoogleMapsProvider(MapProvider):
    """
    Google Maps Adapter / Client

    Sole responsibility:
    - Talk to the Directions and Places web services
    - Return normalized outputs
    """
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        language: str = "pt-BR",
        session=None,
    ):
        super().__init__()
        self.api_key = api_key or GOOGLE_MAPS_API_KEY
        self.base_url = (base_url or GOOGLE_MAPS_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else MAPS_TIMEOUT
        self.language = language
        self.session = session or requests.Session()

        if not self.api_key:
            raise ValueError("Google Maps API key not set. Please set GOOGLE_MAPS_API_KEY in the .env file.")

    #----------------
    # Internal helper for the GET + status handling shared by every service
    #----------------
    def _get(self, path: str, params: Dict[str, Any], error_cls) -> Dict[str, Any]:
        params = dict(params, key=self.api_key, language=self.language)
        try:
            response = self.session.get(f"{self.base_url}/{path}", params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise error_cls(f"Google Maps request failed: {e}") from e

    #----------------
    # Public methods
    #----------------
    def compute_route(self, origin: LatLng, destination_place_id: str, mode: TravelMode) -> RouteResult:
        """
        calls the /directions endpoint from a coordinate to a place id

        Returns a RouteResult with the first route's legs (distance/duration
        texts and values, end location) and the overview polyline.
        """
        data = self._get(
            "directions/json",
            {
                "origin": format_latlng(origin),
                "destination": f"place_id:{destination_place_id}",
                "mode": TravelMode(mode).value,
            },
            RoutingError,
        )

        status = data.get("status")
        if status != "OK" or not data.get("routes"):
            raise RoutingError(f"Directions error: {status} {data.get('error_message', '')}".strip())

        try:
            route = parse_route(data)
        except (KeyError, TypeError) as e:
            raise RoutingError(f"Unexpected directions response: {e}") from e

        leg = route.first_leg
        logger.info(f"Route to {destination_place_id}: {leg.distance_text}, {leg.duration_text}")
        return route

    def autocomplete(self, text: str, country: str, types: List[str]) -> List[PlacePrediction]:
        if not text.strip():
            return []

        data = self._get(
            "place/autocomplete/json",
            {
                "input": text,
                "types": "|".join(types),
                "components": f"country:{country.lower()}",
            },
            PlacesError,
        )

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise PlacesError(f"Autocomplete error: {status}")

        return [
            PlacePrediction(place_id=p["place_id"], description=p.get("description", ""))
            for p in data.get("predictions", [])
        ]

    def place_details(self, place_id: str) -> Place:
        data = self._get(
            "place/details/json",
            {"place_id": place_id, "fields": PLACE_FIELDS},
            PlacesError,
        )

        if data.get("status") != "OK":
            raise PlacesError(f"Place details error: {data.get('status')}")

        result = data.get("result", {})
        location = result.get("geometry", {}).get("location")
        if not location:
            # a suggestion without geometry cannot be used as a location fix
            raise PlacesError(f"Place {place_id} has no geometry")

        return Place(
            place_id=result.get("place_id", place_id),
            lat=location["lat"],
            lng=location["lng"],
            name=result.get("name"),
            formatted_address=result.get("formatted_address"),
        )
