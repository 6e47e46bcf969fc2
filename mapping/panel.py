"""
Purpose: Orchestrator for the map/routing panel (the "glue").
What it does:
Creates the map widget, acquires the user location (device or typed address),
and computes a route whenever a destination AND a location fix are both known.
A destination picked before any fix is routed automatically once the fix
arrives.

Overlays are owned here exclusively: at most one user location marker and at
most one destination marker exist at any time.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from . import state as transitions
from .geolocation import GeolocationError, GeolocationErrorCode, PositionOptions
from .models import Destination, LocationSource, MarkerKind, UserLocation
from .policy import MapPolicy, default_map_policy
from .provider import MapCanvas, MapProvider, Marker, PlacePrediction, PlacesError, RoutingError
from .state import PanelState, PanelView

logger = logging.getLogger(__name__)

LOCATION_PERMISSION_MESSAGE = "Permita o acesso à sua localização para rotas mais precisas"
TYPE_ADDRESS_MESSAGE = "Digite seu endereço para melhor precisão"
ADDRESS_ERROR_MESSAGE = "Não foi possível obter as coordenadas desse endereço"
COMPUTING_ROUTE_MESSAGE = "Calculando rota..."
ROUTE_ERROR_MESSAGE = "Erro ao calcular rota"
MAP_CLEARED_MESSAGE = "Mapa limpo!"


class RoutingPanel:
    """
    provider: MapProvider used for the widget, autocomplete and routing
    geolocator: object with get_current_position(success, error, options), or None
    notifier: object with show(message), typically notifications.MessageModal
    on_route_cleared: callback telling the search screen to drop its destination
    """
    def __init__(
        self,
        provider: MapProvider,
        geolocator=None,
        notifier=None,
        on_route_cleared: Optional[Callable[[], None]] = None,
        policy: Optional[MapPolicy] = None,
    ):
        self.provider = provider
        self.geolocator = geolocator
        self.notifier = notifier
        self.on_route_cleared = on_route_cleared
        self.policy = policy or default_map_policy()

        self.state = PanelState()
        self.canvas: Optional[MapCanvas] = None
        self._markers: Dict[MarkerKind, Marker] = {}

    # --- lifecycle ---

    def mount(self) -> MapCanvas:
        """Create the map and ask the device for a fresh, high-accuracy fix."""
        self.canvas = self.provider.create_map(self.policy.default_center, self.policy.default_zoom)

        if self.geolocator is None:
            self.on_position_error(GeolocationError(GeolocationErrorCode.UNSUPPORTED))
            return self.canvas

        self.state = transitions.location_requested(self.state)
        self._notify(LOCATION_PERMISSION_MESSAGE)

        options = PositionOptions(
            enable_high_accuracy=self.policy.enable_high_accuracy,
            timeout_ms=self.policy.geolocation_timeout_ms,
            maximum_age_ms=self.policy.maximum_age_ms,
        )
        self.geolocator.get_current_position(self.on_position, self.on_position_error, options)
        return self.canvas

    # --- device geolocation callbacks ---

    def on_position(self, location: UserLocation) -> None:
        threshold = self.policy.accuracy_threshold_meters
        self.state = transitions.position_received(self.state, location, threshold)

        title = "Sua Localização"
        if location.accuracy_meters is not None:
            title = f"{title} (±{transitions.rounded(location.accuracy_meters)}m)"
        self._focus(location)
        self._replace_marker(MarkerKind.USER_LOCATION, location.position, title, self.policy.gps_icon)

        if location.accuracy_meters is None:
            self._notify(f"Precisão do GPS desconhecida. {TYPE_ADDRESS_MESSAGE}.")
        elif self.state.address_prompt_open:
            accuracy = transitions.rounded(location.accuracy_meters)
            self._notify(f"Precisão do GPS baixa (±{accuracy}m). {TYPE_ADDRESS_MESSAGE}.")
        else:
            accuracy = transitions.rounded(location.accuracy_meters)
            self._notify(f"Localização obtida com boa precisão: ±{accuracy}m")

        self._maybe_route()

    def on_position_error(self, error: GeolocationError) -> None:
        logger.warning(f"Geolocation failed: {error.code.value}")
        self.state = transitions.position_failed(self.state, error.code)
        self._notify(transitions.GEOLOCATION_ERROR_MESSAGES[error.code])

    # --- manual address entry ---

    def request_manual_address(self) -> None:
        self.state = transitions.manual_entry_requested(self.state)
        self._notify(TYPE_ADDRESS_MESSAGE)

    def cancel_manual_address(self) -> None:
        self.state = transitions.manual_entry_cancelled(self.state)

    def suggest_addresses(self, text: str) -> List[PlacePrediction]:
        try:
            return self.provider.autocomplete(text, self.policy.country, self.policy.autocomplete_types)
        except PlacesError as e:
            logger.error(f"Autocomplete failed: {e}")
            return []

    def select_address(self, place_id: str) -> Optional[UserLocation]:
        """
        A suggestion was picked: its coordinates become the location fix with
        the fixed manual accuracy, replacing any previous marker.
        """
        try:
            place = self.provider.place_details(place_id)
        except PlacesError as e:
            logger.error(f"Place lookup failed: {e}")
            self._notify(ADDRESS_ERROR_MESSAGE)
            return None

        location = UserLocation(
            lat=place.lat,
            lng=place.lng,
            accuracy_meters=self.policy.manual_accuracy_meters,
            source=LocationSource.MANUAL,
        )
        self.state = transitions.manual_location_set(self.state, location)

        self._focus(location)
        self._replace_marker(MarkerKind.USER_LOCATION, location.position, "Seu Endereço", self.policy.manual_icon)
        self._notify(f"Endereço definido: {place.formatted_address or place.name or place_id}")

        self._maybe_route()
        return location

    # --- routing ---

    def set_destination(self, destination: Optional[Destination]) -> None:
        # a new pick of the same unit is a new Destination object and reroutes
        if destination is self.state.destination:
            return
        if destination is None:
            # the search side already dropped its destination, so no callback
            self._clear_overlays()
            return
        self.state = transitions.destination_changed(self.state, destination)
        self._maybe_route()

    def clear_route(self) -> None:
        self._clear_overlays()

        if self.on_route_cleared is not None:
            self.on_route_cleared()

        if self.canvas is not None and self.state.location is not None:
            self.canvas.set_center(self.state.location.position, self.policy.focus_zoom)
        self._notify(MAP_CLEARED_MESSAGE)

    def view(self) -> PanelView:
        return transitions.build_panel_view(self.state, self.policy.accuracy_threshold_meters)

    def marker(self, kind: MarkerKind) -> Optional[Marker]:
        return self._markers.get(kind)

    # --- internals ---

    def _maybe_route(self) -> None:
        if not self.state.should_route or self.canvas is None:
            return

        destination = self.state.destination
        self._notify(COMPUTING_ROUTE_MESSAGE)
        try:
            route = self.provider.compute_route(
                self.state.location.position,
                destination.external_id,
                self.policy.travel_mode,
            )
        except RoutingError as e:
            # the previously drawn route stays on the map
            logger.error(f"Route to {destination.external_id} failed: {e}")
            self._notify(ROUTE_ERROR_MESSAGE)
            return

        self.provider.render_route(self.canvas, route)
        self.state = transitions.route_rendered(self.state, route)

        leg = route.first_leg
        if leg.end_location is not None:
            self._replace_marker(MarkerKind.DESTINATION, leg.end_location, destination.name, self.policy.destination_icon)
        else:
            self._remove_marker(MarkerKind.DESTINATION)

        self._notify(f"Rota calculada! Distância: {leg.distance_text}, Tempo: {leg.duration_text}")

    def _clear_overlays(self) -> None:
        if self.canvas is not None:
            self.provider.clear_route(self.canvas)
        self._remove_marker(MarkerKind.DESTINATION)
        self.state = transitions.route_cleared(self.state)

    def _focus(self, location: UserLocation) -> None:
        if self.canvas is not None:
            self.canvas.set_center(location.position, self.policy.focus_zoom)

    def _replace_marker(self, kind: MarkerKind, position, title: str, icon: str) -> None:
        if self.canvas is None:
            return
        self._remove_marker(kind)
        self._markers[kind] = self.provider.place_marker(self.canvas, position, title, kind, icon)

    def _remove_marker(self, kind: MarkerKind) -> None:
        marker = self._markers.pop(kind, None)
        if marker is not None:
            marker.remove()

    def _notify(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.show(message)
