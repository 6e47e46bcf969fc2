"""
Purpose: Explicit state + transitions for the map/routing panel.
What it does:
PanelState is a frozen snapshot; each transition returns a new one.

Location acquisition:

REQUESTING -> ACCURATE | INACCURATE | DENIED
any        -> MANUAL_PENDING (user asks to type an address)
any        -> MANUAL_SET (an autocomplete suggestion was picked)

The status line and the prompt text live here too, since they are derived
from the same snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .geolocation import GeolocationErrorCode, is_accurate
from .models import Destination, RouteResult, UserLocation


class LocationStatus(str, Enum):
    REQUESTING = "requesting"
    ACCURATE = "accurate"
    INACCURATE = "inaccurate"
    DENIED = "denied"
    MANUAL_PENDING = "manual_pending"
    MANUAL_SET = "manual_set"


LOADING_STATUS = "Carregando mapa..."
REQUESTING_STATUS = "Solicitando sua localização..."
TYPE_ADDRESS_STATUS = "Digite seu endereço"
MANUAL_SET_STATUS = "Endereço definido com precisão"

GEOLOCATION_ERROR_MESSAGES = {
    GeolocationErrorCode.PERMISSION_DENIED: "Localização negada. Digite seu endereço abaixo.",
    GeolocationErrorCode.POSITION_UNAVAILABLE: "GPS indisponível. Digite seu endereço abaixo.",
    GeolocationErrorCode.TIMEOUT: "Timeout na localização. Digite seu endereço abaixo.",
    GeolocationErrorCode.UNSUPPORTED: "Geolocalização não suportada. Digite seu endereço abaixo.",
}


@dataclass(frozen=True)
class PanelState:
    location_status: LocationStatus = LocationStatus.REQUESTING
    location: Optional[UserLocation] = None
    # status of the current fix, restored when the prompt is cancelled
    fix_status: Optional[LocationStatus] = None
    geolocation_error: Optional[GeolocationErrorCode] = None

    address_prompt_open: bool = False
    status_text: str = LOADING_STATUS

    destination: Optional[Destination] = None
    route: Optional[RouteResult] = None

    @property
    def has_fix(self) -> bool:
        return self.location is not None

    @property
    def should_route(self) -> bool:
        return self.destination is not None and self.location is not None


def rounded(meters: float) -> int:
    return int(round(meters))


def location_requested(state: PanelState) -> PanelState:
    return replace(state, location_status=LocationStatus.REQUESTING, status_text=REQUESTING_STATUS)


def position_received(state: PanelState, location: UserLocation, threshold_meters: float) -> PanelState:
    accurate = is_accurate(location.accuracy_meters, threshold_meters)
    status = LocationStatus.ACCURATE if accurate else LocationStatus.INACCURATE

    if location.accuracy_meters is None:
        text = f"Precisão desconhecida - {TYPE_ADDRESS_STATUS}"
    elif accurate:
        text = f"Localização precisa (±{rounded(location.accuracy_meters)}m)"
    else:
        text = f"Precisão baixa (±{rounded(location.accuracy_meters)}m) - {TYPE_ADDRESS_STATUS}"

    return replace(
        state,
        location_status=status,
        location=location,
        fix_status=status,
        geolocation_error=None,
        address_prompt_open=not accurate,
        status_text=text,
    )


def position_failed(state: PanelState, code: GeolocationErrorCode) -> PanelState:
    return replace(
        state,
        location_status=LocationStatus.DENIED,
        geolocation_error=code,
        address_prompt_open=True,
        status_text=TYPE_ADDRESS_STATUS,
    )


def manual_entry_requested(state: PanelState) -> PanelState:
    return replace(state, location_status=LocationStatus.MANUAL_PENDING, address_prompt_open=True)


def manual_entry_cancelled(state: PanelState) -> PanelState:
    """Only possible once a fix exists; otherwise the prompt stays open."""
    if state.location is None:
        return state
    return replace(state, location_status=state.fix_status, address_prompt_open=False)


def manual_location_set(state: PanelState, location: UserLocation) -> PanelState:
    return replace(
        state,
        location_status=LocationStatus.MANUAL_SET,
        location=location,
        fix_status=LocationStatus.MANUAL_SET,
        geolocation_error=None,
        address_prompt_open=False,
        status_text=MANUAL_SET_STATUS,
    )


def destination_changed(state: PanelState, destination: Optional[Destination]) -> PanelState:
    return replace(state, destination=destination)


def route_rendered(state: PanelState, route: RouteResult) -> PanelState:
    return replace(state, route=route)


def route_cleared(state: PanelState) -> PanelState:
    return replace(state, route=None, destination=None)


def prompt_text(state: PanelState, threshold_meters: float) -> str:
    location = state.location
    if state.has_fix and location.accuracy_meters is not None and location.accuracy_meters > threshold_meters:
        return (
            f"Precisão do GPS baixa (±{rounded(location.accuracy_meters)}m). "
            "Digite seu endereço para melhor precisão."
        )
    return "Digite seu endereço para definir sua localização:"


def details_text(state: PanelState) -> str:
    location = state.location
    if not state.has_fix or not location.accuracy_meters:
        return ""
    return (
        f"Precisão: ±{rounded(location.accuracy_meters)}m | "
        f"Coordenadas: {location.lat:.6f}, {location.lng:.6f}"
    )


def can_request_manual_entry(state: PanelState, threshold_meters: float) -> bool:
    """The "type address" button is offered next to a good fix only."""
    location = state.location
    return (
        not state.address_prompt_open
        and state.has_fix
        and bool(location.accuracy_meters)
        and location.accuracy_meters <= threshold_meters
    )


@dataclass(frozen=True)
class PanelView:
    """What the panel shows below the map for one snapshot."""
    status_text: str
    # None while the address prompt is closed
    prompt_text: Optional[str]
    details_text: str
    can_type_address: bool


def build_panel_view(state: PanelState, threshold_meters: float) -> PanelView:
    return PanelView(
        status_text=state.status_text,
        prompt_text=prompt_text(state, threshold_meters) if state.address_prompt_open else None,
        details_text=details_text(state),
        can_type_address=can_request_manual_entry(state, threshold_meters),
    )
