"""
Purpose: Explicit state + transitions for the Search State Controller.
What it does:
SearchState is a frozen snapshot. Every transition returns a new snapshot via
`dataclasses.replace`, so the flow is testable without any UI.

IDLE -> LOADING -> READY | ERROR

Each query that goes to the network gets a request id from a monotonically
increasing counter. Results are only applied for the latest issued id, so a
slow response never overwrites a newer query.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from directory.client import ALL_MUNICIPALITIES
from directory.models import HealthUnit, ResultSet, count_units
from mapping.models import Destination


class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class SearchState:
    category: str = ""
    municipio: str = ALL_MUNICIPALITIES
    status: SearchStatus = SearchStatus.IDLE

    results: ResultSet = field(default_factory=dict)
    total: int = 0

    municipalities: Tuple[str, ...] = ()
    destination: Optional[Destination] = None

    # last request id handed out, 0 means none yet
    latest_request: int = 0

    @property
    def loading(self) -> bool:
        return self.status == SearchStatus.LOADING


def is_current(state: SearchState, request_id: int) -> bool:
    return request_id == state.latest_request


def start_query(
    state: SearchState,
    *,
    category: Optional[str] = None,
    municipio: Optional[str] = None,
) -> SearchState:
    """
    Called on every filter change and on the manual "search" action.
    Filters left as None keep their current value.

    Without a category the state resets to IDLE and no request is needed.
    The request counter still moves forward so in-flight responses are dropped.
    """
    category = state.category if category is None else category
    municipio = state.municipio if municipio is None else (municipio or ALL_MUNICIPALITIES)
    request_id = state.latest_request + 1

    if not category:
        return replace(
            state,
            category="",
            municipio=municipio,
            status=SearchStatus.IDLE,
            results={},
            total=0,
            destination=None,
            latest_request=request_id,
        )

    return replace(
        state,
        category=category,
        municipio=municipio,
        status=SearchStatus.LOADING,
        destination=None,
        latest_request=request_id,
    )


def apply_results(state: SearchState, request_id: int, results: ResultSet) -> SearchState:
    """
    Replace the result set wholesale with a successful response.
    Stale responses return the state untouched.
    """
    if not is_current(state, request_id):
        return state

    return replace(
        state,
        status=SearchStatus.READY,
        results=results,
        total=count_units(results),
    )


def apply_failure(state: SearchState, request_id: int) -> SearchState:
    if not is_current(state, request_id):
        return state

    return replace(state, status=SearchStatus.ERROR, results={}, total=0)


def set_municipalities(state: SearchState, names: Iterable[Any]) -> SearchState:
    return replace(state, municipalities=tuple(sorted(str(name) for name in names)))


def select_destination(state: SearchState, unit: HealthUnit) -> SearchState:
    return replace(state, destination=Destination.from_unit(unit))


def clear_destination(state: SearchState) -> SearchState:
    if state.destination is None:
        return state
    return replace(state, destination=None)
