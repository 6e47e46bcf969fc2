"""
Purpose: Wires the screen together.
What it does:
- One MessageModal shared by every component
- SearchController destination changes are forwarded to the RoutingPanel
- Clearing the route on the panel clears the destination on the search side
"""

from __future__ import annotations

from typing import Optional

from mapping.panel import RoutingPanel
from mapping.policy import MapPolicy
from mapping.provider import MapProvider
from notifications.modal import MessageModal
from search.controller import SearchController
from search.policy import SearchPolicy
from search.presentation import ResultsView, build_results_view
from search.session import Session, User


class LocatorPage:
    def __init__(
        self,
        api,
        provider: MapProvider,
        geolocator=None,
        executor=None,
        user: Optional[User] = None,
        on_logout=None,
        search_policy: Optional[SearchPolicy] = None,
        map_policy: Optional[MapPolicy] = None,
    ):
        self.modal = MessageModal()
        self.search = SearchController(api, notifier=self.modal, executor=executor, policy=search_policy)
        self.panel = RoutingPanel(
            provider,
            geolocator=geolocator,
            notifier=self.modal,
            on_route_cleared=self.search.clear_destination,
            policy=map_policy,
        )
        self.session = Session(api, user, on_logout) if user is not None else None

        self._forwarded = None
        self.search.subscribe(self._forward_destination)

    def start(self) -> None:
        """Equivalent of the first render: map, device location, municipios."""
        self.panel.mount()
        self.search.load_municipalities()

    def results(self) -> ResultsView:
        return build_results_view(self.search.state)

    def _forward_destination(self, state) -> None:
        if state.destination is self._forwarded:
            return
        self._forwarded = state.destination
        self.panel.set_destination(state.destination)
