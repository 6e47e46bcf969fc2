"""
Purpose: Orchestrator for the search screen (the "glue").
What it does:
Reacts to filter changes and the manual search action, calls the proxy API,
and feeds the outcome back through the transitions in search/state.py.
Emits user notifications and tells subscribers (e.g. the routing panel)
whenever the state changes.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from directory.client import DirectoryError
from directory.models import HealthUnit, ResultSet, parse_result_set
from mapping.models import Destination

from . import state as transitions
from .policy import SearchPolicy, default_search_policy
from .state import SearchState, SearchStatus

logger = logging.getLogger(__name__)


class SearchController:
    """
    Owns the SearchState snapshot.

    api: object with list_health_units(category, municipio) and list_municipalities()
    notifier: object with show(message), typically notifications.MessageModal
    executor: optional concurrent.futures.Executor. Without one, requests run inline.
    """
    def __init__(self, api, notifier=None, executor=None, policy: Optional[SearchPolicy] = None):
        self.api = api
        self.notifier = notifier
        self.executor = executor
        self.policy = policy or default_search_policy()

        self.state = SearchState(municipio=self.policy.default_municipio)
        # reentrant so a listener may call back into the controller
        self._lock = threading.RLock()
        self._listeners: List[Callable[[SearchState], None]] = []

    @property
    def categories(self) -> List[str]:
        """Options of the category filter."""
        return list(self.policy.categories)

    def subscribe(self, listener: Callable[[SearchState], None]) -> None:
        self._listeners.append(listener)

    # --- Public API ---

    def load_municipalities(self) -> None:
        try:
            names = self.api.list_municipalities()
        except DirectoryError as e:
            logger.error(f"Failed to load municipios: {e}")
            self._notify_user(self.policy.municipios_error_message)
            return
        with self._lock:
            self._commit(transitions.set_municipalities(self.state, names))

    def set_category(self, category: str) -> Optional[int]:
        return self._query(category=category)

    def set_municipio(self, municipio: str) -> Optional[int]:
        return self._query(municipio=municipio)

    def search(self) -> Optional[int]:
        """Manual re-query with the current filters."""
        return self._query()

    def trace_route(self, unit: HealthUnit) -> Destination:
        with self._lock:
            new_state = transitions.select_destination(self.state, unit)
            self._commit(new_state)
        return new_state.destination

    def clear_destination(self) -> None:
        with self._lock:
            new_state = transitions.clear_destination(self.state)
            if new_state is not self.state:
                self._commit(new_state)

    # --- Internals ---

    def _query(self, *, category: Optional[str] = None, municipio: Optional[str] = None) -> Optional[int]:
        """
        Returns the request id of the issued query, or None when the
        category is empty and no request was needed.
        """
        with self._lock:
            new_state = transitions.start_query(self.state, category=category, municipio=municipio)
            self._commit(new_state)

        if new_state.status != SearchStatus.LOADING:
            return None

        request_id = new_state.latest_request
        if self.executor is None:
            self._run_query(request_id, new_state.category, new_state.municipio)
        else:
            self.executor.submit(self._run_query, request_id, new_state.category, new_state.municipio)
        return request_id

    def _run_query(self, request_id: int, category: str, municipio: str) -> None:
        try:
            payload = self.api.list_health_units(category, municipio)
            if not isinstance(payload, dict):
                raise DirectoryError("Unexpected health units body")
            results = parse_result_set(payload)
        except DirectoryError as e:
            logger.error(f"Failed to fetch health units (request {request_id}): {e}")
            self._finish(request_id, None)
            return
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Malformed health units body (request {request_id}): {e}")
            self._finish(request_id, None)
            return
        self._finish(request_id, results)

    def _finish(self, request_id: int, results: Optional[ResultSet]) -> None:
        with self._lock:
            if results is None:
                new_state = transitions.apply_failure(self.state, request_id)
            else:
                new_state = transitions.apply_results(self.state, request_id, results)

            if new_state is self.state:
                logger.info(f"Discarding stale response for request {request_id}")
                return
            self._commit(new_state)

        if new_state.status == SearchStatus.ERROR:
            self._notify_user(self.policy.fetch_error_message)
        elif new_state.total > 0:
            self._notify_user(self.policy.found_message.format(total=new_state.total))

    def _commit(self, new_state: SearchState) -> None:
        """Store and publish under the lock so listeners see snapshots in commit order."""
        with self._lock:
            self.state = new_state
            for listener in self._listeners:
                listener(new_state)

    def _notify_user(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.show(message)
