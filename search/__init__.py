"""
Search screen package.

Public API:
- State + transitions: SearchState, SearchStatus
- Orchestrator: SearchController
- Results view model: build_results_view
- Proxy client: LocatorApiClient
"""
from .api import LocatorApiClient
from .controller import SearchController
from .presentation import ResultsView, build_results_view
from .state import SearchState, SearchStatus

__all__ = [
    "LocatorApiClient",
    "SearchController",
    "ResultsView",
    "build_results_view",
    "SearchState",
    "SearchStatus",
]
