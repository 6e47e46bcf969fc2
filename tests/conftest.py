import json
import os

import django
import pytest
import requests

from directory.client import DirectoryError
from mapping.models import RouteLeg, RouteResult
from mapping.provider import MapProvider, PlacesError


def pytest_configure():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "locator_backend.settings")
    django.setup()


class MockResponse:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        self.text = text if text is not None else (json.dumps(json_data) if json_data is not None else "")

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._json is not None:
            return self._json
        return json.loads(self.text)

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


class MockSession:
    """Stands in for requests.Session; replies are queued in call order."""
    def __init__(self):
        self.calls = []
        self._replies = []

    def reply(self, status_code=200, json_data=None, text=None):
        self._replies.append(MockResponse(status_code, json_data, text))

    def fail(self, exc=None):
        self._replies.append(exc or requests.ConnectionError("connection refused"))

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


class MockLocatorApi:
    """Proxy API double for the search controller."""
    def __init__(self):
        self.units_responses = {}
        self.municipios = []
        self.fail_units = False
        self.fail_municipios = False
        self.fail_logout = False
        self.unit_calls = []
        self.logout_calls = []

    def list_health_units(self, category, municipio):
        self.unit_calls.append((category, municipio))
        if self.fail_units:
            raise DirectoryError("HTTP error! status: 500", 500)
        return self.units_responses.get((category, municipio), {})

    def list_municipalities(self):
        if self.fail_municipios:
            raise DirectoryError("boom")
        return list(self.municipios)

    def logout(self, token=None):
        self.logout_calls.append(token)
        if self.fail_logout:
            raise DirectoryError("logout failed")


class MockMapProvider(MapProvider):
    def __init__(self):
        super().__init__()
        self.route_calls = []
        self.route_error = None
        self.places = {}
        self.predictions = []
        self.autocomplete_error = None
        self.autocomplete_calls = []
        self.end_location = (-2.5, -44.2)

    def compute_route(self, origin, destination_place_id, mode):
        self.route_calls.append((origin, destination_place_id, mode))
        if self.route_error is not None:
            raise self.route_error
        return RouteResult(
            legs=(
                RouteLeg(
                    distance_text="5,2 km",
                    duration_text="12 min",
                    distance_meters=5200,
                    duration_seconds=720,
                    end_location=self.end_location,
                ),
            ),
            polyline="abc",
        )

    def autocomplete(self, text, country, types):
        self.autocomplete_calls.append((text, country, types))
        if self.autocomplete_error is not None:
            raise self.autocomplete_error
        return list(self.predictions)

    def place_details(self, place_id):
        if place_id not in self.places:
            raise PlacesError(f"unknown place {place_id}")
        return self.places[place_id]


class MockGeolocator:
    """Captures the callbacks so a test decides when (and how) the device answers."""
    def __init__(self):
        self.options = None
        self._success = None
        self._error = None

    def get_current_position(self, success, error, options):
        self._success = success
        self._error = error
        self.options = options

    def succeed(self, location):
        self._success(location)

    def fail(self, error):
        self._error(error)


class DeferredExecutor:
    """Executor that only runs submitted work when the test says so."""
    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        self.pending.append((fn, args, kwargs))

    def run(self, index):
        fn, args, kwargs = self.pending[index]
        fn(*args, **kwargs)


@pytest.fixture
def mock_session():
    return MockSession()


@pytest.fixture
def mock_api():
    return MockLocatorApi()


@pytest.fixture
def mock_provider():
    return MockMapProvider()


@pytest.fixture
def mock_geolocator():
    return MockGeolocator()


@pytest.fixture
def deferred_executor():
    return DeferredExecutor()


@pytest.fixture
def sample_payload():
    return {
        "São Luís": [
            {
                "id": "ChIJ-slz-1",
                "displayName": {"text": "Hospital Municipal"},
                "formattedAddress": "Rua Grande, 100 - Centro, São Luís - MA",
                "nationalPhoneNumber": "(98) 3212-0000",
            },
            {"id": "ChIJ-slz-2"},
        ],
        "Imperatriz": [],
        "Caxias": [
            {"id": "ChIJ-cax-1", "displayName": {"text": "Hospital Regional"}},
        ],
    }

