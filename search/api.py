#Purpose: HTTP client for the locator's own proxy endpoints.
#This is what the search screen calls (never the upstream directory directly):
#GET  /health-units?category=...&municipio=...
#GET  /municipios
#POST /auth/logout


from dotenv import load_dotenv
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from directory.client import DirectoryError

# Example in .env:
# LOCATOR_API_URL=http://localhost:8000/api
load_dotenv()
LOCATOR_API_URL = os.getenv("LOCATOR_API_URL", "http://localhost:8000/api")
LOCATOR_API_TIMEOUT = float(os.getenv("LOCATOR_API_TIMEOUT", "30"))


class LocatorApiClient:
    """
    Client for the proxy endpoints served by the Django backend.
    Failures are raised as DirectoryError so callers treat them all the same way.
    """
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, session=None):
        self.base_url = (base_url or LOCATOR_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else LOCATOR_API_TIMEOUT
        self.session = session or requests.Session()

    def list_health_units(self, category: str, municipio: str) -> Dict[str, Any]:
        # both filters are always sent, the proxy drops the "todos" sentinel
        url = (
            f"{self.base_url}/health-units"
            f"?category={quote(category, safe='')}&municipio={quote(municipio, safe='')}"
        )
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise DirectoryError(f"Proxy request failed: {e}") from e

        if not response.ok:
            raise DirectoryError(f"HTTP error! status: {response.status_code}", response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise DirectoryError(f"Proxy returned invalid JSON: {e}", response.status_code) from e

    def list_municipalities(self) -> List[str]:
        try:
            response = self.session.get(f"{self.base_url}/municipios", timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise DirectoryError(f"Could not load municipios: {e}") from e

        if not isinstance(data, list):
            raise DirectoryError("Municipios response is not a list", response.status_code)
        return data

    def logout(self, token: Optional[str] = None) -> None:
        headers = {"Authorization": f"Token {token}"} if token else {}
        try:
            self.session.post(f"{self.base_url}/auth/logout", headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise DirectoryError(f"Logout request failed: {e}") from e
