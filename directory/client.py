#Purpose: The directory "adapter/client".
#Sole responsibility: talk to the upstream health unit directory via HTTP.
#Encapsulates directory-specific details:
#query string construction (category / municipio, "todos" sentinel)
#timeouts and error handling
#It should not contain view state or presentation.


from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests

from .models import count_units

# Read the directory base URL from environment
# Example in .env:
# REMOTE_API=https://directory.example.org/api
load_dotenv()
REMOTE_API = os.getenv("REMOTE_API")
DIRECTORY_TIMEOUT = float(os.getenv("DIRECTORY_TIMEOUT", "30"))

ALL_MUNICIPALITIES = "todos"

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Upstream directory unavailable (non-2xx status or network failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_units_query(category: Optional[str], municipio: Optional[str] = None) -> str:
    """
    Build the upstream query string.
    Empty filters are omitted, and so is the "todos" municipality sentinel.
    """
    params = []
    if category:
        params.append(f"category={quote(category, safe='')}")
    if municipio and municipio != ALL_MUNICIPALITIES:
        params.append(f"municipio={quote(municipio, safe='')}")
    return "&".join(params)


class DirectoryClient:
    """
    Directory Adapter / Client

    Sole responsibility:
    - Talk to the upstream directory via HTTP
    - Return the JSON body verbatim (health units) or the raw body (municipios)
    """
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, session=None):
        self.base_url = (base_url or REMOTE_API or "").rstrip("/")
        self.timeout = timeout if timeout is not None else DIRECTORY_TIMEOUT
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("Directory base URL not set. Please set REMOTE_API in the .env file.")

    def health_units_url(self, category: Optional[str], municipio: Optional[str] = None) -> str:
        return f"{self.base_url}/health-units?{build_units_query(category, municipio)}"

    def list_health_units(self, category: Optional[str], municipio: Optional[str] = None) -> Dict[str, Any]:
        """
        calls the upstream /health-units endpoint and returns the parsed body unmodified

        Returns:
            {
                "<municipio>": [ {"id": ..., "displayName": {"text": ...}, ...}, ... ],
            }
        Raises DirectoryError on any failure, without distinguishing the cause.
        """
        url = self.health_units_url(category, municipio)
        logger.info(f"Requesting health units: {url}")

        try:
            response = self.session.get(
                url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DirectoryError(f"Directory request failed: {e}") from e

        if not response.ok:
            raise DirectoryError(f"HTTP error! status: {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise DirectoryError(f"Directory returned invalid JSON: {e}", response.status_code) from e

        if not isinstance(data, dict):
            raise DirectoryError("Directory returned an unexpected body", response.status_code)

        logger.info(f"Received {len(data)} municipalities, {count_units(data)} units in total")
        return data

    def list_municipalities(self) -> Tuple[int, str]:
        """
        Relays /municipios without validation.
        Returns (status_code, raw_body). Network failures raise DirectoryError.
        """
        url = f"{self.base_url}/municipios"
        try:
            response = self.session.get(
                url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DirectoryError(f"Directory request failed: {e}") from e
        return response.status_code, response.text

    def logout(self, authorization: Optional[str] = None) -> None:
        """Best-effort upstream logout. Failures are logged and ignored."""
        headers = {"Content-Type": "application/json"}
        if authorization:
            headers["Authorization"] = authorization
        try:
            self.session.post(f"{self.base_url}/auth/logout", headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Logout endpoint failed (ignored): {e}")

