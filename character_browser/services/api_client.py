# File: character_browser/services/api_client.py

import logging
from typing import Any, Dict, Optional

from curl_cffi import requests

from character_browser.errors import NetworkError, ParseError
from character_browser.models.character import UpstreamPage

logger = logging.getLogger(__name__)

# --- Constants (overridden by the "http" config section) ---
DEFAULT_BASE_URL = "https://rickandmortyapi.com/api"
DEFAULT_TIMEOUT_SECONDS = 15
DEFAULT_IMPERSONATE_BROWSER = "chrome110"


class ApiClient:
    """
    Thin async adapter over the character REST API.

    Only `NetworkError` and `ParseError` leave this class. No retries: a
    failure is terminal for that one call.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        impersonate: Optional[str] = DEFAULT_IMPERSONATE_BROWSER,
        session: Any = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.impersonate = impersonate
        self._session = session
        self._owns_session = session is None

    # ------------------------------------------------------------------ #
    # session
    # ------------------------------------------------------------------ #

    @property
    def session(self):
        if self._session is None:
            self._session = requests.AsyncSession(impersonate=self.impersonate)
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    # ------------------------------------------------------------------ #
    # raw access
    # ------------------------------------------------------------------ #

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET `url` and decode the JSON body."""
        logger.debug(f"GET {url} params={params}")
        try:
            response = await self.session.get(url, params=params or None, timeout=self.timeout)
        except requests.RequestsError as e:
            logger.warning(f"Request failed for {url}: {e}")
            raise NetworkError(f"Request failed for {url}: {e}", url=url) from e

        if response.status_code != 200:
            logger.warning(f"Failed to fetch {url}. Status: {response.status_code}")
            raise NetworkError(
                f"Unexpected status {response.status_code} for {url}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise ParseError(f"Invalid JSON from {url}: {e}") from e

    # ------------------------------------------------------------------ #
    # resources
    # ------------------------------------------------------------------ #

    def character_url(self, *ids: int) -> str:
        if not ids:
            return f"{self.base_url}/character"
        return f"{self.base_url}/character/{','.join(str(i) for i in ids)}"

    async def fetch_character_page(self, page: int = 1, filters: Optional[Dict[str, str]] = None) -> UpstreamPage:
        """One upstream page, optionally filtered server-side."""
        params: Dict[str, Any] = dict(filters or {})
        if page > 1:
            params["page"] = page
        doc = await self.get_json(self.character_url(), params)
        return UpstreamPage.from_api(doc)

