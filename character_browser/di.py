# character_browser/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict

from character_browser.services.api_client import ApiClient
from character_browser.services.character_service import InMemoryCharacterService, RemoteCharacterService
from character_browser.services.detail_service import DetailService

CharacterService = RemoteCharacterService | InMemoryCharacterService


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._api_client: ApiClient | None = None
        self._character_service: CharacterService | None = None
        self._detail_service: DetailService | None = None

    # ---------- infra ----------
    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            http = self._cfg.get("http", {})
            self._api_client = ApiClient(
                self._cfg.get("api", {}).get("base_url", "https://rickandmortyapi.com/api"),
                timeout=http.get("timeout", 15),
                impersonate=http.get("impersonate"),
            )
        return self._api_client

    # ---------- services ----------
    @property
    def character_service(self) -> CharacterService:
        if self._character_service is None:
            ui = self._cfg.get("ui", {})
            per_page = ui.get("per_page", 20)
            if ui.get("mode", "server") == "full":
                self._character_service = InMemoryCharacterService(
                    self.api_client,
                    default_page_size=per_page,
                )
            else:
                self._character_service = RemoteCharacterService(
                    self.api_client,
                    default_page_size=per_page,
                    stitch_pages=self._cfg.get("pagination", {}).get("stitch_pages", True),
                )
        return self._character_service

    @property
    def detail_service(self) -> DetailService:
        if self._detail_service is None:
            self._detail_service = DetailService(self.api_client)
        return self._detail_service

    async def close(self) -> None:
        if self._api_client is not None:
            await self._api_client.close()


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
