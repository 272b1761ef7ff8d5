# character_browser/services/detail_service.py
"""
Secondary lookups for an expanded row: episodes, locations, residents.

None of these failures reach the primary error state. Each call degrades
to a placeholder, None or an empty list and logs a warning.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

from simple_logger import Slogger

from character_browser.errors import BrowserError
from character_browser.models.character import Character, Episode, LocationDetail, PlaceRef, ids_from_urls
from character_browser.services.api_client import ApiClient
from character_browser.utils.cache import UrlCache

EPISODES_UNAVAILABLE = "Episodes unavailable."


class DetailService:
    """Resolves detail URLs through one shared URL cache."""

    def __init__(self, client: ApiClient, *, cache: Optional[UrlCache] = None) -> None:
        self._client = client
        self._cache = cache or UrlCache(client.get_json)

    @property
    def cache(self) -> UrlCache:
        return self._cache

    async def episode(self, url: str) -> Episode:
        return Episode.from_api(await self._cache.get(url))

    async def episode_names(self, character: Character, limit: int = 5) -> List[str]:
        """Names of the character's first `limit` episodes."""
        urls = list(character.episode[:limit])
        try:
            episodes = await asyncio.gather(*(self.episode(url) for url in urls))
        except BrowserError as e:
            Slogger.warning(
                "Could not fetch episodes",
                {"character_id": character.id, "error": str(e)},
            )
            return [EPISODES_UNAVAILABLE]
        return [f"{ep.code} {ep.name}".strip() for ep in episodes]

    async def location_detail(self, place: PlaceRef) -> Optional[LocationDetail]:
        """Full location behind `place`; None when unknown or unreachable."""
        if not place.is_known:
            return None
        try:
            return LocationDetail.from_api(await self._cache.get(place.url))
        except BrowserError as e:
            Slogger.warning("Could not fetch location", {"url": place.url, "error": str(e)})
            return None

    async def residents(self, detail: Optional[LocationDetail], limit: int = 10) -> List[Character]:
        if detail is None:
            return []
        return await self._characters(list(detail.residents[:limit]), {"location_id": detail.id})

    async def episode_characters(self, episode_url: str, limit: int = 10) -> Tuple[Optional[Episode], List[Character]]:
        """The episode itself plus up to `limit` of its characters."""
        try:
            episode = await self.episode(episode_url)
        except BrowserError as e:
            Slogger.warning("Could not fetch episode", {"url": episode_url, "error": str(e)})
            return None, []
        return episode, await self._characters(list(episode.characters[:limit]), {"episode_id": episode.id})

    async def _characters(self, urls: List[str], context: dict) -> List[Character]:
        ids = ids_from_urls(urls)
        if not ids:
            return []
        try:
            return Character.list_from_api(await self._cache.get(self._client.character_url(*ids)))
        except BrowserError as e:
            Slogger.warning("Could not fetch characters", {**context, "error": str(e)})
            return []
