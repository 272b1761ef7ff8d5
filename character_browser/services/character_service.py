# character_browser/services/character_service.py
"""
Business-logic layer for character listings.  Both services hand back the
same Page container; they differ in where filtering happens.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from simple_logger import Slogger

from character_browser.models.character import Character, UpstreamPage
from character_browser.models.filters import CharacterFilters, filter_characters, sort_characters
from character_browser.models.pagination import Page, PageMapper, UPSTREAM_PAGE_SIZE
from character_browser.services.api_client import ApiClient


class RemoteCharacterService:
    """Server-filtered mode: filters travel as query parameters."""

    mode = "server"

    def __init__(
        self,
        client: ApiClient,
        *,
        default_page_size: int = 20,
        stitch_pages: bool = True,
    ) -> None:
        self._client = client
        self._per_page = default_page_size
        self._stitch = stitch_pages

    def reload(self) -> None:
        """Nothing is held between requests in this mode."""

    async def page(
        self,
        *,
        page: int = 1,
        per_page: int | None = None,
        filters: Optional[CharacterFilters] = None,
        sort: str = "",
    ) -> Page[Character]:
        """Return a Page of characters for the logical `page`."""
        per_page = per_page or self._per_page
        query = (filters or CharacterFilters()).as_query()
        mapper = PageMapper(page, per_page, UPSTREAM_PAGE_SIZE)

        if self._stitch and not mapper.is_aligned:
            items, meta = await self._fetch_stitched(mapper, query)
        else:
            meta = await self._client.fetch_character_page(mapper.api_page, query)
            items = mapper.slice(meta.results)

        if self._stitch:
            pages = mapper.exact_total_pages(meta.count)
        else:
            pages = mapper.estimate_total_pages(meta.pages)

        Slogger.debug(
            "Loaded character page",
            {"mode": self.mode, "page": page, "per_page": per_page,
             "api_page": mapper.api_page, "items": len(items), "filters": query},
        )

        # The API cannot sort; order within the page only.
        if sort:
            items = sort_characters(items, sort)

        return Page(items=items, total=meta.count, pages=pages, page=page, per_page=per_page)

    async def _fetch_stitched(self, mapper: PageMapper, query: dict) -> tuple[List[Character], UpstreamPage]:
        upstream = list(mapper.upstream_pages)
        first = await self._client.fetch_character_page(upstream[0], query)

        # Pages past the upstream end do not exist (the API answers 404).
        rest = [n for n in upstream[1:] if n <= first.pages]
        others = await asyncio.gather(*(self._client.fetch_character_page(n, query) for n in rest))

        results = [first.results] + [p.results for p in others]
        return mapper.stitch(results), first


class InMemoryCharacterService:
    """
    Full-fetch mode: every upstream page is loaded once, then filtering,
    sorting and pagination happen in memory.
    """

    mode = "full"

    def __init__(self, client: ApiClient, *, default_page_size: int = 20) -> None:
        self._client = client
        self._per_page = default_page_size
        self._all: Optional[List[Character]] = None
        self._lock = asyncio.Lock()

    async def load_all(self) -> List[Character]:
        """Fetch page 1, then pages 2..N concurrently. One failure aborts all."""
        async with self._lock:
            if self._all is not None:
                return self._all

            first = await self._client.fetch_character_page(1)
            others = await asyncio.gather(
                *(self._client.fetch_character_page(n) for n in range(2, first.pages + 1))
            )

            characters = list(first.results)
            for upstream in others:
                characters.extend(upstream.results)

            Slogger.info(
                f"Fetched all {len(characters)} characters",
                {"mode": self.mode, "upstream_pages": first.pages},
            )
            self._all = characters
            return characters

    def reload(self) -> None:
        """Forget the loaded set; the next page() fetches again."""
        self._all = None

    async def page(
        self,
        *,
        page: int = 1,
        per_page: int | None = None,
        filters: Optional[CharacterFilters] = None,
        sort: str = "name-az",
    ) -> Page[Character]:
        per_page = per_page or self._per_page
        characters = await self.load_all()

        selected = sort_characters(filter_characters(characters, filters or CharacterFilters()), sort)
        total = len(selected)
        pages = max(1, (total + per_page - 1) // per_page)

        start = (page - 1) * per_page
        items = selected[start:start + per_page]
        return Page(items=items, total=total, pages=pages, page=page, per_page=per_page)
