"""Memoizing async lookup keyed by resource URL."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict


class UrlCache:
    """
    Caches the result of `fetch(url)` for the lifetime of the cache.

    Resources are immutable once fetched, so nothing is ever evicted.
    Concurrent lookups of the same URL share one in-flight task; a failed
    lookup is not cached and the next call tries again.

    Usage::

        cache = UrlCache(client.get_json)
        episode = await cache.get("https://.../episode/1")
    """

    def __init__(self, fetch: Callable[[str], Awaitable[Any]]) -> None:
        self._fetch = fetch
        self._store: Dict[str, Any] = {}
        self._pending: Dict[str, asyncio.Task] = {}
        self._hits = 0
        self._misses = 0

    async def get(self, url: str) -> Any:
        if url in self._store:
            self._hits += 1
            return self._store[url]

        task = self._pending.get(url)
        if task is None:
            self._misses += 1
            task = asyncio.ensure_future(self._fetch(url))
            self._pending[url] = task
            try:
                value = await task
            finally:
                self._pending.pop(url, None)
            self._store[url] = value
            return value

        self._hits += 1
        return await task

    def __contains__(self, url: str) -> bool:
        return url in self._store

    def __len__(self) -> int:
        return len(self._store)

    def stats(self) -> Dict[str, int]:
        return {"size": len(self._store), "hits": self._hits, "misses": self._misses}
