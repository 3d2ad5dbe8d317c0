"""
Cache disque des pages recuperees par la session de scraping.

Une relance de batch ne refait pas les requetes deja servies dans les
dernieres 24 heures. Persistance via diskcache, acces non bloquant via
run_in_executor.
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Optional

from diskcache import Cache


class PageCache:
    """
    Cache URL -> corps de page avec TTL.

    Attributes:
        PAGE_TTL: Duree de vie d'une page (24h)

    Example:
        cache = PageCache(cache_dir=Path(".cache/http"))
        await cache.set("https://example.com/a", "<html>...")
        text = await cache.get("https://example.com/a")
    """

    PAGE_TTL = 24 * 60 * 60

    def __init__(self, cache_dir: Path, ttl: Optional[int] = None) -> None:
        self._cache = Cache(str(cache_dir))
        self._ttl = ttl if ttl is not None else self.PAGE_TTL

    @property
    def ttl(self) -> int:
        return self._ttl

    async def get(self, url: str) -> Optional[str]:
        """Corps de page en cache, None si absent ou expire."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, url)

    async def set(self, url: str, text: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, url, text, expire=self._ttl)
        )

    async def clear(self) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        self._cache.close()
