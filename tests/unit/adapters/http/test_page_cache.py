"""
Tests unitaires du cache de pages (PageCache).
"""

from pathlib import Path

import pytest

from src.adapters.http.cache import PageCache


class TestPageCache:
    """Tests pour la classe PageCache."""

    @pytest.fixture
    def cache(self, tmp_path: Path) -> PageCache:
        """Cree un cache avec un repertoire temporaire."""
        cache = PageCache(cache_dir=tmp_path / "pages")
        yield cache
        cache.close()

    @pytest.mark.asyncio
    async def test_get_returns_none_for_missing_url(self, cache: PageCache) -> None:
        assert await cache.get("https://example.com/missing") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, cache: PageCache) -> None:
        await cache.set("https://example.com/a", "<html>a</html>")
        assert await cache.get("https://example.com/a") == "<html>a</html>"

    @pytest.mark.asyncio
    async def test_clear_removes_all_pages(self, cache: PageCache) -> None:
        await cache.set("https://example.com/a", "a")
        await cache.set("https://example.com/b", "b")

        await cache.clear()

        assert await cache.get("https://example.com/a") is None
        assert await cache.get("https://example.com/b") is None

    def test_default_ttl_is_24_hours(self, cache: PageCache) -> None:
        assert PageCache.PAGE_TTL == 86400
        assert cache.ttl == 86400

    def test_custom_ttl(self, tmp_path: Path) -> None:
        cache = PageCache(cache_dir=tmp_path / "short", ttl=60)
        try:
            assert cache.ttl == 60
        finally:
            cache.close()
