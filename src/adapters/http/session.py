"""
Session de scraping HTTP partagee par les sources d'un coordinateur.

Remplace l'etat global "navigateur courant" : la session est ouverte et
fermee explicitement par son proprietaire et compte ses operations. Au-dela
de max_operations, fetch() renvoie FetchStatus.LIMIT_EXCEEDED sans emettre
de requete.
"""

from typing import Optional

import httpx
from loguru import logger

from src.adapters.http.cache import PageCache
from src.adapters.http.retry import RateLimitError, request_with_retry
from src.core.ports.session import IFetchSession
from src.core.value_objects.fetch import FetchResult, FetchStatus

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class ScrapeSession(IFetchSession):
    """
    Session httpx avec quota d'operations et cache de pages optionnel.

    Usage:
        session = await ScrapeSession.open(max_operations=50)
        try:
            result = await session.fetch(url)
        finally:
            await session.close()
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_operations: int = 50,
        page_cache: Optional[PageCache] = None,
        max_attempts: int = 3,
    ) -> None:
        self._client = client
        self._max_operations = max_operations
        self._page_cache = page_cache
        self._max_attempts = max_attempts
        self._operation_count = 0
        self._closed = False

    @classmethod
    async def open(
        cls,
        max_operations: int = 50,
        page_cache: Optional[PageCache] = None,
        timeout: float = 30.0,
        max_attempts: int = 3,
    ) -> "ScrapeSession":
        """Ouvre une nouvelle session (nouveau client HTTP)."""
        client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        )
        logger.debug(f"Session de scraping ouverte (max {max_operations} operations)")
        return cls(
            client,
            max_operations=max_operations,
            page_cache=page_cache,
            max_attempts=max_attempts,
        )

    @property
    def operation_count(self) -> int:
        return self._operation_count

    @property
    def max_operations(self) -> int:
        return self._max_operations

    @property
    def closed(self) -> bool:
        return self._closed

    async def fetch(self, url: str) -> FetchResult:
        """
        Recupere une URL.

        Les pages servies par le cache ne consomment pas d'operation.
        """
        if self._closed:
            return FetchResult(FetchStatus.ERROR, error="session fermee")

        if self._page_cache is not None:
            cached = await self._page_cache.get(url)
            if cached is not None:
                logger.debug(f"Page en cache: {url}")
                return FetchResult(FetchStatus.OK, text=cached, status_code=200)

        if self._operation_count >= self._max_operations:
            logger.warning(
                f"Limite de session atteinte ({self._max_operations} operations), {url} ignoree"
            )
            return FetchResult(FetchStatus.LIMIT_EXCEEDED)

        self._operation_count += 1
        try:
            response = await request_with_retry(
                self._client, "GET", url, max_attempts=self._max_attempts
            )
        except RateLimitError as e:
            return FetchResult(FetchStatus.ERROR, status_code=429, error=str(e))
        except httpx.HTTPStatusError as e:
            return FetchResult(
                FetchStatus.ERROR,
                status_code=e.response.status_code,
                error=f"HTTP {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            return FetchResult(FetchStatus.ERROR, error=f"{type(e).__name__}: {e}")

        if self._page_cache is not None:
            await self._page_cache.set(url, response.text)
        return FetchResult(FetchStatus.OK, text=response.text, status_code=response.status_code)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()
        logger.debug(f"Session de scraping fermee apres {self._operation_count} operation(s)")

    async def __aenter__(self) -> "ScrapeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class ScrapeSessionFactory:
    """Ouvre des sessions avec les memes parametres (injecte dans les coordinateurs)."""

    def __init__(
        self,
        max_operations: int = 50,
        page_cache: Optional[PageCache] = None,
        timeout: float = 30.0,
    ) -> None:
        self._max_operations = max_operations
        self._page_cache = page_cache
        self._timeout = timeout

    async def __call__(self) -> ScrapeSession:
        return await ScrapeSession.open(
            max_operations=self._max_operations,
            page_cache=self._page_cache,
            timeout=self._timeout,
        )
