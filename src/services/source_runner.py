"""
Execution d'une source avec timeout.

Une source qui leve une exception, depasse son temps ou renvoie autre chose
qu'un SourceResult est convertie en FAILED : l'erreur reste contenue a la
frontiere du coordinateur.
"""

import asyncio
from typing import Awaitable, Optional

from loguru import logger

from src.core.exceptions import ScrapingStoppedError
from src.core.ports.session import IFetchSession
from src.core.ports.sources import IActorSource, IMovieSource
from src.core.value_objects.progress import ProgressCallback
from src.core.value_objects.source_result import SourceResult


class SourceRunner:
    """
    Lance les sources et normalise leur issue.

    Le timeout des acteurs est toujours applique (course entre l'appel et
    un minuteur) ; celui des films est optionnel.
    """

    def __init__(
        self,
        actor_timeout: float = 10.0,
        movie_timeout: Optional[float] = None,
    ) -> None:
        self._actor_timeout = actor_timeout
        self._movie_timeout = movie_timeout

    async def run_movie(
        self,
        source: IMovieSource,
        codes: list[str],
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        return await self._run(
            source.name,
            source.scrape(codes, session=session, on_progress=on_progress),
            self._movie_timeout,
        )

    async def run_actor(
        self,
        source: IActorSource,
        actor_name: str,
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        return await self._run(
            source.name,
            source.scrape(actor_name, session=session, on_progress=on_progress),
            self._actor_timeout,
        )

    async def _run(
        self,
        name: str,
        call: Awaitable[SourceResult],
        timeout: Optional[float],
    ) -> SourceResult:
        try:
            if timeout:
                result = await asyncio.wait_for(call, timeout=timeout)
            else:
                result = await call
        except asyncio.TimeoutError:
            logger.warning(f"La source {name} n'a pas repondu en {timeout:g}s")
            return SourceResult.failed(f"timeout apres {timeout:g}s")
        except ScrapingStoppedError:
            raise
        except Exception as e:
            logger.warning(f"La source {name} a echoue: {type(e).__name__}: {e}")
            return SourceResult.failed(f"{type(e).__name__}: {e}")

        if not isinstance(result, SourceResult):
            logger.warning(f"La source {name} a renvoye un resultat invalide: {type(result).__name__}")
            return SourceResult.failed("resultat invalide")
        return result
