"""
Sources HTTP en processus : un document JSON par requete.

L'URL est construite depuis un modele configure (httpSources) :
- acteurs : {name} (nom encode) et {slug}
- films : {code}

Les requetes passent par la session du coordinateur (quota d'operations,
cache de pages, relance sur 429).
"""

from typing import Optional
from urllib.parse import quote

from loguru import logger

from src.adapters.sources.payload import actor_result, decode_json, movie_items
from src.core.ports.session import IFetchSession
from src.core.ports.sources import IActorSource, IMovieSource
from src.core.value_objects.fetch import FetchResult, FetchStatus
from src.core.value_objects.progress import ProgressCallback, emit
from src.core.value_objects.source_result import SourceResult
from src.utils.slug import normalize_actor_name


def _fetch_failure(result: FetchResult) -> Optional[SourceResult]:
    """Traduit un fetch en echec ; None si la reponse est exploitable."""
    if result.status is FetchStatus.LIMIT_EXCEEDED:
        return SourceResult.failed("limite de session atteinte")
    if result.status is FetchStatus.ERROR:
        if result.status_code == 404:
            return SourceResult.not_found()
        return SourceResult.failed(result.error or "erreur HTTP")
    return None


class HttpJsonActorSource(IActorSource):
    """Source d'acteurs interrogeant une API JSON."""

    def __init__(self, name: str, url_template: str) -> None:
        self._name = name
        self._url_template = url_template

    @property
    def name(self) -> str:
        return self._name

    def url_for(self, actor_name: str) -> str:
        return self._url_template.format(
            name=quote(actor_name.strip()),
            slug=normalize_actor_name(actor_name),
        )

    async def scrape(
        self,
        actor_name: str,
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        if session is None:
            return SourceResult.failed("aucune session ouverte")

        url = self.url_for(actor_name)
        emit(on_progress, f"Requete {url}", source=self.name)
        result = await session.fetch(url)
        failure = _fetch_failure(result)
        if failure is not None:
            return failure

        decoded, payload = decode_json(result.text)
        if not decoded:
            return SourceResult.failed("reponse JSON invalide")
        return actor_result(payload)


class HttpJsonMovieSource(IMovieSource):
    """Source de films interrogeant une API JSON, un code par requete."""

    def __init__(self, name: str, url_template: str) -> None:
        self._name = name
        self._url_template = url_template

    @property
    def name(self) -> str:
        return self._name

    def url_for(self, code: str) -> str:
        return self._url_template.format(code=quote(code))

    async def scrape(
        self,
        codes: list[str],
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        if session is None:
            return SourceResult.failed("aucune session ouverte")

        items: list[dict] = []
        failures: list[str] = []
        for code in codes:
            url = self.url_for(code)
            emit(on_progress, f"Requete {url}", source=self.name)
            result = await session.fetch(url)
            failure = _fetch_failure(result)
            if failure is not None:
                if failure.reason:
                    logger.debug(f"[{self.name}] {code}: {failure.reason}")
                    failures.append(f"{code}: {failure.reason}")
                continue

            decoded, payload = decode_json(result.text)
            if not decoded:
                failures.append(f"{code}: reponse JSON invalide")
                continue
            # Le code demande fait foi si la reponse ne le porte pas
            if isinstance(payload, dict) and not (payload.get("code") or payload.get("dvd_id")):
                payload = {**payload, "code": code}
            items.extend(movie_items(payload))

        if items:
            return SourceResult.found(items)
        if failures:
            return SourceResult.failed("; ".join(failures))
        return SourceResult.not_found()
