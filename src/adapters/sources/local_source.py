"""
Source d'acteurs "local" : relit le cache des fiches.

Placee en tete de la liste des sources, elle donne la priorite aux
donnees deja en cache ; retiree de la liste, elle force un nouveau
scraping distant.
"""

from typing import Optional

from loguru import logger

from src.core.ports.repositories import IActorCache, INameIndex
from src.core.ports.session import IFetchSession
from src.core.ports.sources import IActorSource
from src.core.value_objects.progress import ProgressCallback
from src.core.value_objects.source_result import SourceResult
from src.services.field_merger import remove_empty_fields
from src.services.identity import resolve_actor_id
from src.utils.constants import LOCAL_THUMB_PREFIX


class LocalActorSource(IActorSource):
    """Lecture du cache acteurs (nom exact, nom inverse, puis slug)."""

    NAME = "local"

    def __init__(self, actor_cache: IActorCache, name_index: INameIndex) -> None:
        self._cache = actor_cache
        self._index = name_index

    @property
    def name(self) -> str:
        return self.NAME

    async def scrape(
        self,
        actor_name: str,
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        actor_id = resolve_actor_id(actor_name, self._index, self._cache.exists)
        if actor_id is None:
            return SourceResult.not_found()

        actor = self._cache.load(actor_id)
        if actor is None:
            return SourceResult.not_found()

        logger.debug(f"[local] {actor_name} trouve en cache: {actor_id}")
        if actor.thumb_local:
            actor.thumb = f"{LOCAL_THUMB_PREFIX}{actor.thumb_local}"

        data = actor.to_dict()
        data.pop("meta", None)
        return SourceResult.found(remove_empty_fields(data))
