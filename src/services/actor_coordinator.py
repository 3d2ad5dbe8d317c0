"""
Coordinateur du scraping des acteurs.

Les sources sont interrogees dans l'ordre configure ; apres chaque reponse
la fusion est recalculee et le scraping s'arrete des que la fiche est
complete. Sans aucune donnee, rien n'est ecrit.

Le coordinateur porte aussi les operations utilisateur sur les fiches :
lecture avec completion automatique, sauvegarde explicite, suppression.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from src.core.entities.actor import ActorRecord
from src.core.ports.repositories import IActorCache, INameIndex
from src.core.ports.session import IFetchSession, SessionFactory
from src.core.ports.sources import IActorSource
from src.core.value_objects.progress import ProgressCallback, ProgressKind, emit
from src.core.value_objects.source_result import SourceResult, SourceStatus
from src.services.field_merger import (
    is_actor_complete,
    merge_actor_results,
    merge_local_with_scraped,
    resolve_actor_thumb,
)
from src.services.identity import resolve_actor_id
from src.services.source_runner import SourceRunner
from src.utils.slug import invert_name, normalize_actor_name


@dataclass
class ActorLookup:
    """
    Resultat d'une lecture de fiche.

    Attributs:
        actor: Fiche trouvee ou scrapee (None si inconnue partout)
        from_cache: True si la fiche provient du cache sans nouveau scraping
    """

    actor: Optional[ActorRecord]
    from_cache: bool = False


class ActorCoordinator:
    """Orchestration sources -> fusion -> cache pour un acteur."""

    def __init__(
        self,
        sources: Callable[[], list[IActorSource]],
        actor_cache: IActorCache,
        name_index: INameIndex,
        priority: list[str],
        runner: SourceRunner,
        session_factory: SessionFactory,
    ) -> None:
        self._sources = sources
        self._cache = actor_cache
        self._index = name_index
        self._priority = priority
        self._runner = runner
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Resolution et lecture
    # ------------------------------------------------------------------

    def resolve_id(self, name: str) -> Optional[str]:
        """ID de la fiche existante correspondant au nom (strategies dans l'ordre)."""
        return resolve_actor_id(name, self._index, self._cache.exists)

    def find_cached(self, name: str) -> Optional[ActorRecord]:
        actor_id = self.resolve_id(name)
        if actor_id is None:
            return None
        return self._cache.load(actor_id)

    async def get_actor(
        self,
        name: str,
        force: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ActorLookup:
        """
        Fiche d'un acteur, en scrapant si elle est absente ou incomplete.

        Une fiche incomplete est completee sans perdre les valeurs locales
        (la fiche locale l'emporte champ par champ).
        """
        cached = self.find_cached(name)
        if cached is not None and is_actor_complete(cached) and not force:
            return ActorLookup(actor=cached, from_cache=True)

        scraped = await self.scrape_actor(name, baseline=cached, on_progress=on_progress)
        if scraped is not None:
            return ActorLookup(actor=scraped)
        return ActorLookup(actor=cached, from_cache=cached is not None)

    # ------------------------------------------------------------------
    # Scraping
    # ------------------------------------------------------------------

    async def scrape_actor(
        self,
        name: str,
        baseline: Optional[ActorRecord] = None,
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Optional[ActorRecord]:
        """
        Scrape un acteur et persiste la fiche.

        Args:
            name: Nom de l'acteur tel qu'il apparait dans les films
            baseline: Fiche existante a completer (priorite locale)
            session: Session existante (sinon ouverte et fermee ici)
            on_progress: Callback de progression

        Returns:
            Fiche sauvegardee, ou None si aucune source n'a fourni de donnees
            ou si l'ecriture a echoue
        """
        sources = self._sources()
        if not sources:
            logger.warning("Aucune source d'acteurs configuree")
            return None

        priority = list(self._priority) or [source.name for source in sources]
        results: list[tuple[str, ActorRecord]] = []
        merged: Optional[ActorRecord] = None

        owns_session = session is None
        if session is None:
            session = await self._session_factory()
        try:
            for source in sources:
                result = await self._query(source, name, session, on_progress)
                if not result.ok:
                    continue

                results.append((source.name, ActorRecord.from_dict(result.data)))
                merged = merge_actor_results(name, results, priority)

                candidate = self._finalize(merged, baseline)
                if is_actor_complete(candidate):
                    logger.info(f"{name}: fiche complete apres {source.name}, arret")
                    break
        finally:
            if owns_session:
                await session.close()

        if merged is None:
            logger.info(f"{name}: aucune donnee trouvee, rien n'est ecrit")
            emit(on_progress, f"{name}: aucune donnee", ProgressKind.SOURCE_ERROR)
            return None

        final = self._finalize(merged, baseline)
        if not self._cache.save(final):
            return None
        emit(on_progress, f"{name}: fiche sauvegardee ({final.id})")
        return final

    def _finalize(self, merged: ActorRecord, baseline: Optional[ActorRecord]) -> ActorRecord:
        """Applique la priorite locale et resout le thumb (sans ecrire)."""
        if baseline is not None:
            final = merge_local_with_scraped(baseline, merged)
            final.id = baseline.id or merged.id
        else:
            final = merged.copy()
        final.thumb = resolve_actor_thumb(final)
        return final

    async def _query(
        self,
        source: IActorSource,
        name: str,
        session: IFetchSession,
        on_progress: Optional[ProgressCallback],
    ) -> SourceResult:
        """Interroge une source, puis avec le nom inverse si elle ne trouve rien."""
        emit(on_progress, f"{name}: interrogation de {source.name}", source=source.name)
        result = await self._runner.run_actor(source, name, session, on_progress)
        if result.status is SourceStatus.NOT_FOUND:
            inverted = invert_name(name)
            if inverted != name.strip():
                logger.debug(f"{source.name}: nouvel essai avec le nom inverse {inverted}")
                result = await self._runner.run_actor(source, inverted, session, on_progress)

        if result.status is SourceStatus.FAILED:
            emit(
                on_progress,
                f"{source.name} en echec pour {name}: {result.reason}",
                ProgressKind.SOURCE_ERROR,
                source=source.name,
            )
        return result

    # ------------------------------------------------------------------
    # Operations utilisateur
    # ------------------------------------------------------------------

    def save_actor(self, actor: ActorRecord) -> bool:
        """
        Sauvegarde explicite d'une fiche editee.

        Sans ID, la fiche reprend celle d'un acteur deja connu sous ce nom,
        sinon le slug du nom.
        """
        if not actor.id:
            actor.id = self.resolve_id(actor.name) or normalize_actor_name(actor.name)
        return self._cache.save(actor)

    def delete_actor(self, actor_id: str) -> bool:
        """Supprime la fiche, ses photos et ses entrees d'index."""
        return self._cache.delete(actor_id)

    def list_actors(self) -> list[ActorRecord]:
        return self._cache.list_all()
