"""
Pilotage des traitements par lot.

- Films : codes extraits de la bibliotheque, codes deja en cache ignores,
  lot soumis au ScrapeCoordinator, puis (si active) traitement des acteurs.
- Acteurs : noms references par les films en cache ; une fiche complete
  est simplement confirmee, sinon l'acteur passe par l'ActorCoordinator.
- Reconciliation : les ActorRef des films sont reecrites depuis les fiches
  acteurs a jour.

Un lot est une boucle stricte : un element est termine avant le suivant,
avec une pause entre deux scrapings pour limiter le debit de requetes.
"""

import asyncio
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

from src.config import ScrapeConfig
from src.core.entities.actor import ActorRecord, ActorRef
from src.core.exceptions import ConfigError, ScrapingStoppedError
from src.core.ports.repositories import IMovieCache
from src.core.ports.session import SessionFactory
from src.core.value_objects.progress import ProgressCallback, ProgressKind, emit
from src.services.actor_coordinator import ActorCoordinator
from src.services.field_merger import is_actor_complete, resolve_actor_thumb
from src.services.library import extract_codes_from_library
from src.services.movie_coordinator import ScrapeCoordinator


@dataclass
class BatchSummary:
    """Bilan d'un lot de scraping : {total, scraped, cached, failed}."""

    total: int = 0
    scraped: int = 0
    cached: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class UpdateSummary:
    """Bilan de la reconciliation des films : {total, updated, failed}."""

    total: int = 0
    updated: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class ActorProcessingSummary:
    """Scraping des acteurs suivi de la reconciliation des films."""

    scraping: BatchSummary = field(default_factory=BatchSummary)
    updating: UpdateSummary = field(default_factory=UpdateSummary)


@dataclass
class LibraryScrapeReport:
    """
    Bilan complet d'un scraping de bibliotheque.

    Attributs:
        movies: Bilan des films
        actors: Bilan des acteurs (None si desactive)
        actor_error: Message si le traitement des acteurs a echoue
    """

    movies: BatchSummary = field(default_factory=BatchSummary)
    actors: Optional[ActorProcessingSummary] = None
    actor_error: Optional[str] = None


# Champs recopies de la fiche acteur vers les films
_REF_FIELDS: tuple[str, ...] = ("alt_name", "birthdate", "height", "bust", "waist", "hips")


def apply_actor_to_ref(ref: ActorRef, actor: ActorRecord) -> bool:
    """
    Met a jour une ActorRef depuis la fiche canonique.

    Les valeurs vides de la fiche ne remplacent pas celles du film.

    Returns:
        True si la reference a change
    """
    changed = False
    for field_name in _REF_FIELDS:
        value = getattr(actor, field_name)
        if value and getattr(ref, field_name) != value:
            setattr(ref, field_name, value)
            changed = True
    thumb = resolve_actor_thumb(actor)
    if thumb and ref.thumb != thumb:
        ref.thumb = thumb
        changed = True
    return changed


class BatchDriver:
    """Traitements par lot des films et des acteurs."""

    def __init__(
        self,
        movie_coordinator: ScrapeCoordinator,
        actor_coordinator: ActorCoordinator,
        movie_cache: IMovieCache,
        scrape_config: ScrapeConfig,
        session_factory: SessionFactory,
        item_delay: float = 1.0,
    ) -> None:
        self._movies = movie_coordinator
        self._actors = actor_coordinator
        self._movie_cache = movie_cache
        self._config = scrape_config
        self._session_factory = session_factory
        self._item_delay = item_delay

    # ------------------------------------------------------------------
    # Films
    # ------------------------------------------------------------------

    def library_codes(self) -> list[str]:
        """
        Raises:
            ConfigError: Si aucune bibliotheque n'est configuree ou si elle est absente
        """
        if not self._config.library_path:
            raise ConfigError("Aucune bibliotheque configuree (libraryPath)")
        return extract_codes_from_library(Path(self._config.library_path).expanduser())

    async def scrape_movies(
        self,
        codes: list[str],
        force: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchSummary:
        """
        Scrape les codes qui n'ont pas encore de fichier en cache.

        Raises:
            ScrapingStoppedError: Si l'utilisateur arrete le scraping
        """
        summary = BatchSummary(total=len(codes))
        pending = [code for code in codes if force or not self._movie_cache.exists(code)]
        summary.cached = len(codes) - len(pending)
        if summary.cached:
            logger.info(f"{summary.cached} code(s) deja en cache ignore(s)")
            emit(on_progress, f"{summary.cached} code(s) deja scrape(s)")

        if not pending:
            return summary

        outcomes = await self._movies.scrape(pending, on_progress=on_progress)
        for outcome in outcomes:
            if outcome.scraped:
                summary.scraped += 1
            else:
                summary.failed += 1
        logger.info(f"Bilan films: {summary.to_dict()}")
        return summary

    async def scrape_library(
        self,
        force: bool = False,
        with_actors: Optional[bool] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> LibraryScrapeReport:
        """
        Scrape toute la bibliotheque puis, si active, traite les acteurs.

        Un echec du traitement des acteurs est rapporte, jamais propage.

        Raises:
            ConfigError: Si la bibliotheque est introuvable
            ScrapingStoppedError: Si l'utilisateur arrete le scraping des films
        """
        report = LibraryScrapeReport()
        report.movies = await self.scrape_movies(
            self.library_codes(), force=force, on_progress=on_progress
        )

        actors_enabled = (
            self._config.actor_scraping_enabled if with_actors is None else with_actors
        )
        if actors_enabled:
            emit(on_progress, "Debut du traitement des acteurs")
            try:
                report.actors = await self.process_actors(on_progress=on_progress)
            except ScrapingStoppedError:
                raise
            except Exception as e:
                logger.error(f"Traitement des acteurs en echec: {e}")
                report.actor_error = str(e)
        return report

    # ------------------------------------------------------------------
    # Acteurs
    # ------------------------------------------------------------------

    def collect_actor_names(self) -> list[str]:
        """Noms d'acteurs distincts references par les films en cache."""
        names: list[str] = []
        for envelope in self._movie_cache.iter_envelopes():
            for ref in envelope.data.actor:
                name = ref.name.strip()
                if name and name not in names:
                    names.append(name)
        return names

    async def scrape_actors(
        self,
        names: Optional[list[str]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchSummary:
        """
        Complete le cache acteurs pour chaque nom.

        Une fiche deja complete compte en cache ; une fiche incomplete est
        completee (les valeurs locales sont conservees).
        """
        if names is None:
            names = self.collect_actor_names()
        summary = BatchSummary(total=len(names))
        if not names:
            logger.info("Aucun acteur a traiter")
            return summary

        emit(on_progress, f"{len(names)} acteur(s) a traiter", ProgressKind.START, total=len(names))
        session = await self._session_factory()
        scraped_once = False
        try:
            for position, name in enumerate(names, start=1):
                emit(
                    on_progress,
                    f"Acteur {position}/{len(names)}: {name}",
                    current=position,
                    total=len(names),
                )

                cached = self._actors.find_cached(name)
                if cached is not None and is_actor_complete(cached):
                    summary.cached += 1
                    continue

                if scraped_once and self._item_delay > 0:
                    await asyncio.sleep(self._item_delay)
                scraped_once = True

                actor = await self._actors.scrape_actor(
                    name, baseline=cached, session=session, on_progress=on_progress
                )
                if actor is not None:
                    summary.scraped += 1
                elif cached is not None:
                    summary.cached += 1
                else:
                    summary.failed += 1
        finally:
            await session.close()

        logger.info(f"Bilan acteurs: {summary.to_dict()}")
        emit(
            on_progress,
            f"Acteurs: {summary.scraped} scrape(s), {summary.cached} en cache, {summary.failed} echec(s)",
            ProgressKind.COMPLETE,
            current=len(names),
            total=len(names),
        )
        return summary

    def reconcile_movie_actors(
        self, on_progress: Optional[ProgressCallback] = None
    ) -> UpdateSummary:
        """Reecrit les ActorRef de chaque film depuis les fiches acteurs."""
        summary = UpdateSummary()
        resolved: dict[str, Optional[ActorRecord]] = {}

        for code in self._movie_cache.list_codes():
            summary.total += 1
            envelope = self._movie_cache.load(code)
            if envelope is None:
                summary.failed += 1
                continue

            changed = False
            for ref in envelope.data.actor:
                if not ref.name:
                    continue
                if ref.name not in resolved:
                    resolved[ref.name] = self._actors.find_cached(ref.name)
                actor = resolved[ref.name]
                if actor is None:
                    logger.debug(f"{code}: acteur absent du cache: {ref.name}")
                    continue
                changed = apply_actor_to_ref(ref, actor) or changed

            if not changed:
                continue
            if self._movie_cache.save(envelope):
                summary.updated += 1
                emit(on_progress, f"Film mis a jour: {code}")
            else:
                summary.failed += 1

        logger.info(f"Reconciliation des films: {summary.to_dict()}")
        return summary

    async def process_actors(
        self, on_progress: Optional[ProgressCallback] = None
    ) -> ActorProcessingSummary:
        """Scraping des acteurs puis reconciliation des films."""
        scraping = await self.scrape_actors(on_progress=on_progress)
        updating = self.reconcile_movie_actors(on_progress=on_progress)
        return ActorProcessingSummary(scraping=scraping, updating=updating)
