"""
Coordinateur du scraping des films.

Toutes les sources configurees sont interrogees sequentiellement pour le
lot de codes (pas d'arret anticipe cote films), puis chaque code est
fusionne une seule fois selon la priorite par champ et persiste dans le
cache films.

Un code pour lequel aucune source n'a fourni de donnees est enregistre sous
forme de fiche minimale (code seul, sources vide) et compte en echec.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger

from src.config import ScrapeConfig
from src.core.entities.movie import MovieRecord, ScrapeEnvelope
from src.core.exceptions import ScrapingStoppedError
from src.core.ports.confirmation import IConfirmationChannel
from src.core.ports.repositories import IMovieCache
from src.core.ports.session import IFetchSession, SessionFactory
from src.core.ports.sources import IMovieSource
from src.core.value_objects.progress import ProgressCallback, ProgressKind, emit
from src.core.value_objects.source_result import SourceStatus
from src.services.field_merger import merge_movie_results
from src.services.library import find_video_file
from src.services.source_runner import SourceRunner
from src.utils.helpers import utc_now_iso


@dataclass
class MovieScrapeOutcome:
    """
    Issue du scraping d'un code.

    Attributs:
        code: Code du film
        sources: Sources ayant fourni des donnees
        saved: True si l'enveloppe a ete ecrite
    """

    code: str
    sources: list[str] = field(default_factory=list)
    saved: bool = False

    @property
    def scraped(self) -> bool:
        """Au moins une source a fourni des donnees et la fiche est ecrite."""
        return self.saved and bool(self.sources)


class ScrapeCoordinator:
    """Orchestration sources -> fusion -> cache pour un lot de codes."""

    def __init__(
        self,
        sources: Callable[[], list[IMovieSource]],
        movie_cache: IMovieCache,
        scrape_config: ScrapeConfig,
        runner: SourceRunner,
        confirmation: IConfirmationChannel,
        session_factory: SessionFactory,
    ) -> None:
        """
        Args:
            sources: Fournit les sources dans l'ordre global configure
            movie_cache: Cache des enveloppes {code}.json
            scrape_config: Priorites par champ et chemin de la bibliotheque
            runner: Execution des sources avec timeout
            confirmation: Canal interroge quand une source echoue
            session_factory: Ouvre la session partagee par les sources
        """
        self._sources = sources
        self._cache = movie_cache
        self._config = scrape_config
        self._runner = runner
        self._confirmation = confirmation
        self._session_factory = session_factory

    async def scrape(
        self,
        codes: list[str],
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> list[MovieScrapeOutcome]:
        """
        Scrape, fusionne et persiste un lot de codes.

        Args:
            codes: Codes a scraper
            session: Session existante (sinon une session est ouverte et fermee ici)
            on_progress: Callback de progression

        Returns:
            Une issue par code, dans l'ordre des codes

        Raises:
            ScrapingStoppedError: Si l'utilisateur refuse de continuer apres un echec
        """
        if not codes:
            return []

        sources = self._sources()
        if not sources:
            logger.error("Aucune source de films configuree")
            emit(on_progress, "Aucune source de films configuree", ProgressKind.SOURCE_ERROR)
            return [MovieScrapeOutcome(code=code) for code in codes]

        names = ", ".join(source.name for source in sources)
        logger.info(f"Scraping de {len(codes)} code(s) avec: {names}")
        emit(
            on_progress,
            f"Debut du scraping de {len(codes)} code(s)",
            ProgressKind.START,
            total=len(codes),
        )

        owns_session = session is None
        if session is None:
            session = await self._session_factory()
        try:
            results_by_code = await self._collect(sources, codes, session, on_progress)
        finally:
            if owns_session:
                await session.close()

        outcomes = [self._persist(code, results_by_code[code]) for code in codes]

        saved = sum(1 for outcome in outcomes if outcome.saved)
        emit(
            on_progress,
            f"Scraping termine: {saved} film(s) sauvegarde(s)",
            ProgressKind.COMPLETE,
            current=len(codes),
            total=len(codes),
        )
        return outcomes

    async def _collect(
        self,
        sources: list[IMovieSource],
        codes: list[str],
        session: IFetchSession,
        on_progress: Optional[ProgressCallback],
    ) -> dict[str, list[tuple[str, dict[str, Any]]]]:
        """Interroge les sources une a une et range les resultats par code."""
        by_code: dict[str, list[tuple[str, dict[str, Any]]]] = {code: [] for code in codes}
        lookup = {code.upper(): code for code in codes}

        for source in sources:
            emit(on_progress, f"Execution de {source.name}", source=source.name)
            result = await self._runner.run_movie(source, codes, session, on_progress)

            if result.status is SourceStatus.FAILED:
                reason = result.reason or "erreur inconnue"
                logger.warning(f"Source {source.name} en echec: {reason}")
                emit(
                    on_progress,
                    f"{source.name} en echec: {reason}",
                    ProgressKind.SOURCE_ERROR,
                    source=source.name,
                )
                should_continue = await self._confirmation.request_confirmation(
                    f"La source {source.name} a echoue ({reason}). Continuer ?"
                )
                if not should_continue:
                    raise ScrapingStoppedError(source.name, reason)
                continue

            if result.status is SourceStatus.NOT_FOUND:
                logger.info(f"Source {source.name}: aucun resultat")
                continue

            for item in result.data:
                raw_code = str(item.get("code") or item.get("dvd_id") or "")
                code = lookup.get(raw_code.upper())
                if code is None:
                    logger.debug(f"Source {source.name}: code inattendu ignore: {raw_code}")
                    continue
                item = dict(item)
                item.setdefault("code", raw_code)
                by_code[code].append((source.name, item))

        return by_code

    def _persist(
        self, code: str, results: list[tuple[str, dict[str, Any]]]
    ) -> MovieScrapeOutcome:
        """
        Fusionne les resultats d'un code et ecrit l'enveloppe.

        Sans aucune donnee, une fiche minimale n'est ecrite que si le code
        n'a pas deja une enveloppe en cache.
        """
        sources: list[str] = []
        for source_name, _ in results:
            if source_name not in sources:
                sources.append(source_name)
        if not sources:
            if self._cache.exists(code):
                logger.warning(f"{code}: aucune donnee, enveloppe existante conservee")
                return MovieScrapeOutcome(code=code)
            logger.warning(f"{code}: aucune source n'a fourni de donnees, fiche minimale")

        merged = merge_movie_results(code, results, self._config.field_priority)
        record = MovieRecord.from_dict(merged)
        now = utc_now_iso()
        record.meta["createdAt"] = record.meta.get("createdAt") or now
        record.meta["updatedAt"] = now

        library = Path(self._config.library_path).expanduser() if self._config.library_path else None
        envelope = ScrapeEnvelope(
            data=record,
            sources=sources,
            video_file=find_video_file(library, code),
            scraped_at=now,
        )
        saved = self._cache.save(envelope)
        return MovieScrapeOutcome(code=code, sources=sources, saved=saved)
