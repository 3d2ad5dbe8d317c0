"""
Interfaces ports pour les sources de metadonnees.

Une source est un collaborateur externe (scraper de site) vu comme une boite
noire : pour un ou plusieurs identifiants, elle renvoie un SourceResult.
Les diagnostics lisibles passent par le logger et le callback de
progression, jamais par le resultat.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.ports.session import IFetchSession
from src.core.value_objects.progress import ProgressCallback
from src.core.value_objects.source_result import SourceResult


class IMovieSource(ABC):
    """
    Source de metadonnees de films.

    SourceResult.data est une liste d'enregistrements partiels, chacun
    portant le code (ou dvd_id) qui l'identifie.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Nom de la source tel qu'il apparait dans la configuration."""
        ...

    @abstractmethod
    async def scrape(
        self,
        codes: list[str],
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        """Scrape un lot de codes."""
        ...


class IActorSource(ABC):
    """
    Source de metadonnees d'acteurs.

    SourceResult.data est un enregistrement partiel (dict camelCase).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Nom de la source tel qu'il apparait dans la configuration."""
        ...

    @abstractmethod
    async def scrape(
        self,
        actor_name: str,
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        """Scrape un acteur par son nom (nom exact, sans inversion)."""
        ...
