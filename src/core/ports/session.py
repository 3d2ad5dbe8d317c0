"""
Interface port de la session de scraping.

La session remplace l'etat global "navigateur courant" : elle est ouverte et
fermee par le coordinateur, et compte explicitement ses operations.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from src.core.value_objects.fetch import FetchResult


class IFetchSession(ABC):
    """Session partagee entre les sources d'un meme coordinateur."""

    @property
    @abstractmethod
    def operation_count(self) -> int:
        """Nombre de requetes emises depuis l'ouverture."""
        ...

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult:
        """Recupere une URL. Ne leve pas : le statut est dans le resultat."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libere les ressources de la session."""
        ...


# Ouvre une nouvelle session (appele par le proprietaire, qui la ferme)
SessionFactory = Callable[[], Awaitable[IFetchSession]]
