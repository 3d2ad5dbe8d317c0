"""
Interfaces ports pour les caches persistants.

Les implementations concretes stockent un fichier par entite (JSON pour les
films, NFO pour les acteurs) et un index JSON des variantes de noms.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from src.core.entities.actor import ActorRecord
from src.core.entities.movie import ScrapeEnvelope


@dataclass
class RebuildStats:
    """Statistiques d'une reconstruction d'index.

    Attributs:
        processed: Fiches lues avec succes
        failed: Fiches illisibles
        total_entries: Nombre de cles dans le nouvel index
        unique_actors: Nombre d'IDs distincts references
    """

    processed: int = 0
    failed: int = 0
    total_entries: int = 0
    unique_actors: int = 0


class INameIndex(ABC):
    """
    Index persistant variante de nom (minuscules) -> ID canonique.

    C'est l'autorite pour savoir si une entite est deja connue.
    """

    @abstractmethod
    def resolve(self, name: str) -> Optional[str]:
        """Recherche exacte, insensible a la casse et aux espaces de bord."""
        ...

    @abstractmethod
    def register(self, actor: ActorRecord) -> list[str]:
        """Enregistre toutes les variantes de nom. Retourne les cles en conflit."""
        ...

    @abstractmethod
    def remove(self, actor_id: str) -> bool:
        """Supprime toutes les entrees pointant vers actor_id."""
        ...

    @abstractmethod
    def rebuild(self) -> RebuildStats:
        """Recalcule l'index depuis le stockage des fiches."""
        ...


class IActorCache(ABC):
    """Stockage d'une fiche par slug d'acteur."""

    @abstractmethod
    def load(self, actor_id: str) -> Optional[ActorRecord]:
        ...

    @abstractmethod
    def exists(self, actor_id: str) -> bool:
        ...

    @abstractmethod
    def save(self, actor: ActorRecord) -> bool:
        """Persiste la fiche et indexe ses variantes. Retourne False en cas d'echec."""
        ...

    @abstractmethod
    def delete(self, actor_id: str) -> bool:
        ...

    @abstractmethod
    def list_all(self) -> list[ActorRecord]:
        ...


class IMovieCache(ABC):
    """Stockage d'une enveloppe {code}.json par film."""

    @abstractmethod
    def list_codes(self) -> list[str]:
        """Codes presents dans le cache, tries."""
        ...

    @abstractmethod
    def exists(self, code: str) -> bool:
        ...

    @abstractmethod
    def load(self, code: str) -> Optional[ScrapeEnvelope]:
        ...

    @abstractmethod
    def save(self, envelope: ScrapeEnvelope) -> bool:
        ...

    @abstractmethod
    def delete(self, code: str) -> bool:
        ...

    @abstractmethod
    def iter_envelopes(self) -> Iterator[ScrapeEnvelope]:
        """Parcourt les enveloppes lisibles (les fichiers corrompus sont ignores)."""
        ...
