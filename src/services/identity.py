"""
Strategies de resolution d'identite des acteurs.

Chaque strategie est une fonction pure (nom, index) -> ID candidat ou None.
Elles sont evaluees dans l'ordre par resolve_actor_id : le premier candidat
dont la fiche existe l'emporte. L'index ne fait que des recherches exactes,
l'inversion du nom est une strategie a part entiere.
"""

from typing import Callable, Iterable, Optional

from src.core.ports.repositories import INameIndex
from src.utils.slug import invert_name, normalize_actor_name

ResolutionStrategy = Callable[[str, INameIndex], Optional[str]]


def exact_name(name: str, index: INameIndex) -> Optional[str]:
    """ID enregistre dans l'index pour ce nom exact."""
    return index.resolve(name)


def inverted_name(name: str, index: INameIndex) -> Optional[str]:
    """ID enregistre dans l'index pour le nom inverse ("Mao Hamasaki" -> "Hamasaki Mao")."""
    inverted = invert_name(name)
    if inverted == name.strip():
        return None
    return index.resolve(inverted)


def normalized_slug(name: str, index: INameIndex) -> Optional[str]:
    """Slug derive du nom (cle de stockage par defaut)."""
    return normalize_actor_name(name) or None


def inverted_slug(name: str, index: INameIndex) -> Optional[str]:
    """Slug derive du nom inverse."""
    inverted = invert_name(name)
    if inverted == name.strip():
        return None
    return normalize_actor_name(inverted) or None


DEFAULT_STRATEGIES: tuple[ResolutionStrategy, ...] = (
    exact_name,
    inverted_name,
    normalized_slug,
    inverted_slug,
)


def candidate_ids(
    name: str,
    index: INameIndex,
    strategies: Iterable[ResolutionStrategy] = DEFAULT_STRATEGIES,
) -> list[str]:
    """IDs candidats dans l'ordre des strategies, sans doublon."""
    candidates: list[str] = []
    for strategy in strategies:
        candidate = strategy(name, index)
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates


def resolve_actor_id(
    name: str,
    index: INameIndex,
    record_exists: Callable[[str], bool],
    strategies: Iterable[ResolutionStrategy] = DEFAULT_STRATEGIES,
) -> Optional[str]:
    """
    Premier ID candidat dont la fiche existe.

    Returns:
        ID d'une fiche existante, ou None si l'acteur est inconnu
    """
    for candidate in candidate_ids(name, index, strategies):
        if record_exists(candidate):
            return candidate
    return None
