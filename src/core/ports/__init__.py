"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports de persistance :
- INameIndex : Index variante de nom -> ID canonique
- IActorCache : Fiches acteurs (une par ID)
- IMovieCache : Enveloppes de films (une par code)

Ports de scraping :
- IMovieSource / IActorSource : Sources interrogees par les coordinateurs
- IFetchSession : Session partagee par les sources d'un coordinateur
- IConfirmationChannel : Question oui/non posee a l'utilisateur
"""

from src.core.ports.confirmation import IConfirmationChannel
from src.core.ports.repositories import (
    IActorCache,
    IMovieCache,
    INameIndex,
    RebuildStats,
)
from src.core.ports.session import IFetchSession, SessionFactory
from src.core.ports.sources import IActorSource, IMovieSource

__all__ = [
    # Persistance
    "IActorCache",
    "IMovieCache",
    "INameIndex",
    "RebuildStats",
    # Scraping
    "IActorSource",
    "IMovieSource",
    "IFetchSession",
    "SessionFactory",
    "IConfirmationChannel",
]
