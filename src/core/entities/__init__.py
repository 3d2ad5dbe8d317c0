"""
Entites du domaine.

Exports :
- ActorRecord, ActorMeta : Fiche canonique d'un acteur et sa provenance
- ActorRef : Vue d'un acteur embarquee dans un film
- MovieRecord : Metadonnees fusionnees d'un film
- ScrapeEnvelope : Film persiste avec ses sources et son fichier video
"""

from src.core.entities.actor import ActorMeta, ActorRecord, ActorRef
from src.core.entities.movie import MovieRecord, ScrapeEnvelope

__all__ = [
    "ActorMeta",
    "ActorRecord",
    "ActorRef",
    "MovieRecord",
    "ScrapeEnvelope",
]
