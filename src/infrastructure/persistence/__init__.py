"""
Module de persistance fichier de MediaScrape.

- movie_cache.py : JsonMovieCache, une enveloppe JSON par code
- actor_cache.py : NfoActorCache, une fiche NFO par ID, photos a cote
- name_index.py : JsonNameIndex, variantes de noms -> ID

Usage:
    index = JsonNameIndex(actors_dir)
    cache = NfoActorCache(actors_dir, index)
    index.ensure_consistent()
    actor = cache.load("hayami-remu")
"""

from src.infrastructure.persistence.actor_cache import NfoActorCache
from src.infrastructure.persistence.movie_cache import JsonMovieCache
from src.infrastructure.persistence.name_index import JsonNameIndex, index_key, index_keys

__all__ = [
    "JsonMovieCache",
    "JsonNameIndex",
    "NfoActorCache",
    "index_key",
    "index_keys",
]
