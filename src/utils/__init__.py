"""
Utilitaires et constantes pour MediaScrape.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from src.utils.constants import (
    ACTOR_REQUIRED_FIELDS,
    INDEX_FILENAME,
    LOCAL_THUMB_PREFIX,
    VIDEO_EXTENSIONS,
)
from src.utils.slug import invert_name, normalize_actor_name

__all__ = [
    "ACTOR_REQUIRED_FIELDS",
    "INDEX_FILENAME",
    "LOCAL_THUMB_PREFIX",
    "VIDEO_EXTENSIONS",
    "invert_name",
    "normalize_actor_name",
]
