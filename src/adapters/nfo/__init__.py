"""
Codec NFO (XML Kodi) des fiches acteurs.
"""

from src.adapters.nfo.actor_nfo import actor_to_nfo, nfo_to_actor

__all__ = ["actor_to_nfo", "nfo_to_actor"]
