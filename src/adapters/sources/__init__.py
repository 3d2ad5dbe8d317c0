"""
Adaptateurs des sources de metadonnees (processus enfant, HTTP, cache local).
"""

from src.adapters.sources.http_source import HttpJsonActorSource, HttpJsonMovieSource
from src.adapters.sources.local_source import LocalActorSource
from src.adapters.sources.registry import SourceRegistry
from src.adapters.sources.subprocess_source import (
    SubprocessActorSource,
    SubprocessMovieSource,
)

__all__ = [
    "HttpJsonActorSource",
    "HttpJsonMovieSource",
    "LocalActorSource",
    "SourceRegistry",
    "SubprocessActorSource",
    "SubprocessMovieSource",
]
