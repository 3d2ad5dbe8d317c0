"""
Construction des sources par nom, pour chaque type d'entite.

Resolution d'un nom de source :
- "local" (acteurs) : LocalActorSource
- entree httpSources : source HTTP JSON
- entree sourceCommands : processus enfant avec la commande configuree
- sinon : processus enfant {scrapers_dir}/{movies|actors}/{nom}/run.py
"""

from pathlib import Path
from typing import Optional

from src.adapters.sources.http_source import HttpJsonActorSource, HttpJsonMovieSource
from src.adapters.sources.local_source import LocalActorSource
from src.adapters.sources.subprocess_source import (
    SubprocessActorSource,
    SubprocessMovieSource,
    default_command,
)
from src.config import ScrapeConfig
from src.core.ports.confirmation import IConfirmationChannel
from src.core.ports.repositories import IActorCache, INameIndex
from src.core.ports.sources import IActorSource, IMovieSource


class SourceRegistry:
    """Fabrique et memorise les sources configurees."""

    def __init__(
        self,
        scrape_config: ScrapeConfig,
        scrapers_dir: Path,
        actor_cache: IActorCache,
        name_index: INameIndex,
        confirmation: Optional[IConfirmationChannel] = None,
    ) -> None:
        self._config = scrape_config
        self._scrapers_dir = scrapers_dir
        self._actor_cache = actor_cache
        self._name_index = name_index
        self._confirmation = confirmation
        self._movie_sources: dict[str, IMovieSource] = {}
        self._actor_sources: dict[str, IActorSource] = {}

    def _command_for(self, kind: str, name: str) -> list[str]:
        configured = self._config.source_commands.get(name)
        if configured:
            return list(configured)
        return default_command(self._scrapers_dir, kind, name)

    def movie_source(self, name: str) -> IMovieSource:
        if name not in self._movie_sources:
            template = self._config.http_sources.get(name)
            if template:
                source: IMovieSource = HttpJsonMovieSource(name, template)
            else:
                source = SubprocessMovieSource(
                    name, self._command_for("movies", name), confirmation=self._confirmation
                )
            self._movie_sources[name] = source
        return self._movie_sources[name]

    def actor_source(self, name: str) -> IActorSource:
        if name not in self._actor_sources:
            template = self._config.http_sources.get(name)
            if name == LocalActorSource.NAME:
                source: IActorSource = LocalActorSource(self._actor_cache, self._name_index)
            elif template:
                source = HttpJsonActorSource(name, template)
            else:
                source = SubprocessActorSource(name, self._command_for("actors", name))
            self._actor_sources[name] = source
        return self._actor_sources[name]

    def movie_sources(self) -> list[IMovieSource]:
        """Sources de films dans l'ordre global configure."""
        return [self.movie_source(name) for name in self._config.video_scrapers]

    def actor_sources(self) -> list[IActorSource]:
        """Sources d'acteurs dans l'ordre configure."""
        return [self.actor_source(name) for name in self._config.actor_scrapers]
