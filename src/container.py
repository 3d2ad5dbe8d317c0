"""
Container d'injection de dependances via dependency-injector.

Relie la configuration, les caches, l'index des noms, les sources et les
coordinateurs. La configuration de scraping (config.json) est chargee une
seule fois par container.
"""

from pathlib import Path

from dependency_injector import containers, providers

from .adapters.confirmation import AutoConfirmChannel
from .adapters.http.cache import PageCache
from .adapters.http.session import ScrapeSessionFactory
from .adapters.sources.registry import SourceRegistry
from .config import ScrapeConfig, Settings, load_scrape_config
from .infrastructure.persistence.actor_cache import NfoActorCache
from .infrastructure.persistence.movie_cache import JsonMovieCache
from .infrastructure.persistence.name_index import JsonNameIndex
from .services.actor_coordinator import ActorCoordinator
from .services.batch import BatchDriver
from .services.movie_coordinator import ScrapeCoordinator
from .services.source_runner import SourceRunner


def _actors_dir(scrape_config: ScrapeConfig, settings: Settings) -> Path:
    return scrape_config.actor_cache_dir(settings.data_dir)


def _movies_dir(scrape_config: ScrapeConfig, settings: Settings) -> Path:
    return scrape_config.movie_cache_dir(settings.data_dir)


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.name_index().ensure_consistent()
        driver = container.batch_driver()

    Le canal de confirmation peut etre remplace pour le mode interactif :
        container.confirmation.override(providers.Singleton(ConsoleConfirmChannel))
    """

    # Configuration
    config = providers.Singleton(Settings)
    scrape_config = providers.Singleton(load_scrape_config, path=config.provided.config_path)

    actors_dir = providers.Callable(_actors_dir, scrape_config, config)
    movies_dir = providers.Callable(_movies_dir, scrape_config, config)

    # Persistance
    name_index = providers.Singleton(JsonNameIndex, actors_dir=actors_dir)
    actor_cache = providers.Singleton(
        NfoActorCache,
        actors_dir=actors_dir,
        name_index=name_index,
    )
    movie_cache = providers.Singleton(JsonMovieCache, cache_dir=movies_dir)

    # HTTP
    page_cache = providers.Singleton(PageCache, cache_dir=config.provided.http_cache_dir)
    session_factory = providers.Singleton(
        ScrapeSessionFactory,
        max_operations=config.provided.session_max_operations,
        page_cache=page_cache,
    )

    # Sources
    confirmation = providers.Singleton(AutoConfirmChannel, answer=True)
    source_registry = providers.Singleton(
        SourceRegistry,
        scrape_config=scrape_config,
        scrapers_dir=config.provided.scrapers_dir,
        actor_cache=actor_cache,
        name_index=name_index,
        confirmation=confirmation,
    )
    source_runner = providers.Singleton(
        SourceRunner,
        actor_timeout=config.provided.actor_timeout_seconds,
        movie_timeout=config.provided.movie_timeout_seconds,
    )

    # Services
    movie_coordinator = providers.Factory(
        ScrapeCoordinator,
        sources=source_registry.provided.movie_sources,
        movie_cache=movie_cache,
        scrape_config=scrape_config,
        runner=source_runner,
        confirmation=confirmation,
        session_factory=session_factory,
    )
    actor_coordinator = providers.Factory(
        ActorCoordinator,
        sources=source_registry.provided.actor_sources,
        actor_cache=actor_cache,
        name_index=name_index,
        priority=scrape_config.provided.actor_scrapers,
        runner=source_runner,
        session_factory=session_factory,
    )
    batch_driver = providers.Factory(
        BatchDriver,
        movie_coordinator=movie_coordinator,
        actor_coordinator=actor_coordinator,
        movie_cache=movie_cache,
        scrape_config=scrape_config,
        session_factory=session_factory,
        item_delay=config.provided.item_delay_seconds,
    )
