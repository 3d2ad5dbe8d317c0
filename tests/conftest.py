"""
Fixtures pytest partagees pour les tests MediaScrape.

Ce module contient les fixtures communes utilisees dans les tests:
- Repertoires temporaires des caches (acteurs, films, bibliotheque)
- Index des noms et caches reels sur tmp_path
- Configuration de scraping de test
- Settings de test avec chemins temporaires
"""

from pathlib import Path

import pytest

from src.config import ActorScrapersConfig, ScrapeConfig, ScrapersConfig, Settings
from src.core.entities.actor import ActorRecord
from src.infrastructure.persistence.actor_cache import NfoActorCache
from src.infrastructure.persistence.movie_cache import JsonMovieCache
from src.infrastructure.persistence.name_index import JsonNameIndex
from tests.fixtures.fakes import RecordingConfirmChannel, SessionRecorder


@pytest.fixture
def actors_dir(tmp_path: Path) -> Path:
    """Repertoire des fiches acteurs (cree)."""
    directory = tmp_path / "actors"
    directory.mkdir()
    return directory


@pytest.fixture
def library_dir(tmp_path: Path) -> Path:
    """Bibliotheque video vide (creee)."""
    directory = tmp_path / "library"
    directory.mkdir()
    return directory


@pytest.fixture
def name_index(actors_dir: Path) -> JsonNameIndex:
    return JsonNameIndex(actors_dir)


@pytest.fixture
def actor_cache(actors_dir: Path, name_index: JsonNameIndex) -> NfoActorCache:
    return NfoActorCache(actors_dir, name_index)


@pytest.fixture
def movie_cache(library_dir: Path) -> JsonMovieCache:
    return JsonMovieCache(library_dir / ".javinizer" / "scrape")


@pytest.fixture
def scrape_config(library_dir: Path) -> ScrapeConfig:
    """
    Configuration de scraping de test.

    Deux sources de films (alpha, beta) et deux sources d'acteurs (one, two).
    """
    return ScrapeConfig(
        library_path=str(library_dir),
        scrapers=ScrapersConfig(
            video=["alpha", "beta"],
            actors=ActorScrapersConfig(enabled=True, scrapers=["one", "two"]),
        ),
    )


@pytest.fixture
def session_recorder() -> SessionRecorder:
    return SessionRecorder()


@pytest.fixture
def confirm_yes() -> RecordingConfirmChannel:
    return RecordingConfirmChannel(answer=True)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Aucune pause entre les elements d'un batch.
    """
    return Settings(
        config_path=tmp_path / "config.json",
        data_dir=tmp_path / "data",
        scrapers_dir=tmp_path / "scrapers",
        http_cache_dir=tmp_path / "http-cache",
        log_file=tmp_path / "logs" / "test.log",
        item_delay_seconds=0,
    )


@pytest.fixture
def complete_actor() -> ActorRecord:
    """Fiche acteur complete (tous les champs obligatoires renseignes)."""
    return ActorRecord(
        id="hayami-remu",
        name="Hayami Remu",
        alt_name="早美れむ",
        birthdate="1998-01-01",
        height=165,
        bust=88,
        waist=58,
        hips=86,
        thumb_url="https://img.example.com/hayami-remu.jpg",
        thumb="https://img.example.com/hayami-remu.jpg",
    )
