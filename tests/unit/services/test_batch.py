"""
Tests unitaires du BatchDriver.

Les coordinateurs sont reels, branches sur des sources scriptees et des
caches sur tmp_path.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.core.entities.actor import ActorRecord, ActorRef
from src.core.entities.movie import MovieRecord, ScrapeEnvelope
from src.core.exceptions import ConfigError
from src.core.value_objects.source_result import SourceResult
from src.services.actor_coordinator import ActorCoordinator
from src.services.batch import BatchDriver, apply_actor_to_ref
from src.services.movie_coordinator import ScrapeCoordinator
from src.services.source_runner import SourceRunner
from tests.fixtures.fakes import FakeActorSource, FakeMovieSource


def _movies_from(codes: list[str]) -> SourceResult:
    return SourceResult.found([
        {"code": code, "title": f"Titre {code}", "actor": [{"name": "Hayami Remu"}]}
        for code in codes
    ])


@pytest.fixture
def alpha() -> FakeMovieSource:
    return FakeMovieSource("alpha", _movies_from)


@pytest.fixture
def one() -> FakeActorSource:
    return FakeActorSource(
        "one",
        lambda name: SourceResult.found({"name": name, "height": 160})
        if name == "Hayami Remu" else SourceResult.not_found(),
    )


@pytest.fixture
def actor_coordinator(one, actor_cache, name_index, session_recorder) -> ActorCoordinator:
    return ActorCoordinator(
        sources=lambda: [one],
        actor_cache=actor_cache,
        name_index=name_index,
        priority=["one"],
        runner=SourceRunner(),
        session_factory=session_recorder,
    )


@pytest.fixture
def driver(
    alpha, actor_coordinator, movie_cache, scrape_config, confirm_yes, session_recorder
) -> BatchDriver:
    movie_coordinator = ScrapeCoordinator(
        sources=lambda: [alpha],
        movie_cache=movie_cache,
        scrape_config=scrape_config,
        runner=SourceRunner(),
        confirmation=confirm_yes,
        session_factory=session_recorder,
    )
    return BatchDriver(
        movie_coordinator=movie_coordinator,
        actor_coordinator=actor_coordinator,
        movie_cache=movie_cache,
        scrape_config=scrape_config,
        session_factory=session_recorder,
        item_delay=0,
    )


def _cache_movie(movie_cache, code: str, *actor_names: str) -> None:
    record = MovieRecord(code=code, title=code, actor=[ActorRef(name=n) for n in actor_names])
    movie_cache.save(ScrapeEnvelope(data=record, sources=["alpha"]))


class TestScrapeMovies:
    """Tests pour BatchDriver.scrape_movies et scrape_library."""

    @pytest.mark.asyncio
    async def test_cached_codes_are_skipped(self, driver, alpha, movie_cache) -> None:
        _cache_movie(movie_cache, "ABC-001")

        summary = await driver.scrape_movies(["ABC-001", "ABC-002", "ABC-003"])

        assert alpha.calls == [["ABC-002", "ABC-003"]]
        assert summary.to_dict() == {"total": 3, "scraped": 2, "cached": 1, "failed": 0}

    @pytest.mark.asyncio
    async def test_force_rescrapes_everything(self, driver, alpha, movie_cache) -> None:
        _cache_movie(movie_cache, "ABC-001")

        summary = await driver.scrape_movies(["ABC-001"], force=True)

        assert alpha.calls == [["ABC-001"]]
        assert summary.scraped == 1

    @pytest.mark.asyncio
    async def test_force_without_data_keeps_cached_envelope(
        self, driver, alpha, movie_cache
    ) -> None:
        record = MovieRecord(code="ABC-001", title="Bon titre", genres=["Drama"])
        movie_cache.save(ScrapeEnvelope(data=record, sources=["alpha"]))
        alpha._behavior = SourceResult.failed("site indisponible")

        summary = await driver.scrape_movies(["ABC-001"], force=True)

        kept = movie_cache.load("ABC-001")
        assert kept.data.title == "Bon titre"
        assert kept.data.genres == ["Drama"]
        assert kept.sources == ["alpha"]
        assert summary.to_dict() == {"total": 1, "scraped": 0, "cached": 0, "failed": 1}

    @pytest.mark.asyncio
    async def test_library_without_actors(self, driver, alpha, library_dir: Path) -> None:
        (library_dir / "ABC-001 titre.mp4").write_bytes(b"")
        (library_dir / "ABC-002.mkv").write_bytes(b"")

        report = await driver.scrape_library(with_actors=False)

        assert alpha.calls == [["ABC-001", "ABC-002"]]
        assert report.movies.scraped == 2
        assert report.actors is None

    @pytest.mark.asyncio
    async def test_library_with_actors(self, driver, one, movie_cache, library_dir: Path) -> None:
        (library_dir / "ABC-001.mp4").write_bytes(b"")

        report = await driver.scrape_library()

        assert one.calls == ["Hayami Remu"]
        assert report.actors.scraping.scraped == 1
        assert report.actors.updating.updated == 1
        assert movie_cache.load("ABC-001").data.actor[0].height == 160

    @pytest.mark.asyncio
    async def test_actor_failure_is_reported(
        self, alpha, movie_cache, scrape_config, confirm_yes, session_recorder, library_dir: Path
    ) -> None:
        (library_dir / "ABC-001.mp4").write_bytes(b"")
        broken_actors = MagicMock(spec=ActorCoordinator)
        broken_actors.find_cached.side_effect = RuntimeError("index illisible")
        movie_coordinator = ScrapeCoordinator(
            sources=lambda: [alpha],
            movie_cache=movie_cache,
            scrape_config=scrape_config,
            runner=SourceRunner(),
            confirmation=confirm_yes,
            session_factory=session_recorder,
        )
        driver = BatchDriver(
            movie_coordinator, broken_actors, movie_cache, scrape_config, session_recorder, item_delay=0
        )

        report = await driver.scrape_library(with_actors=True)

        assert report.movies.scraped == 1
        assert report.actors is None
        assert report.actor_error == "index illisible"
        assert all(session.closed for session in session_recorder.sessions)

    @pytest.mark.asyncio
    async def test_missing_library_path(self, driver, scrape_config) -> None:
        scrape_config.library_path = ""
        with pytest.raises(ConfigError):
            await driver.scrape_library()


class TestActorBatch:
    """Tests pour BatchDriver.scrape_actors et la reconciliation."""

    def test_collect_actor_names(self, driver, movie_cache) -> None:
        _cache_movie(movie_cache, "ABC-001", "Hayami Remu", "Mao")
        _cache_movie(movie_cache, "ABC-002", "Mao", " ")

        assert driver.collect_actor_names() == ["Hayami Remu", "Mao"]

    @pytest.mark.asyncio
    async def test_counts(self, driver, one, actor_cache, complete_actor, movie_cache) -> None:
        complete_actor.name = "Complete Actor"
        complete_actor.id = "complete-actor"
        actor_cache.save(complete_actor)
        _cache_movie(movie_cache, "ABC-001", "Complete Actor", "Hayami Remu", "Nobody")

        summary = await driver.scrape_actors()

        assert summary.to_dict() == {"total": 3, "scraped": 1, "cached": 1, "failed": 1}
        assert one.calls == ["Hayami Remu", "Nobody"]

    @pytest.mark.asyncio
    async def test_one_session_per_batch(self, driver, session_recorder, movie_cache) -> None:
        _cache_movie(movie_cache, "ABC-001", "Hayami Remu", "Nobody")

        await driver.scrape_actors()

        assert len(session_recorder.sessions) == 1
        assert session_recorder.sessions[0].closed

    def test_reconcile_updates_refs_once(self, driver, actor_cache, complete_actor, movie_cache) -> None:
        actor_cache.save(complete_actor)
        _cache_movie(movie_cache, "ABC-001", "Remu Hayami")
        _cache_movie(movie_cache, "ABC-002", "Unknown")

        first = driver.reconcile_movie_actors()
        second = driver.reconcile_movie_actors()

        ref = movie_cache.load("ABC-001").data.actor[0]
        assert ref.height == 165
        assert ref.thumb == "https://img.example.com/hayami-remu.jpg"
        assert ref.name == "Remu Hayami"
        assert first.to_dict() == {"total": 2, "updated": 1, "failed": 0}
        assert second.updated == 0


def test_apply_actor_to_ref_keeps_film_values() -> None:
    ref = ActorRef(name="Mao", height=150, birthdate="2000-01-01")
    actor = ActorRecord(id="mao", name="Mao", height=0, birthdate="2000-02-02")

    assert apply_actor_to_ref(ref, actor)
    assert ref.height == 150
    assert ref.birthdate == "2000-02-02"
    assert not apply_actor_to_ref(ref, actor)
