"""
Tests unitaires des sources HTTP JSON.

Les requetes passent par une FakeSession en memoire.
"""

import json

import pytest

from src.adapters.sources.http_source import HttpJsonActorSource, HttpJsonMovieSource
from src.core.value_objects.fetch import FetchResult, FetchStatus
from src.core.value_objects.source_result import SourceStatus
from tests.fixtures.fakes import FakeSession


ACTOR_TEMPLATE = "https://api.example.com/actors?q={name}&slug={slug}"
MOVIE_TEMPLATE = "https://api.example.com/movies/{code}"


class LimitedSession(FakeSession):
    """Session dont le quota est deja atteint."""

    async def fetch(self, url: str) -> FetchResult:
        self.fetched.append(url)
        return FetchResult(FetchStatus.LIMIT_EXCEEDED, error="limite")


class TestHttpJsonActorSource:
    """Tests pour HttpJsonActorSource."""

    def test_url_for_encodes_name_and_slug(self) -> None:
        source = HttpJsonActorSource("api", ACTOR_TEMPLATE)
        assert source.url_for(" Hayami Remu ") == (
            "https://api.example.com/actors?q=Hayami%20Remu&slug=hayami-remu"
        )

    @pytest.mark.asyncio
    async def test_found(self) -> None:
        source = HttpJsonActorSource("api", ACTOR_TEMPLATE)
        url = source.url_for("Hayami Remu")
        session = FakeSession({url: json.dumps({"name": "Hayami Remu", "height": 165})})

        result = await source.scrape("Hayami Remu", session=session)

        assert result.status is SourceStatus.FOUND
        assert result.data["height"] == 165
        assert session.fetched == [url]

    @pytest.mark.asyncio
    async def test_404_is_not_found(self) -> None:
        source = HttpJsonActorSource("api", ACTOR_TEMPLATE)
        result = await source.scrape("Nobody", session=FakeSession())
        assert result.status is SourceStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_json_is_failure(self) -> None:
        source = HttpJsonActorSource("api", ACTOR_TEMPLATE)
        session = FakeSession({source.url_for("X"): "<html>"})
        result = await source.scrape("X", session=session)
        assert result.status is SourceStatus.FAILED

    @pytest.mark.asyncio
    async def test_session_limit_is_failure(self) -> None:
        source = HttpJsonActorSource("api", ACTOR_TEMPLATE)
        result = await source.scrape("X", session=LimitedSession())
        assert result.status is SourceStatus.FAILED
        assert "limite" in result.reason

    @pytest.mark.asyncio
    async def test_without_session(self) -> None:
        source = HttpJsonActorSource("api", ACTOR_TEMPLATE)
        assert (await source.scrape("X")).status is SourceStatus.FAILED


class TestHttpJsonMovieSource:
    """Tests pour HttpJsonMovieSource."""

    @pytest.mark.asyncio
    async def test_one_request_per_code(self) -> None:
        source = HttpJsonMovieSource("api", MOVIE_TEMPLATE)
        session = FakeSession({
            source.url_for("ABC-001"): json.dumps({"title": "Premier"}),
            source.url_for("ABC-002"): json.dumps({"code": "ABC-002", "title": "Second"}),
        })

        result = await source.scrape(["ABC-001", "ABC-002", "ABC-003"], session=session)

        assert result.status is SourceStatus.FOUND
        assert result.data == [
            {"title": "Premier", "code": "ABC-001"},
            {"code": "ABC-002", "title": "Second"},
        ]
        assert len(session.fetched) == 3

    @pytest.mark.asyncio
    async def test_all_missing_is_not_found(self) -> None:
        source = HttpJsonMovieSource("api", MOVIE_TEMPLATE)
        result = await source.scrape(["ABC-001"], session=FakeSession())
        assert result.status is SourceStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_errors_without_items_is_failure(self) -> None:
        source = HttpJsonMovieSource("api", MOVIE_TEMPLATE)
        result = await source.scrape(["ABC-001"], session=LimitedSession())
        assert result.status is SourceStatus.FAILED
        assert result.reason.startswith("ABC-001")
