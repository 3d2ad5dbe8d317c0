"""
Tests unitaires du cache des films (JsonMovieCache).
"""

import json

from src.core.entities.movie import MovieRecord, ScrapeEnvelope
from src.infrastructure.persistence.movie_cache import JsonMovieCache


def _envelope(code: str, **fields) -> ScrapeEnvelope:
    return ScrapeEnvelope(data=MovieRecord(code=code, **fields), sources=["alpha"])


class TestSaveAndLoad:
    """Tests pour save, load et list_codes."""

    def test_save_writes_wrapped_json(self, movie_cache: JsonMovieCache) -> None:
        assert movie_cache.save(_envelope("ABP-123", title="T")) is True

        payload = json.loads(movie_cache.path_for("ABP-123").read_text(encoding="utf-8"))
        assert payload["sources"] == ["alpha"]
        assert payload["data"]["title"] == "T"

    def test_list_codes_sorted(self, movie_cache: JsonMovieCache) -> None:
        movie_cache.save(_envelope("B-2"))
        movie_cache.save(_envelope("A-1"))
        assert movie_cache.list_codes() == ["A-1", "B-2"]

    def test_corrupt_file_is_ignored(self, movie_cache: JsonMovieCache) -> None:
        movie_cache.directory.mkdir(parents=True, exist_ok=True)
        movie_cache.path_for("BAD-1").write_text("{oops", encoding="utf-8")

        assert movie_cache.load("BAD-1") is None
        assert list(movie_cache.iter_envelopes()) == []

    def test_filename_gives_code_when_content_has_none(self, movie_cache: JsonMovieCache) -> None:
        movie_cache.directory.mkdir(parents=True, exist_ok=True)
        movie_cache.path_for("OLD-1").write_text(json.dumps({"title": "Old"}), encoding="utf-8")

        envelope = movie_cache.load("OLD-1")

        assert envelope.code == "OLD-1"
        assert envelope.data.title == "Old"

    def test_missing_directory(self, movie_cache: JsonMovieCache) -> None:
        assert movie_cache.list_codes() == []
        assert movie_cache.load("A-1") is None


class TestPatch:
    """Tests pour patch."""

    def test_patch_updates_data_and_keeps_envelope(self, movie_cache: JsonMovieCache) -> None:
        movie_cache.save(_envelope("A-1", title="Old"))

        envelope = movie_cache.patch("A-1", {"title": "New", "releaseDate": "2024-05-01"})

        assert envelope.data.title == "New"
        assert envelope.data.release_date == "2024-05-01"
        assert envelope.sources == ["alpha"]
        assert envelope.data.meta["updatedAt"]
        assert movie_cache.load("A-1").data.title == "New"

    def test_patch_cannot_change_code(self, movie_cache: JsonMovieCache) -> None:
        movie_cache.save(_envelope("A-1"))
        envelope = movie_cache.patch("A-1", {"code": "B-2", "id": "B-2"})
        assert envelope.code == "A-1"
        assert movie_cache.list_codes() == ["A-1"]

    def test_patch_missing_movie(self, movie_cache: JsonMovieCache) -> None:
        assert movie_cache.patch("A-1", {"title": "x"}) is None


class TestDelete:
    """Tests pour delete et delete_all."""

    def test_delete_one(self, movie_cache: JsonMovieCache) -> None:
        movie_cache.save(_envelope("A-1"))
        assert movie_cache.delete("A-1") is True
        assert movie_cache.delete("A-1") is False

    def test_delete_all(self, movie_cache: JsonMovieCache) -> None:
        for code in ("A-1", "B-2", "C-3"):
            movie_cache.save(_envelope(code))

        assert movie_cache.delete_all() == 3
        assert movie_cache.list_codes() == []
