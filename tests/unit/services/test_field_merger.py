"""
Tests unitaires de la fusion multi-sources.

Ces tests verifient:
- La priorite des sources champ par champ (acteurs et films)
- La priorite locale lors de la reconciliation
- La completude d'une fiche et la resolution du thumb
"""

from src.core.entities.actor import ActorMeta, ActorRecord
from src.services.field_merger import (
    has_uploaded_thumb,
    is_actor_complete,
    merge_actor_results,
    merge_local_with_scraped,
    merge_movie_results,
    remove_empty_fields,
    resolve_actor_thumb,
)


class TestMergeActorResults:
    """Tests pour merge_actor_results (priorite des sources)."""

    def test_first_source_in_priority_wins_per_field(self) -> None:
        """A {height:165} et B {height:160, bust:88} donnent {165, 88}."""
        results = [
            ("a", ActorRecord(height=165)),
            ("b", ActorRecord(height=160, bust=88)),
        ]

        merged = merge_actor_results("Hayami Remu", results, ["a", "b"])

        assert merged.height == 165
        assert merged.bust == 88
        assert merged.meta.sources == ["a", "b"]

    def test_priority_order_not_arrival_order(self) -> None:
        """La priorite s'applique quel que soit l'ordre d'arrivee des resultats."""
        results = [
            ("b", ActorRecord(height=160)),
            ("a", ActorRecord(height=165)),
        ]

        merged = merge_actor_results("X", results, ["a", "b"])

        assert merged.height == 165
        assert merged.meta.sources == ["a"]

    def test_sources_outside_priority_fill_remaining_fields(self) -> None:
        results = [
            ("extra", ActorRecord(birthdate="1998-01-01", height=150)),
            ("a", ActorRecord(height=165)),
        ]

        merged = merge_actor_results("X", results, ["a"])

        assert merged.height == 165
        assert merged.birthdate == "1998-01-01"
        assert merged.meta.sources == ["a", "extra"]

    def test_id_is_slug_of_requested_name(self) -> None:
        merged = merge_actor_results("Hayami Remu", [("a", ActorRecord(name="Remu"))], ["a"])
        assert merged.id == "hayami-remu"
        assert merged.name == "Remu"

    def test_requested_name_is_kept_when_sources_have_none(self) -> None:
        merged = merge_actor_results("Hayami Remu", [("a", ActorRecord(height=160))], ["a"])
        assert merged.name == "Hayami Remu"

    def test_other_names_are_united(self) -> None:
        results = [
            ("a", ActorRecord(other_names=["Remu", "R. Hayami"])),
            ("b", ActorRecord(other_names=["Remu", "Hayami"])),
        ]

        merged = merge_actor_results("X", results, ["a", "b"])

        assert merged.other_names == ["Remu", "R. Hayami", "Hayami"]

    def test_non_contributing_source_is_not_listed(self) -> None:
        results = [("a", ActorRecord(height=165)), ("b", ActorRecord())]
        merged = merge_actor_results("X", results, ["a", "b"])
        assert merged.meta.sources == ["a"]


class TestMergeMovieResults:
    """Tests pour merge_movie_results (priorite par champ)."""

    def test_field_priority_override(self) -> None:
        """fieldPriorities[title] peut inverser l'ordre global pour un champ."""
        results = [
            ("alpha", {"code": "A-1", "title": "Alpha", "studio": "S-alpha"}),
            ("beta", {"code": "A-1", "title": "Beta", "studio": "S-beta"}),
        ]
        priorities = {"title": ["beta", "alpha"]}

        merged = merge_movie_results(
            "A-1", results, lambda field: priorities.get(field, ["alpha", "beta"])
        )

        assert merged["title"] == "Beta"
        assert merged["studio"] == "S-alpha"

    def test_empty_values_fall_through(self) -> None:
        """Une valeur vide (chaine, 0, dict vide) laisse la place a la source suivante."""
        results = [
            ("alpha", {"code": "A-1", "runtime": 0, "rating": {"value": 0, "votes": 0}}),
            ("beta", {"code": "A-1", "runtime": 120, "rating": {"value": 4.2, "votes": 10}}),
        ]

        merged = merge_movie_results("A-1", results, lambda field: ["alpha", "beta"])

        assert merged["runtime"] == 120
        assert merged["rating"] == {"value": 4.2, "votes": 10}

    def test_identity_fields_come_from_code(self) -> None:
        results = [("alpha", {"dvd_id": "a-1", "id": "other", "error": "x", "title": "T"})]

        merged = merge_movie_results("A-1", results, lambda field: ["alpha"])

        assert merged == {"code": "A-1", "id": "A-1", "title": "T"}

    def test_no_results_gives_identity_only(self) -> None:
        assert merge_movie_results("A-1", [], lambda field: []) == {"code": "A-1", "id": "A-1"}


class TestMergeLocalWithScraped:
    """Tests pour merge_local_with_scraped (priorite locale)."""

    def test_none_returns_equal_copy(self, complete_actor: ActorRecord) -> None:
        merged = merge_local_with_scraped(complete_actor, None)
        assert merged == complete_actor
        assert merged is not complete_actor

    def test_empty_scraped_returns_equal_copy(self, complete_actor: ActorRecord) -> None:
        assert merge_local_with_scraped(complete_actor, ActorRecord()) == complete_actor

    def test_local_values_win(self) -> None:
        local = ActorRecord(name="Local", height=165)
        scraped = ActorRecord(name="Scraped", height=160, bust=88)

        merged = merge_local_with_scraped(local, scraped)

        assert merged.name == "Local"
        assert merged.height == 165
        assert merged.bust == 88

    def test_uploaded_thumb_is_preserved(self) -> None:
        """Une photo uploadee garde thumb, thumb_url et thumb_local."""
        local = ActorRecord(name="X", thumb="/actors/x.jpg")
        scraped = ActorRecord(thumb="https://img/x.jpg", thumb_url="https://img/x.jpg")

        merged = merge_local_with_scraped(local, scraped)

        assert merged.thumb == "/actors/x.jpg"
        assert merged.thumb_url == ""

    def test_other_names_and_sources_are_united(self) -> None:
        local = ActorRecord(other_names=["A"], meta=ActorMeta(sources=["local"]))
        scraped = ActorRecord(other_names=["B", "A"], meta=ActorMeta(sources=["javdb"]))

        merged = merge_local_with_scraped(local, scraped)

        assert merged.other_names == ["A", "B"]
        assert merged.meta.sources == ["local", "javdb"]


class TestIsActorComplete:
    """Tests pour is_actor_complete."""

    def test_complete_actor(self, complete_actor: ActorRecord) -> None:
        assert is_actor_complete(complete_actor) is True

    def test_single_missing_measure_makes_incomplete(self, complete_actor: ActorRecord) -> None:
        complete_actor.waist = 0
        assert is_actor_complete(complete_actor) is False

    def test_blank_text_makes_incomplete(self, complete_actor: ActorRecord) -> None:
        complete_actor.alt_name = "  "
        assert is_actor_complete(complete_actor) is False

    def test_missing_thumb_makes_incomplete(self, complete_actor: ActorRecord) -> None:
        complete_actor.thumb = ""
        assert is_actor_complete(complete_actor) is False

    def test_none_is_incomplete(self) -> None:
        assert is_actor_complete(None) is False


class TestResolveActorThumb:
    """Tests pour resolve_actor_thumb."""

    def test_remote_thumb_url_first(self) -> None:
        actor = ActorRecord(thumb_url="https://a/1.jpg", thumb="/actors/x.jpg")
        assert resolve_actor_thumb(actor) == "https://a/1.jpg"

    def test_remote_thumb_then_local_path(self) -> None:
        assert resolve_actor_thumb(ActorRecord(thumb="http://b/2.jpg")) == "http://b/2.jpg"
        assert resolve_actor_thumb(ActorRecord(thumb="/actors/x.jpg")) == "/actors/x.jpg"

    def test_thumb_local_gives_served_path(self) -> None:
        actor = ActorRecord(thumb_local="C:\\photos\\hayami-remu.webp")
        assert resolve_actor_thumb(actor) == "/actors/hayami-remu.webp"

    def test_nothing_gives_empty(self) -> None:
        assert resolve_actor_thumb(ActorRecord(thumb="relative.jpg")) == ""

    def test_has_uploaded_thumb(self) -> None:
        assert has_uploaded_thumb(ActorRecord(thumb="/actors/x.jpg")) is True
        assert has_uploaded_thumb(ActorRecord(thumb="https://a/1.jpg")) is False


def test_remove_empty_fields_is_recursive() -> None:
    data = {"name": "X", "height": 0, "meta": {"sources": [], "lastUpdate": ""}, "tags": ["a"]}
    assert remove_empty_fields(data) == {"name": "X", "tags": ["a"]}
