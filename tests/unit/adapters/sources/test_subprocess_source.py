"""
Tests unitaires des sources executees dans un processus enfant.

Les scrapers sont de petits scripts Python ecrits dans tmp_path et lances
avec l'interpreteur courant.
"""

import sys
import textwrap
from pathlib import Path

import pytest

from src.adapters.confirmation import AutoConfirmChannel
from src.adapters.sources import subprocess_source
from src.adapters.sources.subprocess_source import (
    SubprocessActorSource,
    SubprocessMovieSource,
    default_command,
)
from src.core.value_objects.progress import ProgressEvent
from src.core.value_objects.source_result import SourceStatus
from src.services.source_runner import SourceRunner
from tests.fixtures.fakes import RecordingConfirmChannel


def _script(tmp_path: Path, name: str, body: str) -> list[str]:
    path = tmp_path / f"{name}.py"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return [sys.executable, str(path)]


MOVIE_SCRIPT = """
    import json
    import sys

    print("recherche en cours", file=sys.stderr)
    print(json.dumps([{"code": code, "title": "Titre " + code} for code in sys.argv[1:]]))
"""

PROMPT_SCRIPT = """
    import json
    import sys

    print("__PROMPT__:" + json.dumps({"type": "confirm", "message": "Connexion requise"}), flush=True)
    answer = json.loads(sys.stdin.readline())
    title = "oui" if answer["response"] else "non"
    print(json.dumps([{"code": sys.argv[1], "title": title}]))
"""

LONG_LINE_SCRIPT = """
    import time

    print("x" * 5000, flush=True)
    time.sleep(30)
"""


class TestSubprocessMovieSource:
    """Tests pour SubprocessMovieSource."""

    @pytest.mark.asyncio
    async def test_returns_items_and_relays_stderr(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource("alpha", _script(tmp_path, "movies", MOVIE_SCRIPT))
        events: list[ProgressEvent] = []

        result = await source.scrape(["A-1", "B-2"], on_progress=events.append)

        assert result.status is SourceStatus.FOUND
        assert [item["code"] for item in result.data] == ["A-1", "B-2"]
        assert any(event.message == "recherche en cours" for event in events)

    @pytest.mark.asyncio
    async def test_prompt_is_answered_through_channel(self, tmp_path: Path) -> None:
        channel = RecordingConfirmChannel(answer=False)
        source = SubprocessMovieSource(
            "alpha", _script(tmp_path, "prompt", PROMPT_SCRIPT), confirmation=channel
        )

        result = await source.scrape(["A-1"])

        assert result.data == [{"code": "A-1", "title": "non"}]
        assert channel.messages == ["[alpha] Connexion requise"]

    @pytest.mark.asyncio
    async def test_prompt_without_channel_answers_yes(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource("alpha", _script(tmp_path, "prompt", PROMPT_SCRIPT))

        result = await source.scrape(["A-1"])

        assert result.data == [{"code": "A-1", "title": "oui"}]

    @pytest.mark.asyncio
    async def test_prompt_with_auto_channel(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource(
            "alpha", _script(tmp_path, "prompt", PROMPT_SCRIPT),
            confirmation=AutoConfirmChannel(answer=True),
        )
        result = await source.scrape(["A-1"])
        assert result.data[0]["title"] == "oui"

    @pytest.mark.asyncio
    async def test_non_zero_exit_is_failure(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource(
            "alpha", _script(tmp_path, "crash", "import sys\nsys.exit(3)\n")
        )

        result = await source.scrape(["A-1"])

        assert result.status is SourceStatus.FAILED
        assert "3" in result.reason

    @pytest.mark.asyncio
    async def test_invalid_json_is_failure(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource("alpha", _script(tmp_path, "bad", "print('pas du json')\n"))
        result = await source.scrape(["A-1"])
        assert result.status is SourceStatus.FAILED

    @pytest.mark.asyncio
    async def test_missing_script_is_failure(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource("alpha", [sys.executable, str(tmp_path / "absent.py")])
        result = await source.scrape(["A-1"])
        assert result.status is SourceStatus.FAILED

    @pytest.mark.asyncio
    async def test_no_codes(self, tmp_path: Path) -> None:
        source = SubprocessMovieSource("alpha", _script(tmp_path, "movies", MOVIE_SCRIPT))
        assert (await source.scrape([])).status is SourceStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_read_error_terminates_child(self, tmp_path: Path, monkeypatch) -> None:
        """Une ligne stdout trop longue arrete la lecture et le processus."""
        monkeypatch.setattr(subprocess_source, "_STREAM_LIMIT", 1024)
        terminated: list[int] = []
        real_terminate = subprocess_source.terminate_process

        async def spy(process, name, grace=subprocess_source.KILL_GRACE_SECONDS):
            terminated.append(process.pid)
            await real_terminate(process, name, grace=grace)

        monkeypatch.setattr(subprocess_source, "terminate_process", spy)
        script = _script(tmp_path, "long_line", LONG_LINE_SCRIPT)
        source = SubprocessMovieSource("alpha", script)

        with pytest.raises(ValueError):
            await source.scrape(["A-1"])

        assert len(terminated) == 1


class TestSubprocessActorSource:
    """Tests pour SubprocessActorSource."""

    @pytest.mark.asyncio
    async def test_found(self, tmp_path: Path) -> None:
        body = "import json, sys\nprint(json.dumps({'name': sys.argv[1], 'height': 160}))\n"
        source = SubprocessActorSource("one", _script(tmp_path, "actor", body))

        result = await source.scrape("Hayami Remu")

        assert result.status is SourceStatus.FOUND
        assert result.data == {"name": "Hayami Remu", "height": 160}

    @pytest.mark.asyncio
    async def test_error_object_is_not_found(self, tmp_path: Path) -> None:
        body = "import json\nprint(json.dumps({'error': 'Actor not found'}))\n"
        source = SubprocessActorSource("one", _script(tmp_path, "actor", body))

        assert (await source.scrape("Nobody")).status is SourceStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_timeout_kills_child(self, tmp_path: Path) -> None:
        """Le timeout du runner annule la source et termine le processus."""
        source = SubprocessActorSource("slow", _script(tmp_path, "slow", "import time\ntime.sleep(30)\n"))
        runner = SourceRunner(actor_timeout=0.5)

        result = await runner.run_actor(source, "X")

        assert result.status is SourceStatus.FAILED
        assert "timeout" in result.reason


def test_default_command(tmp_path: Path) -> None:
    command = default_command(tmp_path, "actors", "javdb")
    assert command == [sys.executable, str(tmp_path / "actors" / "javdb" / "run.py")]
