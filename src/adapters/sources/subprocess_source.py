"""
Sources executees dans un processus enfant.

Contrat du processus :
- arguments : les codes (films) ou le nom (acteur)
- stdout : le resultat JSON
- stderr : diagnostics de progression, une ligne par message
- films uniquement : une ligne stdout "__PROMPT__:{json}" demande une
  confirmation ; la reponse est ecrite sur stdin sous la forme
  {"response": true|false}

L'annulation (timeout du SourceRunner) ou toute erreur de lecture termine le
processus : SIGTERM puis SIGKILL apres un delai de grace.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from src.adapters.sources.payload import actor_result, decode_json, movie_result
from src.core.ports.confirmation import IConfirmationChannel
from src.core.ports.session import IFetchSession
from src.core.ports.sources import IActorSource, IMovieSource
from src.core.value_objects.progress import ProgressCallback, emit
from src.core.value_objects.source_result import SourceResult
from src.utils.constants import PROMPT_PREFIX

# Limite de ligne du StreamReader : le JSON peut tenir sur une seule ligne
_STREAM_LIMIT = 16 * 1024 * 1024
KILL_GRACE_SECONDS = 2.0


def default_command(scrapers_dir: Path, kind: str, name: str) -> list[str]:
    """Commande par defaut : {scrapers_dir}/{kind}/{name}/run.py avec l'interpreteur courant."""
    return [sys.executable, str(scrapers_dir / kind / name / "run.py")]


async def terminate_process(
    process: asyncio.subprocess.Process,
    name: str,
    grace: float = KILL_GRACE_SECONDS,
) -> None:
    """Termine un processus enfant, de force s'il ne s'arrete pas a temps."""
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(process.wait(), timeout=grace)
    except asyncio.TimeoutError:
        logger.warning(f"[{name}] arret force du processus")
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()


async def _relay_stderr(
    stream: Optional[asyncio.StreamReader],
    name: str,
    on_progress: Optional[ProgressCallback],
) -> None:
    """Relaie les diagnostics du processus vers le log et la progression."""
    if stream is None:
        return
    async for raw in stream:
        line = raw.decode("utf-8", errors="replace").strip()
        if not line:
            continue
        logger.debug(f"[{name}] {line}")
        emit(on_progress, line, source=name)


class _SubprocessSource:
    """Base commune : nom et commande de lancement."""

    def __init__(self, name: str, command: list[str]) -> None:
        self._name = name
        self._command = list(command)

    @property
    def name(self) -> str:
        return self._name

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def _is_available(self) -> bool:
        """Verifie le script quand la commande est un interpreteur suivi d'un script."""
        if len(self._command) >= 2 and self._command[1].endswith(".py"):
            return Path(self._command[1]).exists()
        return bool(self._command)


class SubprocessMovieSource(_SubprocessSource, IMovieSource):
    """
    Source de films dans un processus enfant, avec protocole de confirmation.

    Sans canal de confirmation, toutes les demandes recoivent "oui"
    (mode non interactif).
    """

    def __init__(
        self,
        name: str,
        command: list[str],
        confirmation: Optional[IConfirmationChannel] = None,
    ) -> None:
        super().__init__(name, command)
        self._confirmation = confirmation

    async def scrape(
        self,
        codes: list[str],
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        if not codes:
            return SourceResult.not_found()
        if not self._is_available():
            return SourceResult.failed(f"scraper introuvable: {self._command[-1]}")

        logger.info(f"Execution du scraper {self.name} pour {', '.join(codes)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *self._command,
                *codes,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=_STREAM_LIMIT,
            )
        except OSError as e:
            return SourceResult.failed(f"lancement impossible: {e}")

        try:
            stdout_text, _ = await asyncio.gather(
                self._read_stdout(process),
                _relay_stderr(process.stderr, self.name, on_progress),
            )
            returncode = await process.wait()
        except BaseException:
            await terminate_process(process, self.name)
            raise

        if returncode != 0:
            return SourceResult.failed(f"code de sortie {returncode}")

        decoded, payload = decode_json(stdout_text)
        if not decoded:
            return SourceResult.failed("sortie JSON invalide")
        return movie_result(payload)

    async def _read_stdout(self, process: asyncio.subprocess.Process) -> str:
        """Lit stdout en repondant aux demandes de confirmation au fil de l'eau."""
        payload_lines: list[str] = []
        assert process.stdout is not None
        async for raw in process.stdout:
            line = raw.decode("utf-8", errors="replace")
            if line.startswith(PROMPT_PREFIX):
                await self._answer_prompt(process, line[len(PROMPT_PREFIX):].strip())
                continue
            payload_lines.append(line)

        if process.stdin is not None and not process.stdin.is_closing():
            process.stdin.close()
        return "".join(payload_lines)

    async def _answer_prompt(self, process: asyncio.subprocess.Process, raw: str) -> None:
        try:
            prompt = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"[{self.name}] demande de confirmation illisible: {raw}")
            prompt = {}
        if not isinstance(prompt, dict):
            prompt = {}

        message = prompt.get("message") or "En attente d'une action utilisateur..."
        if self._confirmation is None:
            answer = True
        else:
            answer = await self._confirmation.request_confirmation(f"[{self.name}] {message}")

        if process.stdin is None or process.stdin.is_closing():
            return
        try:
            process.stdin.write((json.dumps({"response": bool(answer)}) + "\n").encode("utf-8"))
            await process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            logger.debug(f"[{self.name}] reponse non transmise: {e}")


class SubprocessActorSource(_SubprocessSource, IActorSource):
    """Source d'acteurs dans un processus enfant (un nom par appel)."""

    async def scrape(
        self,
        actor_name: str,
        session: Optional[IFetchSession] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SourceResult:
        if not self._is_available():
            return SourceResult.failed(f"scraper introuvable: {self._command[-1]}")

        logger.debug(f"Execution du scraper {self.name} pour {actor_name}")
        try:
            process = await asyncio.create_subprocess_exec(
                *self._command,
                actor_name,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=_STREAM_LIMIT,
            )
        except OSError as e:
            return SourceResult.failed(f"lancement impossible: {e}")

        try:
            stdout_bytes, _ = await asyncio.gather(
                process.stdout.read(),
                _relay_stderr(process.stderr, self.name, on_progress),
            )
            returncode = await process.wait()
        except BaseException:
            await terminate_process(process, self.name)
            raise

        if returncode != 0:
            return SourceResult.failed(f"code de sortie {returncode}")

        decoded, payload = decode_json(stdout_bytes.decode("utf-8", errors="replace"))
        if not decoded:
            return SourceResult.failed("sortie JSON invalide")
        return actor_result(payload)
