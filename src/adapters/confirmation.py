"""
Adaptateurs du canal de confirmation.

- AutoConfirmChannel : reponse fixe (mode batch non interactif)
- ConsoleConfirmChannel : question posee dans le terminal via Rich
- CallbackConfirmChannel : delegue a une fonction sync ou async (relais WebSocket...)
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, Union

from loguru import logger
from rich.console import Console
from rich.prompt import Confirm

from src.core.ports.confirmation import IConfirmationChannel


class AutoConfirmChannel(IConfirmationChannel):
    """Repond toujours la meme chose, sans interaction."""

    def __init__(self, answer: bool = True) -> None:
        self._answer = answer

    async def request_confirmation(self, message: str) -> bool:
        logger.info(f"{message} -> {'oui' if self._answer else 'non'} (automatique)")
        return self._answer


class ConsoleConfirmChannel(IConfirmationChannel):
    """Pose la question dans le terminal (lecture bloquante hors boucle)."""

    def __init__(self, console: Optional[Console] = None, default: bool = True) -> None:
        self._console = console or Console()
        self._default = default

    async def request_confirmation(self, message: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: Confirm.ask(message, console=self._console, default=self._default),
        )


ConfirmationCallback = Callable[[str], Union[bool, Awaitable[bool]]]


class CallbackConfirmChannel(IConfirmationChannel):
    """Delegue la question a un callable (synchrone ou coroutine)."""

    def __init__(self, callback: ConfirmationCallback) -> None:
        self._callback = callback

    async def request_confirmation(self, message: str) -> bool:
        answer = self._callback(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)
