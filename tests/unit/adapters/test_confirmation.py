"""
Tests unitaires des canaux de confirmation.
"""

from unittest.mock import patch

import pytest

from src.adapters.confirmation import (
    AutoConfirmChannel,
    CallbackConfirmChannel,
    ConsoleConfirmChannel,
)


@pytest.mark.asyncio
async def test_auto_channel_returns_fixed_answer() -> None:
    assert await AutoConfirmChannel().request_confirmation("Continuer ?") is True
    assert await AutoConfirmChannel(answer=False).request_confirmation("Continuer ?") is False


@pytest.mark.asyncio
async def test_callback_channel_sync_and_async() -> None:
    questions: list[str] = []

    def sync_callback(message: str) -> bool:
        questions.append(message)
        return False

    async def async_callback(message: str) -> bool:
        questions.append(message)
        return True

    assert await CallbackConfirmChannel(sync_callback).request_confirmation("a") is False
    assert await CallbackConfirmChannel(async_callback).request_confirmation("b") is True
    assert questions == ["a", "b"]


@pytest.mark.asyncio
async def test_console_channel_asks_rich_prompt() -> None:
    channel = ConsoleConfirmChannel(default=False)
    with patch("src.adapters.confirmation.Confirm.ask", return_value=True) as ask:
        answer = await channel.request_confirmation("Continuer ?")

    assert answer is True
    assert ask.call_args.args == ("Continuer ?",)
    assert ask.call_args.kwargs["default"] is False
