# -*- coding: utf-8 -*-
"""Unit tests for TelegramTransport error mapping."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest
from telegram.error import BadRequest, NetworkError, RetryAfter

from appointment_notifier.config import Settings
from appointment_notifier.exceptions import (
    MissingRequiredConfigError,
    ThrottleError,
    TransportError,
)
from appointment_notifier.notifications.transports import SendOptions, TelegramTransport


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        telegram={"enabled": True, "bot_token": "123:abc", "channel_id": "@appointments"},
    )


@pytest.fixture
def bot() -> Mock:
    bot = Mock()
    bot.send_message = AsyncMock()
    bot.shutdown = AsyncMock()
    return bot


async def test_send_forwards_html_and_disabled_preview(settings: Settings, bot: Mock) -> None:
    transport = TelegramTransport(settings, bot=bot)

    await transport.send("@appointments", "<b>hi</b>", SendOptions())

    bot.send_message.assert_awaited_once()
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == "@appointments"
    assert kwargs["text"] == "<b>hi</b>"
    assert kwargs["parse_mode"] == "HTML"
    assert kwargs["link_preview_options"].is_disabled is True


async def test_retry_after_maps_to_throttle_error(settings: Settings, bot: Mock) -> None:
    bot.send_message.side_effect = RetryAfter(7)
    transport = TelegramTransport(settings, bot=bot)

    with pytest.raises(ThrottleError) as excinfo:
        await transport.send("@appointments", "text", SendOptions())

    assert excinfo.value.retry_after_seconds == 7.0


@pytest.mark.parametrize("error", [BadRequest("Chat not found"), NetworkError("reset")])
async def test_other_telegram_errors_map_to_transport_error(
    settings: Settings, bot: Mock, error: Exception
) -> None:
    bot.send_message.side_effect = error
    transport = TelegramTransport(settings, bot=bot)

    with pytest.raises(TransportError) as excinfo:
        await transport.send("@appointments", "text", SendOptions())

    assert excinfo.value.cause is error


async def test_send_before_initialize_raises(settings: Settings) -> None:
    transport = TelegramTransport(settings)
    assert not transport.is_running
    with pytest.raises(TransportError):
        await transport.send("@appointments", "text", SendOptions())


async def test_shutdown_releases_bot(settings: Settings, bot: Mock) -> None:
    transport = TelegramTransport(settings, bot=bot)

    await transport.shutdown()

    bot.shutdown.assert_awaited_once()
    assert not transport.is_running


def test_missing_token_fails_fast() -> None:
    settings = Settings(_env_file=None, telegram={"enabled": True, "channel_id": "@c"})
    with pytest.raises(MissingRequiredConfigError):
        TelegramTransport(settings)
