# -*- coding: utf-8 -*-
"""Unit tests for the DI container wiring."""

from __future__ import annotations

import pytest
from dependency_injector import providers

from appointment_notifier.config import Settings
from appointment_notifier.DI import Container
from appointment_notifier.exceptions import MissingRequiredConfigError
from appointment_notifier.notifications.transports import ConsoleTransport, TelegramTransport


def _container(settings: Settings) -> Container:
    container = Container()
    container.config.override(providers.Object(settings))
    return container


def test_console_transport_when_telegram_disabled() -> None:
    container = _container(Settings(_env_file=None, telegram={"rate_limit": 7}))

    dispatcher = container.dispatcher()

    assert isinstance(container.transport(), ConsoleTransport)
    assert dispatcher.destination == "console"
    assert container.rate_limiter().limit == 7


def test_telegram_transport_when_enabled() -> None:
    container = _container(
        Settings(
            _env_file=None,
            telegram={"enabled": True, "bot_token": "123:abc", "channel_id": "@visa"},
        )
    )

    dispatcher = container.dispatcher()

    assert isinstance(container.transport(), TelegramTransport)
    assert dispatcher.destination == "@visa"


def test_missing_channel_id_fails_fast() -> None:
    container = _container(
        Settings(_env_file=None, telegram={"enabled": True, "bot_token": "123:abc"})
    )
    with pytest.raises(MissingRequiredConfigError):
        container.dispatcher()


def test_each_container_owns_its_limiter() -> None:
    settings = Settings(_env_file=None)
    first = _container(settings)
    second = _container(settings)

    assert first.rate_limiter() is first.rate_limiter()
    assert first.rate_limiter() is not second.rate_limiter()
