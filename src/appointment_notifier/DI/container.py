# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from appointment_notifier.config import Settings, get_settings
from appointment_notifier.exceptions import MissingRequiredConfigError
from appointment_notifier.notifications.dispatcher import Dispatcher
from appointment_notifier.notifications.rate_limiter import RateLimiter
from appointment_notifier.notifications.renderer import AppointmentMessageRenderer
from appointment_notifier.notifications.transports.base import Transport
from appointment_notifier.notifications.transports.console import ConsoleTransport
from appointment_notifier.notifications.transports.telegram import TelegramTransport

CONSOLE_DESTINATION = "console"


def _build_transport(settings: Settings) -> Transport:
    if settings.telegram.enabled:
        return TelegramTransport(settings=settings)
    if settings.console.enabled:
        return ConsoleTransport()
    raise MissingRequiredConfigError("TELEGRAM__ENABLED or CONSOLE__ENABLED")


def _destination(settings: Settings) -> str:
    if not settings.telegram.enabled:
        return CONSOLE_DESTINATION
    if not settings.telegram.channel_id:
        raise MissingRequiredConfigError("TELEGRAM__CHANNEL_ID")
    return settings.telegram.channel_id


class Container(containers.DeclarativeContainer):
    """Application container. Each instance owns its own limiter and transport."""

    config = providers.Callable(get_settings)

    renderer = providers.Singleton(
        AppointmentMessageRenderer,
        timezone=providers.Callable(lambda s: s.telegram.timezone, config),
    )

    transport = providers.Singleton(_build_transport, config)

    rate_limiter = providers.Singleton(
        RateLimiter,
        limit=providers.Callable(lambda s: s.telegram.rate_limit, config),
    )

    dispatcher = providers.Singleton(
        Dispatcher,
        transport=transport,
        rate_limiter=rate_limiter,
        destination=providers.Callable(_destination, config),
        renderer=renderer,
        max_throttle_retries=providers.Callable(
            lambda s: s.telegram.max_throttle_retries, config
        ),
    )
