# -*- coding: utf-8 -*-
"""Telegram transport (python-telegram-bot, async)."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from telegram import Bot, LinkPreviewOptions
from telegram.error import RetryAfter, TelegramError
from telegram.request import HTTPXRequest

from appointment_notifier.exceptions import (
    MissingRequiredConfigError,
    ThrottleError,
    TransportError,
)
from appointment_notifier.notifications.transports.base import SendOptions

if TYPE_CHECKING:
    from appointment_notifier.config.config import Settings


def retry_after_seconds(exc: RetryAfter) -> float:
    """Return the server-issued delay in seconds (int or timedelta depending on PTB version)."""
    value: Any = exc.retry_after
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


class TelegramTransport:
    """Send messages through the Telegram Bot API."""

    def __init__(
        self,
        settings: "Settings",
        *,
        bot: Optional[Bot] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)
        cfg = settings.telegram
        if not cfg.bot_token:
            raise MissingRequiredConfigError("TELEGRAM__BOT_TOKEN")

        self.token: str = cfg.bot_token
        self.connect_timeout = cfg.connect_timeout
        self.read_timeout = cfg.read_timeout
        self.write_timeout = cfg.write_timeout
        self.pool_timeout = cfg.pool_timeout
        self._bot: Optional[Bot] = bot

    @property
    def is_running(self) -> bool:
        return self._bot is not None

    async def initialize(self) -> None:
        if self._bot is not None:
            return
        request = HTTPXRequest(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            write_timeout=self.write_timeout,
            pool_timeout=self.pool_timeout,
        )
        self._bot = Bot(token=self.token, request=request)
        await self._bot.initialize()
        self._logger.debug("telegram_transport_initialized")

    async def shutdown(self) -> None:
        if self._bot is None:
            return
        bot, self._bot = self._bot, None
        await bot.shutdown()
        self._logger.debug("telegram_transport_shutdown")

    async def send(self, destination: str, text: str, options: SendOptions) -> None:
        if self._bot is None:
            raise TransportError("Telegram transport not initialized")
        try:
            await self._bot.send_message(
                chat_id=destination,
                text=text,
                parse_mode=options.parse_mode,
                link_preview_options=LinkPreviewOptions(
                    is_disabled=options.disable_link_preview
                ),
            )
        except RetryAfter as exc:
            raise ThrottleError(retry_after_seconds(exc), str(exc)) from exc
        except TelegramError as exc:
            raise TransportError(
                f"Telegram send failed: {exc}",
                detail=exc.message,
                cause=exc,
            ) from exc
