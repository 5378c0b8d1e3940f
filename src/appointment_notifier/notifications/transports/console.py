# -*- coding: utf-8 -*-
"""Console transport (print-based dry run)."""

from __future__ import annotations

from appointment_notifier.notifications.transports.base import SendOptions


class ConsoleTransport:
    """Print messages to stdout instead of delivering them."""

    def __init__(self) -> None:
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send(self, destination: str, text: str, options: SendOptions) -> None:
        print(f"[{destination}] ({options.parse_mode})\n{text}")
