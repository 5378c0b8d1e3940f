# -*- coding: utf-8 -*-
"""Rolling one-minute send budget shared by all notify calls of a dispatcher."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any, Optional

import structlog

from appointment_notifier.exceptions import ConfigurationError

DEFAULT_WINDOW_SECONDS = 60.0
_TICK_SLACK_SECONDS = 0.01


@dataclass(slots=True)
class RateWindow:
    """Sends counted in the current window and the monotonic time it started."""

    count: int
    window_start: float


class RateLimiter:
    """Allow at most ``limit`` sends per rolling window.

    Two mechanisms re-anchor the window: ``acquire()`` when it finds the
    window expired (or has waited it out), and a background tick started with
    ``start()``. The tick sleeps until the current window expires, so an idle
    window is always zeroed on time. Both run under the same lock and only
    reset an expired window, so whichever comes first wins and the other
    becomes a no-op.
    """

    def __init__(
        self,
        limit: int,
        *,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ConfigurationError(f"rate limit must be a positive integer, got {limit!r}")
        if window_seconds <= 0:
            raise ConfigurationError(f"window_seconds must be positive, got {window_seconds!r}")
        self.limit = limit
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._window = RateWindow(count=0, window_start=clock())
        self._lock = asyncio.Lock()
        self._tick_task: asyncio.Task[None] | None = None

    @property
    def window(self) -> RateWindow:
        """Snapshot of the current window."""
        return replace(self._window)

    @property
    def is_running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def acquire(self) -> None:
        """Count one send, waiting for the window to roll over if the budget is spent."""
        async with self._lock:
            now = self._clock()
            elapsed = now - self._window.window_start
            if elapsed >= self.window_seconds:
                self._reset(now, reason="expired")
            elif self._window.count >= self.limit:
                wait_seconds = max(0.0, self.window_seconds - elapsed)
                self._logger.info(
                    "rate_limit_wait",
                    wait_seconds=round(wait_seconds, 3),
                    limit=self.limit,
                    count=self._window.count,
                )
                if wait_seconds > 0:
                    await self._sleep(wait_seconds)
                self._reset(self._clock(), reason="waited")
            self._window.count += 1

    def start(self) -> None:
        """Start the periodic window reset tick. Requires a running event loop."""
        if self.is_running:
            return
        self._tick_task = asyncio.create_task(self._tick_loop())
        self._logger.debug("rate_limit_tick_started", window_seconds=self.window_seconds)

    async def shutdown(self) -> None:
        """Cancel the periodic tick."""
        task = self._tick_task
        self._tick_task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._logger.debug("rate_limit_tick_stopped")

    async def _tick_loop(self) -> None:
        while True:
            # Wake at the expiry of whatever window is current, even if acquire()
            # re-anchored it since the last tick.
            async with self._lock:
                delay = self._window.window_start + self.window_seconds - self._clock()
            if delay > 0:
                await self._sleep(delay)
            await self.tick()

    async def tick(self) -> None:
        """Re-anchor the window if it has expired; no-op otherwise."""
        async with self._lock:
            now = self._clock()
            # The loop timer may fire a hair before the clock agrees.
            if now - self._window.window_start >= self.window_seconds - _TICK_SLACK_SECONDS:
                self._reset(now, reason="tick")

    def _reset(self, now: float, *, reason: str) -> None:
        previous = self._window.count
        if previous > 0:
            self._logger.info("rate_limit_window_reset", previous_count=previous, reason=reason)
        self._window.count = 0
        self._window.window_start = now
