# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from appointment_notifier.models import VisaAppointment
from appointment_notifier.notifications.rate_limiter import RateLimiter
from appointment_notifier.notifications.transports.base import SendOptions


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


class ManualTimer:
    """Clock plus sleep whose sleepers only wake when the test advances time."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self._sleepers: list[tuple[float, asyncio.Future[None]]] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._sleepers.append((self.now + seconds, future))
        await future

    async def advance_to(self, when: float) -> None:
        """Move time forward, waking due sleepers in wake-up order."""
        while True:
            due = [s for s in self._sleepers if s[0] <= when]
            if not due:
                break
            wake_at, future = min(due, key=lambda s: s[0])
            self._sleepers = [s for s in self._sleepers if s[1] is not future]
            self.now = max(self.now, wake_at)
            future.set_result(None)
            await _settle()
        self.now = when
        await _settle()


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


class FakeTransport:
    """Transport that replays scripted outcomes: None for success, an exception to raise."""

    def __init__(self, outcomes: Optional[list[Optional[BaseException]]] = None) -> None:
        self.outcomes = list(outcomes or [])
        self.sent: list[tuple[str, str, SendOptions]] = []
        self.initialized = False
        self.shut_down = False

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.shut_down = True

    async def send(self, destination: str, text: str, options: SendOptions) -> None:
        self.sent.append((destination, text, options))
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if outcome is not None:
                raise outcome


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2025, 1, 15, 11, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def appointment_payload(now_utc: datetime) -> dict[str, Any]:
    """Upstream event payload with sensible defaults."""
    return {
        "id": "42",
        "status": "active",
        "center": "Berlin",
        "country_code": "tr",
        "mission_code": "de",
        "visa_category": "tourism",
        "visa_type": "short-stay",
        "last_available_date": None,
        "tracking_count": 4,
        "last_checked_at": now_utc,
    }


@pytest.fixture
def appointment_factory(
    appointment_payload: dict[str, Any],
) -> Callable[..., VisaAppointment]:
    """Build VisaAppointment with defaults and easy overrides."""

    def _build(**overrides: Any) -> VisaAppointment:
        return VisaAppointment.from_payload({**appointment_payload, **overrides})

    return _build


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter_factory(fake_clock: FakeClock) -> Callable[..., RateLimiter]:
    """RateLimiter bound to the fake clock."""

    def _build(limit: int = 3, **kwargs: Any) -> RateLimiter:
        return RateLimiter(limit, clock=fake_clock, sleep=fake_clock.sleep, **kwargs)

    return _build


@pytest.fixture
def transport_factory() -> Callable[..., FakeTransport]:
    """Build a FakeTransport with scripted outcomes."""

    def _build(*outcomes: Optional[BaseException]) -> FakeTransport:
        return FakeTransport(list(outcomes))

    return _build


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()
