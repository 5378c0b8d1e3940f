# -*- coding: utf-8 -*-
"""Dispatcher: render -> rate-gate -> send, absorbing throttling with retries."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from enum import Enum
from typing import Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from appointment_notifier.exceptions import ConfigurationError, ThrottleError
from appointment_notifier.models import VisaAppointment
from appointment_notifier.notifications.rate_limiter import RateLimiter
from appointment_notifier.notifications.renderer import AppointmentMessageRenderer
from appointment_notifier.notifications.transports.base import SendOptions, Transport


class DispatchState(str, Enum):
    """Lifecycle of a single notify call."""

    IDLE = "idle"
    RENDERING = "rendering"
    RATE_GATING = "rate_gating"
    SENDING = "sending"
    THROTTLED = "throttled"
    DELIVERED = "delivered"
    FAILED = "failed"


class DeliveryOutcome(str, Enum):
    """Terminal result of a notify call."""

    DELIVERED = "delivered"
    FAILED = "failed"
    THROTTLE_EXHAUSTED = "throttle_exhausted"


class Dispatcher:
    """Deliver appointment notifications to one fixed destination.

    Each call consumes one unit of the local rate budget. Throttling responses
    are retried after the server-issued delay without consuming more budget.
    With ``max_throttle_retries=None`` the retry loop is unbounded and a
    destination that keeps throttling blocks the caller indefinitely.
    A throttling response without a positive delay is reported as a failure.
    """

    def __init__(
        self,
        transport: Transport,
        rate_limiter: RateLimiter,
        destination: str,
        *,
        renderer: Optional[AppointmentMessageRenderer] = None,
        max_throttle_retries: Optional[int] = None,
        options: Optional[SendOptions] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        if not destination:
            raise ConfigurationError("destination is required")
        if max_throttle_retries is not None and max_throttle_retries < 1:
            raise ConfigurationError("max_throttle_retries must be >= 1 or None")
        self._transport = transport
        self._rate_limiter = rate_limiter
        self._destination = destination
        self._renderer = renderer or AppointmentMessageRenderer()
        self._max_throttle_retries = max_throttle_retries
        self._options = options or SendOptions()
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def destination(self) -> str:
        return self._destination

    async def initialize(self) -> None:
        """Initialize the transport and start the rate window tick."""
        await self._transport.initialize()
        self._rate_limiter.start()
        self._logger.debug(
            "dispatcher_initialized",
            rate_limit=self._rate_limiter.limit,
            max_throttle_retries=self._max_throttle_retries,
        )

    async def shutdown(self) -> None:
        """Stop the rate window tick and close the transport.

        In-flight notify calls are not cancelled; drain them first.
        """
        await self._rate_limiter.shutdown()
        await self._transport.shutdown()
        self._logger.debug("dispatcher_shutdown_complete")

    async def notify(self, event: VisaAppointment) -> bool:
        """Deliver one notification. True when delivered, False on a delivery failure."""
        return await self.deliver(event) is DeliveryOutcome.DELIVERED

    async def notify_many(self, events: Iterable[VisaAppointment]) -> list[bool]:
        """Deliver events one after another, preserving order."""
        return [await self.notify(event) for event in events]

    async def deliver(self, event: VisaAppointment) -> DeliveryOutcome:
        """Run one notification through the dispatch state machine."""
        with bound_contextvars(event_id=event.id, destination=self._destination):
            self._transition(DispatchState.RENDERING)
            text = self._renderer.render(event)

            self._transition(DispatchState.RATE_GATING)
            await self._rate_limiter.acquire()

            throttled = 0
            while True:
                self._transition(DispatchState.SENDING, attempt=throttled + 1)
                try:
                    await self._transport.send(self._destination, text, self._options)
                except ThrottleError as exc:
                    if not exc.retry_after_seconds or exc.retry_after_seconds <= 0:
                        self._logger.error(
                            "dispatch_throttled_without_delay",
                            retry_after_seconds=exc.retry_after_seconds,
                        )
                        self._transition(DispatchState.FAILED)
                        return DeliveryOutcome.FAILED
                    throttled += 1
                    if (
                        self._max_throttle_retries is not None
                        and throttled > self._max_throttle_retries
                    ):
                        self._logger.error(
                            "dispatch_throttle_retries_exhausted",
                            throttled_attempts=throttled,
                            max_throttle_retries=self._max_throttle_retries,
                        )
                        self._transition(DispatchState.FAILED)
                        return DeliveryOutcome.THROTTLE_EXHAUSTED
                    self._transition(DispatchState.THROTTLED)
                    self._logger.warning(
                        "dispatch_throttled_retry_after",
                        retry_after_seconds=exc.retry_after_seconds,
                        throttled_attempts=throttled,
                    )
                    await self._sleep(exc.retry_after_seconds)
                    continue
                except Exception as exc:
                    self._logger.error(
                        "dispatch_send_failed",
                        error_type=type(exc).__name__,
                        error_message=str(exc),
                        exc_info=True,
                    )
                    self._transition(DispatchState.FAILED)
                    return DeliveryOutcome.FAILED

                self._transition(DispatchState.DELIVERED)
                self._logger.info("dispatch_delivered", throttled_attempts=throttled)
                return DeliveryOutcome.DELIVERED

    def _transition(self, state: DispatchState, **fields: Any) -> None:
        self._logger.debug("dispatch_state", state=state.value, **fields)
