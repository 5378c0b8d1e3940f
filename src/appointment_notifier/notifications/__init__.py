"""Notification subsystem."""

from appointment_notifier.notifications.dispatcher import (
    DeliveryOutcome,
    Dispatcher,
    DispatchState,
)
from appointment_notifier.notifications.rate_limiter import RateLimiter, RateWindow
from appointment_notifier.notifications.renderer import (
    AppointmentMessageRenderer,
    escape_html,
)
from appointment_notifier.notifications.transports import (
    ConsoleTransport,
    SendOptions,
    TelegramTransport,
    Transport,
)

__all__ = [
    "AppointmentMessageRenderer",
    "ConsoleTransport",
    "DeliveryOutcome",
    "DispatchState",
    "Dispatcher",
    "RateLimiter",
    "RateWindow",
    "SendOptions",
    "TelegramTransport",
    "Transport",
    "escape_html",
]
