"""Delivery transports."""

from appointment_notifier.notifications.transports.base import SendOptions, Transport
from appointment_notifier.notifications.transports.console import ConsoleTransport
from appointment_notifier.notifications.transports.telegram import TelegramTransport

__all__ = [
    "ConsoleTransport",
    "SendOptions",
    "TelegramTransport",
    "Transport",
]
