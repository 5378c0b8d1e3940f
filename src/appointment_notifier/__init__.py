"""Appointment notifier: rate-limited Telegram delivery of new visa appointment slots."""

from appointment_notifier.config import get_settings
from appointment_notifier.DI import Container
from appointment_notifier.models import NotificationEvent, VisaAppointment
from appointment_notifier.notifications import (
    AppointmentMessageRenderer,
    DeliveryOutcome,
    Dispatcher,
    RateLimiter,
)

__version__ = "0.1.0"
__all__ = [
    "AppointmentMessageRenderer",
    "Container",
    "DeliveryOutcome",
    "Dispatcher",
    "NotificationEvent",
    "RateLimiter",
    "VisaAppointment",
    "get_settings",
]
