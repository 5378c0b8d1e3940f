"""Exceptions subpackage."""

from appointment_notifier.exceptions.exceptions import (
    ConfigurationError,
    DeliveryError,
    InvalidEventError,
    MissingRequiredConfigError,
    NotifierError,
    ThrottleError,
    TransportError,
)

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "InvalidEventError",
    "MissingRequiredConfigError",
    "NotifierError",
    "ThrottleError",
    "TransportError",
]
