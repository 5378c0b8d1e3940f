"""Custom exceptions for event validation, configuration and delivery."""

from __future__ import annotations

from typing import Any


class NotifierError(Exception):
    """Base exception for appointment-notifier errors."""

    pass


class ConfigurationError(NotifierError):
    """Raised for invalid configuration or structurally invalid input."""

    pass


class MissingRequiredConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    pass


class InvalidEventError(ConfigurationError):
    """Raised when an upstream event lacks required fields or has bad types."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DeliveryError(NotifierError):
    """Base exception for failures reported by a transport."""

    pass


class ThrottleError(DeliveryError):
    """Raised when the remote side rejects a send and asks to retry later."""

    def __init__(
        self,
        retry_after_seconds: float,
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"Throttled, retry after {retry_after_seconds}s")
        self.retry_after_seconds = retry_after_seconds


class TransportError(DeliveryError):
    """Raised for any non-throttling delivery failure (network, bad chat, bad payload)."""

    def __init__(
        self,
        message: str,
        *,
        detail: Any = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.detail = detail
        self.cause = cause
