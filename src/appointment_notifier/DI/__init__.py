"""Dependency injection."""

from appointment_notifier.DI.container import Container

__all__ = ["Container"]
