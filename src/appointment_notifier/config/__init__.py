"""Configuration subpackage."""

from appointment_notifier.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    Settings,
    TelegramNotificationSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "Settings",
    "TelegramNotificationSettings",
    "get_settings",
]
