# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TELEGRAM__RATE_LIMIT.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "appointment-notifier"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/appointment_notifier.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 14
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class TelegramNotificationSettings(BaseSettings):
    """Telegram delivery (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    bot_token: Optional[str] = Field(default=None, description="Telegram bot token.")
    channel_id: Optional[str] = Field(
        default=None,
        description="Destination channel id or @username.",
    )
    rate_limit: int = Field(
        default=20,
        ge=1,
        le=120,
        description="Maximum sends per rolling 60-second window.",
    )
    max_throttle_retries: Optional[int] = Field(
        default=10,
        ge=1,
        description=(
            "Re-sends allowed after retry_after responses. "
            "None (env value 'null') means unbounded."
        ),
    )
    timezone: str = Field(
        default="Europe/Istanbul",
        description="IANA zone used to format the last-checked timestamp.",
    )
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console (dry-run) delivery settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TELEGRAM__CHANNEL_ID.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        # TELEGRAM__MAX_THROTTLE_RETRIES=null selects unbounded retries.
        env_parse_none_str="null",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides are passed as nested dicts, e.g.:
        - from_env(telegram={"rate_limit": 10})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from appointment_notifier.config import get_settings

        settings = get_settings()
        quota = settings.telegram.rate_limit
    """
    return Settings()
