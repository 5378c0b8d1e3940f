# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire."""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from appointment_notifier.config import Settings, get_settings

# Map standard logging levels to Logfire levels
LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}


def _service_context_processor(settings: Settings) -> Processor:
    """Build a processor that stamps logger name and service identity on each event."""
    app_settings = settings.app

    def _add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        event_dict["app_name"] = app_settings.app_name
        if app_settings.service_name:
            event_dict["service_name"] = app_settings.service_name
        if app_settings.service_version:
            event_dict["service_version"] = app_settings.service_version
        event_dict["environment"] = app_settings.environment
        return event_dict

    return _add_service_context


def _build_handlers(settings: Settings) -> tuple[list[logging.Handler], list[int]]:
    logging_settings = settings.logging
    handlers: list[logging.Handler] = []
    enabled_levels: list[int] = []

    if logging_settings.log_to_console:
        console_level = getattr(logging, logging_settings.console_level.upper(), logging.INFO)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)
        enabled_levels.append(console_level)

    if logging_settings.log_to_file:
        file_level = getattr(logging, logging_settings.file_level.upper(), logging.INFO)
        log_file_path = Path(logging_settings.log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_file_path,
            when=logging_settings.log_file_when,
            interval=logging_settings.log_file_interval,
            backupCount=logging_settings.log_file_backup_count,
            encoding="utf-8",
            utc=logging_settings.log_file_utc,
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)
        enabled_levels.append(file_level)

    return handlers, enabled_levels


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog + Logfire using settings."""
    settings = settings or get_settings()
    app_settings = settings.app
    logging_settings = settings.logging

    handlers, enabled_levels = _build_handlers(settings)
    if handlers:
        logging.basicConfig(level=min(enabled_levels), handlers=handlers, force=True)

    if logging_settings.logfire_enabled:
        logfire_min_level = LOG_LEVEL_TO_LOGFIRE.get(logging_settings.logfire_level, "info")

        logfire.configure(
            token=logging_settings.logfire_token,
            service_name=app_settings.service_name or app_settings.app_name,
            service_version=app_settings.service_version,
            min_level=logfire_min_level,  # type: ignore[arg-type]
            environment=app_settings.environment,
        )

    processors: list[Processor] = [
        # Filter by level first (before processing)
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context_processor(settings),
    ]

    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    # File output is always structured JSON; console uses json_format unless file is also enabled.
    if logging_settings.log_to_console or logging_settings.log_to_file:
        use_json = logging_settings.log_to_file or logging_settings.json_format
        if use_json:
            processors.append(structlog.processors.format_exc_info)
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer()
        )
        processors.append(renderer)  # type: ignore[arg-type]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
