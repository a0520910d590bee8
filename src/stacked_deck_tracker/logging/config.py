# -*- coding: utf-8 -*-
"""structlog setup (stdlib handlers, optional Logfire) for the tracker process."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

import logfire
import structlog
from structlog.types import EventDict, Processor

from stacked_deck_tracker.config import AppSettings, LoggingSettings, Settings, get_settings
from stacked_deck_tracker.utils import mask_path

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

PATH_FIELDS = ("log_path",)
"""Event fields holding client log paths (they usually contain the user's home dir)."""


def mask_path_fields(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace client log paths with their last two components."""
    for key in PATH_FIELDS:
        if key in event_dict and event_dict[key] is not None:
            event_dict[key] = mask_path(str(event_dict[key]))
    return event_dict


def _service_context(app_settings: AppSettings) -> Processor:
    """Processor adding logger name and app/service/environment fields."""

    def _add(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        event_dict["app_name"] = app_settings.app_name
        if app_settings.service_name:
            event_dict["service_name"] = app_settings.service_name
        if app_settings.service_version:
            event_dict["service_version"] = app_settings.service_version
        event_dict["environment"] = app_settings.environment
        return event_dict

    return _add


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _plain(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _build_handlers(logging_settings: LoggingSettings) -> list[logging.Handler]:
    """Console and/or rotating file handler; structlog renders, stdlib only writes."""
    handlers: list[logging.Handler] = []
    if logging_settings.log_to_console:
        handlers.append(_plain(logging.StreamHandler(), _level(logging_settings.console_level)))
    if logging_settings.log_to_file:
        path = Path(logging_settings.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            path,
            when=logging_settings.log_file_when,
            interval=logging_settings.log_file_interval,
            backupCount=logging_settings.log_file_backup_count,
            encoding="utf-8",
            utc=logging_settings.log_file_utc,
        )
        handlers.append(_plain(rotating, _level(logging_settings.file_level)))
    return handlers


def _configure_logfire(settings: Settings) -> None:
    app_settings = settings.app
    logfire.configure(
        token=settings.logging.logfire_token,
        service_name=app_settings.service_name or app_settings.app_name,
        service_version=app_settings.service_version,
        min_level=LOG_LEVEL_TO_LOGFIRE.get(settings.logging.logfire_level, "info"),  # type: ignore[arg-type]
        environment=app_settings.environment,
    )


def _renderer(logging_settings: LoggingSettings) -> Processor | None:
    """JSON whenever a file is written (or json_format is set), console colors otherwise."""
    if not (logging_settings.log_to_console or logging_settings.log_to_file):
        return None
    if logging_settings.log_to_file or logging_settings.json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog (and Logfire when enabled) from settings. Call once at startup."""
    settings = settings or get_settings()
    logging_settings = settings.logging

    handlers = _build_handlers(logging_settings)
    if handlers:
        logging.basicConfig(level=min(h.level for h in handlers), handlers=handlers)

    if logging_settings.logfire_enabled:
        _configure_logfire(settings)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings.app),
    ]
    if logging_settings.mask_log_paths:
        processors.append(mask_path_fields)
    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    renderer = _renderer(logging_settings)
    if renderer is not None:
        processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
