"""Structured logging for Quantalox, built on structlog.

Logs go to stderr so command output on stdout stays clean. Console output is
meant for people; JSON output carries the app name, environment and any bound
account or instrument id on every event.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from quantalox.config import Settings, get_settings

# Bound by services and adapters; rendered first in JSON events
CORRELATION_KEYS = ("account_id", "instrument_id")

_QUIET_LOGGERS = ("httpcore", "httpx")


def _static_fields(**fields: str) -> Processor:
    """Processor adding fields fixed when logging was configured."""

    def processor(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _correlation_first(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    ordered = {k: event_dict.pop(k) for k in CORRELATION_KEYS if k in event_dict}
    ordered.update(event_dict)
    return ordered


def _processors(settings: Settings) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_format == "json":
        return [
            *shared,
            _static_fields(
                app=settings.app_name, environment=settings.environment.value
            ),
            structlog.processors.format_exc_info,
            _correlation_first,
            structlog.processors.JSONRenderer(),
        ]
    return [
        *shared,
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def log_level_for(settings: Settings) -> int:
    """The effective level: debug mode forces DEBUG over log_level."""
    if settings.debug:
        return logging.DEBUG
    return getattr(logging, settings.log_level.value)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Call once at startup, before anything logs.
    """
    if settings is None:
        settings = get_settings()
    level = log_level_for(settings)

    structlog.configure(
        processors=_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    if settings.log_file:
        _add_file_handler(settings.log_file, level)

    # httpx logs every request at INFO
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def _add_file_handler(log_file: Path, level: int) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.getLogger().addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, e.g. ``get_logger(__name__)``."""
    return structlog.stdlib.get_logger(name)


class LogContext:
    """Bind context variables for the duration of a block.

    Example:
        with LogContext(instrument_id="43762"):
            repository.fetch_time_series_data("43762")
    """

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.kwargs)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.kwargs.keys())
