"""Structured logging for the classifiers.

Works for local development (console output) and pipeline deployments
(JSON structured logs).

Usage:
    from fingerprint_typing.core.logging import get_logger, configure_logging

    # Configure at startup
    configure_logging(log_level="DEBUG", log_format="console")

    # Get logger in any module
    logger = get_logger(__name__)

    # Log with structured context
    logger.debug("special_type_inferred", field="Field 3 'users.email'")

    # Use context managers for automatic context propagation
    with log_context(run_id="run-123", table="users"):
        logger.info("classifying_fields", fields=12)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.typing import FilteringBoundLogger

from fingerprint_typing.core.config import get_settings

# Context variables for correlation
_run_context: ContextVar[dict[str, Any] | None] = ContextVar("run_context", default=None)


def _add_run_context(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor to add run context to log events."""
    context = _run_context.get()
    if context:
        for key, value in context.items():
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    show_timestamps: bool = True,
    color: bool = True,
    cache_logger_on_first_use: bool = True,
) -> None:
    """Configure structured logging for the host application.

    Importing the package configures nothing; the host (or a test fixture)
    calls this once at startup. Handlers already on the root logger are kept.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR); defaults to settings
        log_format: "console" for development, "json" for pipelines; defaults to settings
        show_timestamps: Whether to add ISO timestamps
        color: Whether to use colors in console mode
        cache_logger_on_first_use: Freeze loggers after their first call.
            Tests turn this off so structlog.testing can swap processors.
    """
    settings = get_settings()
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_run_context,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if show_timestamps:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=color,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    level = getattr(logging, log_level.upper())
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )

    # Also configure stdlib logging for libraries
    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Bound structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))


class LogContext:
    """Context manager for adding context to logs within a scope."""

    def __init__(self, **context: Any):
        self.context = context
        self.token: Any = None

    def __enter__(self) -> LogContext:
        current = _run_context.get() or {}
        self.token = _run_context.set({**current, **self.context})
        return self

    def __exit__(self, *args: Any) -> None:
        if self.token:
            _run_context.reset(self.token)


def log_context(**context: Any) -> LogContext:
    """Create a context manager for scoped logging context.

    Usage:
        with log_context(run_id="abc", table="users"):
            logger.info("processing")  # Will include run_id and table
    """
    return LogContext(**context)

