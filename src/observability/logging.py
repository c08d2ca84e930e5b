"""Structured logging with correlation ID propagation.

Usage:
    from src.observability.logging import get_logger, configure_logging

    # Configure at application startup
    configure_logging(level="INFO")

    # Get logger with component context
    logger = get_logger("aggregator")
    logger.info("search_fanout_started", words=2)

    # Output includes correlation_id automatically:
    # {"event": "search_fanout_started", "words": 2,
    #  "correlation_id": "abc-123", "component": "aggregator", ...}
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger

from src.models.config import LoggingSettings
from src.observability.context import get_correlation_id

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def add_correlation_id_processor(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds correlation_id to log entries.

    Uses "none" when no search request is in progress.
    """
    corr_id = get_correlation_id()
    event_dict["correlation_id"] = corr_id if corr_id else "none"
    return event_dict


def _level_number(level: str) -> int:
    name = level.upper()
    return getattr(logging, name) if name in _LEVELS else logging.INFO


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Looked up on every call so redirected streams (pytest, CliRunner) are honoured
    return structlog.PrintLogger(file=sys.stderr)


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Route structlog output to stderr with correlation IDs attached.

    stdout stays reserved for command output (e.g. ``search --json``).

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Unknown names fall
            back to INFO.
        json_output: JSON lines when True, human-readable console otherwise.
        add_timestamp: Prefix every entry with an ISO timestamp.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id_processor,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(_renderer(json_output))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        # Re-configuration (CLI -> loaded config) must reach existing loggers
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: LoggingSettings) -> None:
    """Apply the ``logging`` section of a loaded AppConfig."""
    configure_logging(level=settings.level, json_output=settings.json_output)


def get_logger(
    component: Optional[str] = None,
    **initial_context: Any,
) -> Any:
    """Get a structured logger with optional component context.

    Args:
        component: Optional component/service name to include in logs
        **initial_context: Additional context to bind to all log entries

    Returns:
        A lazy structlog logger. It is safe to create at import time:
        configuration is resolved on first use, not on creation.
    """
    if component:
        initial_context["component"] = component
    return structlog.get_logger(**initial_context)


def bind_context(**context: Any) -> None:
    """Bind context to all subsequent log entries in the current context.

    Example:
        bind_context(client_ip="10.0.0.1")
        logger.info("search_received")  # Includes client_ip
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Clear all bound context. Call at request boundaries."""
    structlog.contextvars.clear_contextvars()
