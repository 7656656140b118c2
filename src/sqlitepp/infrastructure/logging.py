"""Structured logging configuration.

All sqlitepp events go through structlog. Events that carry SQL text
(``sql``, ``discarded``) are shortened to one line so that assembled
statements with long literals do not flood the log.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

MAX_SQL_LOG_LENGTH = 200

_SQL_KEYS = ("sql", "discarded")


def shorten_sql(sql: str, limit: int = MAX_SQL_LOG_LENGTH) -> str:
    """Collapse whitespace and cut ``sql`` to at most ``limit`` characters."""
    text = " ".join(sql.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _shorten_sql_fields(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    for key in _SQL_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = shorten_sql(value)
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_format: str = "console",
) -> None:
    """
    Set up structured logging with structlog.

    Events are rendered by structlog and handed to the standard library
    logger named after the module, so the output stream is resolved by the
    logging handlers at write time (stderr by default). Programs printing
    results on stdout keep a clean stream.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    log_level = getattr(logging, level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
    logging.getLogger("sqlitepp").setLevel(log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _shorten_sql_fields,
        structlog.processors.format_exc_info,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
