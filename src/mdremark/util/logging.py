"""Structured logging setup for mdremark."""

import logging
import sys
from typing import Any

import structlog


VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_library_defaults() -> None:
    """
    Quiet defaults for library use: events go through stdlib logging and
    anything below WARNING is dropped, so derivations never write to stdout.

    Left alone when the host application has already configured structlog.
    """
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def reset_logging() -> None:
    """Drop any explicit configuration and return to the library defaults."""
    structlog.reset_defaults()
    configure_library_defaults()


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure structlog for JSON lines on stderr.

    Log levels:
    - DEBUG: per-node derivation cache computations and failures
    - INFO: documents rendered, output files written
    - WARNING: transform step failures
    - ERROR: documents that could not be rendered
    """
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "WARNING"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance, applying library defaults first.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("derivation_computed", node="intro", key="markup")
    """
    configure_library_defaults()
    return structlog.get_logger(name)
