"""
Logging configuration using structlog for structured, JSON-based logging.

Logs go to stderr so that command output on stdout (tables, JSON) stays
machine-readable. Modules that use the standard library ``logging`` module
are routed to the same stream at the same level.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(log_level: str = "WARNING") -> None:
    """Configure structured logging with JSON output on stderr.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s", force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a logger instance.

    Args:
        name: Optional logger name (typically __name__ from calling module)

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("credential_stored", location="keyring")
    """
    return structlog.get_logger(name)
