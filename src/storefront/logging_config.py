"""Structured logging configuration.

All modules obtain their logger with ``structlog.get_logger(__name__)``.
``configure_logging`` is called once when the application is created and
routes structlog events through the standard library ``logging`` module.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(log_level: str = "info", log_format: str = "console") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Minimum level name (debug, info, warning, error)
        log_format: "console" for human-readable lines, "json" for one JSON object per event
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )


def log(level: str, message: str, **fields: Any) -> None:
    """Emit a single event through the application logger.

    Args:
        level: Level name, e.g. "info" or "error"
        message: The event message
        **fields: Extra key/value context attached to the event
    """
    logger = structlog.get_logger("storefront")
    getattr(logger, level.lower())(message, **fields)
