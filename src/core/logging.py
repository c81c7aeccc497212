"""structlog set-up: JSON lines on stdout, one event name per log call with the details as key/value pairs."""

import logging
import sys
from typing import Any

import structlog


def setup_logging(level: int | str = "INFO") -> None:
    logging.basicConfig(format="%(message)s", level=level, stream=sys.stdout)

    if isinstance(level, str):
        min_level = logging.getLevelName(level.upper())
        if not isinstance(min_level, int):
            min_level = logging.INFO
    else:
        min_level = level

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **context: Any) -> Any:
    """Return a structlog logger bound to the provided name (and any extra context)."""
    logger = structlog.get_logger(name or "chess_sessions")
    return logger.bind(**context) if context else logger
