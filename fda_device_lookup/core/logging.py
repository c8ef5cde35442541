"""Structured logging for the resolver.

Events go to stderr as JSON lines so that the CLI can keep stdout for the
resolution payload.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping

import structlog

from .config import Settings, get_settings

COMPONENT = "fda-device-lookup"
_NOISY_LOGGERS = ("httpx", "httpcore")


def _add_component(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    event_dict.setdefault("component", COMPONENT)
    return event_dict


def configure_logging(level: str | None = None, *, settings: Settings | None = None) -> None:
    """Route stdlib and structlog output to stderr at the configured level."""
    name = (level or (settings or get_settings()).log_level).upper()
    numeric_level = logging.getLevelName(name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s", level=numeric_level)
    logging.getLogger().setLevel(numeric_level)
    # httpx logs every request at INFO; the resolver already records each search.
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)

    structlog.configure(
        processors=[
            _add_component,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger tagged with ``logger_name``.

    Output follows the structlog configuration active at call time; call :func:`configure_logging` first to get JSON on stderr.
    """
    return structlog.get_logger(name, logger_name=name)
