"""structlog setup shared by the CLI and the web app."""

from __future__ import annotations

import logging
import sys

import structlog

_LEVELS = {
    # "none" still lets critical problems through
    "none": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str = "warning") -> int:
    """Route structlog output to stderr at the named level. Returns the level."""
    lowest_level = _LEVELS.get(str(level).lower(), logging.WARNING)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(lowest_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    return lowest_level
