"""structlog setup for applications embedding the codec.

The library modules only call ``structlog.get_logger()``; configuring
output is left to the application.  :func:`configure_logging` applies the
console rendering used during development.
"""

from __future__ import annotations

import logging

import structlog

LOG_LEVELS: frozenset[str] = frozenset(
    {"debug", "info", "warning", "error", "critical"}
)


def configure_logging(level: str = "info", *, colors: bool = True) -> None:
    """Configure structlog console output filtered at *level*."""
    if level.lower() not in LOG_LEVELS:
        msg = f"invalid log level: {level!r}"
        raise ValueError(msg)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[level.upper()]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
