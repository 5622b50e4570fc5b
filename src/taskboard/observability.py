"""Structured logging setup.

structlog renders every event with its level, an ISO timestamp and
whatever is bound in contextvars (the request id from
RequestIdMiddleware). JSON lines outside development, coloured console
output in development.

setup_logging() is called once from the app lifespan.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog


def setup_logging(level: str = "INFO", fmt: str = "console", stream: Optional[TextIO] = None) -> None:
    """Configure structlog for the process."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
    )
