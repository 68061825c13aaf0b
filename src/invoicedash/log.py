"""
Structured logging setup.

Modules get their logger with ``structlog.get_logger(__name__)``; call
``configure_logging()`` once at process start (the CLI does this) to route
structlog through the stdlib logging backend at the configured level.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from invoicedash.config import config


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog for structured logging."""
    level = (level or config.log_level).upper()
    fmt = (fmt or config.log_format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
