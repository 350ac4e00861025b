"""Logging utilities for the application.

This module configures structlog once for consistent JSON logging across the application.
"""

import logging
import sys

import structlog


def configure_logger(level: str = "INFO") -> None:
    """Configure structlog with JSON formatting and other processors.

    Processors, in order:
    - Context variables merging
    - Log level addition
    - Stack info rendering
    - Exception info
    - ISO timestamp format
    - JSON rendering

    Args:
        level: Minimum level name to emit, e.g. "INFO" or "DEBUG"
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
