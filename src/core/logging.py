"""Structured logging configuration using structlog.

Every module logs through `structlog.get_logger(__name__)` with snake_case
event names and keyword context (service, status, reason). Output goes to
stderr so that `extvocab lookup --json` keeps stdout clean.
"""

from __future__ import annotations

import logging
import sys

import structlog

from core.config import AppSettings


def configure_logging(settings: AppSettings | None = None) -> None:
    """Configure stdlib logging and structlog for the application."""

    settings = settings or AppSettings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.log_json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None):
    """Get a structured logger instance (usually `get_logger(__name__)`)."""

    return structlog.get_logger(name)
