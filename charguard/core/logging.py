"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog


def setup_logging(level: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    Reads from environment variables:
        CHARGUARD_LOG_LEVEL  — log level (default: WARNING)
        CHARGUARD_LOG_FORMAT — console | json (default: console)

    An explicit *level* (e.g. from ``--verbose``) overrides the environment.
    An unknown level name falls back to WARNING with a warning of its own.
    Logs go to stderr; stdout is reserved for the report.
    """
    requested = (level or os.environ.get("CHARGUARD_LOG_LEVEL", "WARNING")).upper()
    # getLevelName returns an int only for registered level names
    log_level = requested if isinstance(logging.getLevelName(requested), int) else "WARNING"
    log_format = os.environ.get("CHARGUARD_LOG_FORMAT", "console").lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "charguard": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {
                "handlers": ["charguard"],
                "level": log_level,
            },
            "loggers": {
                "charguard": {"level": log_level},
            },
        }
    )

    if log_level != requested:
        structlog.get_logger("charguard.logging").warning(
            "logging.unknown_level", requested=requested, using=log_level
        )
