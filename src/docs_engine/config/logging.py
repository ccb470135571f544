"""Structured logging setup."""

import logging
import sys

import structlog

from docs_engine.config.settings import get_settings


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Call once at application start. Arguments left as ``None`` come from
    ``log_level`` and ``log_json`` in the environment settings. Library code
    only calls :func:`get_logger` and never configures logging itself.
    """
    settings = get_settings()
    if level is None:
        level = settings.log_level
    if json_output is None:
        json_output = settings.log_json

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger for *name*."""
    return structlog.get_logger(name)
