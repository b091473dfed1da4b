"""Structured logging setup built on structlog."""

import logging
import sys

import structlog

from route_resolver.config import get_settings

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(level: str | None = None, json_format: bool | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Debug mode renders human-readable console lines; otherwise every event
    is emitted as one JSON object per line on stderr.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    default_level = _LEVEL_MAP.get(level_name, logging.INFO)
    if json_format is None:
        json_format = not settings.debug

    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(level=default_level, stream=sys.stderr, format="%(message)s")


def get_logger(name: str | None = None) -> structlog.types.FilteringBoundLogger:
    """Get a structlog logger bound to a module name."""
    return structlog.get_logger(name)
