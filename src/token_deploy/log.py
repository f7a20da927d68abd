"""Structured logging with structlog."""

import logging
import sys
from typing import Protocol

import structlog


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog for command line runs."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)


class LogWriter(Protocol):
    """Sink for the human-readable lines a deployment task emits."""

    def write(self, message: str) -> None: ...


class StructlogWriter:
    """LogWriter that forwards each line to a structlog logger."""

    def __init__(self, logger=None):
        self._logger = logger or get_logger("token_deploy.task")

    def write(self, message: str) -> None:
        self._logger.info(message)
