"""Centralized logging configuration for grocify.

Usage:
    from grocify.utils.logging_config import get_logger
    logger = get_logger(__name__)

Environment variables:
    GROCIFY_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: WARNING
"""

import logging
import os
from typing import Optional

import click

LOG_LEVEL_ENV = "GROCIFY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING
ROOT_LOGGER_NAME = "grocify"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


class ClickEchoHandler(logging.Handler):
    """Write records to whatever stderr click currently points at."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(level: Optional[int] = None) -> None:
    """Attach a stderr handler to the grocify logger namespace.

    Args:
        level: Log level to use. If None, reads GROCIFY_LOG_LEVEL or falls back
            to DEFAULT_LOG_LEVEL.
    """
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        env_level = os.environ.get(LOG_LEVEL_ENV, "").upper()
        level = _LEVELS.get(env_level, DEFAULT_LOG_LEVEL)

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the grocify namespace.

    Args:
        name: Module name, typically __name__

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: int) -> None:
    """Change the log level at runtime."""
    configure_logging(level)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT))
