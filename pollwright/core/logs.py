"""Logging setup for the pollwright package logger."""

import logging
from enum import Enum
from typing import Any, Optional

from .config import get_config


PACKAGE_LOGGER = "pollwright"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _get_log_level_string(log_level: Any) -> str:
    """Convert log level to string for use with logging module.

    Args:
        log_level: Log level value (can be Enum, string, or int).

    Returns:
        String representation of the log level.
    """
    if isinstance(log_level, Enum):
        return log_level.value.upper() if isinstance(log_level.value, str) else log_level.name
    if isinstance(log_level, str):
        return log_level.upper()
    return logging.getLevelName(log_level)


def configure_logging(level: Optional[Any] = None) -> logging.Logger:
    """
    Configure the package logger.

    Without an explicit level, uses DEBUG when the config's ``debug`` flag is
    set and the configured ``log_level`` otherwise. A stream handler is
    attached only once.

    Returns:
        The package logger
    """
    if level is None:
        config = get_config()
        level = "DEBUG" if config.debug else config.log_level

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_get_log_level_string(level))

    if not any(getattr(h, "_pollwright", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pollwright = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)

    return package_logger
