"""
Logging Configuration
=====================

Console logging for the apihttp package, rendered with rich on stderr.

Two loggers matter:

- ``apihttp``: package diagnostics, WARNING by default
- ``apihttp.requests``: request/response lines written by dispatchers built
  from configuration; switched to DEBUG by ``set_request_logging(True)``

Usage:
    from apihttp.core.logger import get_logger

    logger = get_logger(__name__)
    logger.warning("Config file ignored")
"""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_NAME = "apihttp"
REQUEST_LOGGER_NAME = f"{PACKAGE_NAME}.requests"
HANDLER_NAME = "apihttp-console"


def _package_handler(logger: logging.Logger) -> Union[logging.Handler, None]:
    for handler in logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler
    return None


def _ensure_configured() -> logging.Logger:
    """Attach the console handler to the package logger once."""
    logger = logging.getLogger(PACKAGE_NAME)
    if _package_handler(logger) is None:
        # Console resolves sys.stderr at write time, so redirected streams are honoured
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the specified module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A Logger whose records reach the package console handler
    """
    _ensure_configured()
    return logging.getLogger(name)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def set_level(level: Union[int, str]) -> None:
    """
    Set the logging level for the apihttp package.

    Args:
        level: Logging level (e.g., logging.DEBUG or "debug")

    Raises:
        ValueError: If a level name is not recognised.
    """
    _ensure_configured().setLevel(_resolve_level(level))


def set_request_logging(enabled: bool) -> None:
    """
    Let request/response debug lines through regardless of the package level.

    When disabled the request logger inherits the package level again.
    """
    _ensure_configured()
    logging.getLogger(REQUEST_LOGGER_NAME).setLevel(
        logging.DEBUG if enabled else logging.NOTSET
    )
