"""
Logging for the cartcore package.

Only the ``cartcore`` logger is configured; the root logger and the
application's own handlers are left alone.

Usage:
    from cartcore.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache

PACKAGE_LOGGER = "cartcore"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level() -> int:
    """LOG_LEVEL env var, INFO if unset or unknown."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: int | None = None, stream=None) -> logging.Logger:
    """
    Set the cartcore logger level and give it a stream handler.

    Safe to call again: the existing cartcore handler is replaced rather
    than duplicated. Records still propagate, so an application that
    configures the root logger sees them there as well.

    Args:
        level: Log level; defaults to LOG_LEVEL from the environment
        stream: Handler stream (default: stdout)

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level if level is not None else _get_log_level())

    for handler in [h for h in logger.handlers if getattr(h, "_cartcore", False)]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._cartcore = True
    logger.addHandler(handler)
    return logger


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a cartcore module (pass __name__)."""
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape control characters that could forge log entries (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | int | None, max_length: int = 36) -> str:
    """
    Escape a cart, product or coupon id and cut it to ``max_length``
    (36, a UUID). None or "" becomes "N/A".
    """
    if id_value is None or id_value == "":
        return "N/A"
    return _escape_log_injection(str(id_value))[:max_length]


__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
]
