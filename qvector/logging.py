"""Logging utilities for qvector.

All library loggers live under the ``qvector`` namespace, write to stderr and
do not propagate to the root logger, so applications embedding the simulator
keep control of their own logging tree.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Level applied to loggers created from now on
_DEFAULT_LEVEL = logging.WARNING

_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


def _make_handler(
    level: int,
    stream: Optional[IO[str]] = None,
    format_string: str = _DEFAULT_FORMAT,
) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached so repeated calls never stack duplicate handlers.

    Args:
        name: Logger name, typically ``__name__``. Names outside the
            ``qvector`` namespace are prefixed with ``qvector.``. If None,
            the package logger is returned.

    Returns:
        Configured logger instance.

    Example:
        >>> from qvector.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("expanding gate on qubit %d", 2)
    """
    if name is None or name == "qvector":
        logger_name = "qvector"
    elif name.startswith("qvector."):
        logger_name = name
    else:
        logger_name = f"qvector.{name}"

    cached = _loggers.get(logger_name)
    if cached is not None:
        return cached

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for every qvector logger, present and future.

    Args:
        level: Numeric level (``logging.DEBUG``...) or its name
            (``"DEBUG"``, ``"info"``...). Unknown names fall back to WARNING.
    """
    global _DEFAULT_LEVEL
    resolved = _resolve_level(level)

    for logger in _loggers.values():
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)

    _DEFAULT_LEVEL = resolved


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Reconfigure the handlers of all qvector loggers.

    Existing handlers are replaced by a single stream handler. Meant to be
    called once at application startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses
            ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).
    """
    global _DEFAULT_LEVEL
    resolved = _resolve_level(level)
    fmt = format_string if format_string is not None else _DEFAULT_FORMAT

    for logger in _loggers.values():
        logger.setLevel(resolved)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(resolved, stream, fmt))

    _DEFAULT_LEVEL = resolved
