"""Logging helpers for qkron.

All library loggers live under the ``qkron.`` namespace and write to stderr
through a single handler each.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = logging.WARNING
_format = _DEFAULT_FORMAT
_stream: Optional[IO[str]] = None

_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached so repeated calls never stack handlers. Pass
    ``__name__`` from the calling module.

    Args:
        name: Logger name. ``None`` returns the package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from qkron.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("applying gate")
    """
    if name is None:
        name = "qkron"

    if name == "qkron" or name.startswith("qkron."):
        logger_name = name
    else:
        logger_name = f"qkron.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(_stream or sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_format))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every qkron logger, including ones created later.

    Args:
        level: ``logging.DEBUG`` etc., or a level name such as ``"INFO"``.
    """
    global _DEFAULT_LEVEL
    level = _resolve_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Reconfigure every qkron logger.

    Existing handlers are replaced by one ``StreamHandler`` on ``stream``;
    loggers created afterwards use the same settings.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. Defaults to
            ``[%(levelname)s] %(name)s: %(message)s``.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL, _format, _stream
    level = _resolve_level(level)

    _format = format_string or _DEFAULT_FORMAT
    _stream = stream
    if stream is None:
        stream = sys.stderr
    formatter = logging.Formatter(_format)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level
