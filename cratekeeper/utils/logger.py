"""
Logging utilities for cratekeeper.

Every cratekeeper module logs through a child of the ``cratekeeper``
logger obtained with :func:`get_logger`. The library never installs an
output handler on its own: an embedding application either calls
:func:`setup_logging` or wires the ``cratekeeper`` logger into its own
configuration.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Dict, Optional, Union

from cratekeeper.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "cratekeeper"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color.

    Colors are keyed by numeric level, so custom levels between the
    standard ones are printed plain.
    """

    COLORS: Dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno) if self.use_color else None
        if color is None or not self._should_use_color():
            return super().format(record)

        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # The record is shared with any other handler
            record.levelname = plain

    @staticmethod
    def _should_use_color() -> bool:
        """Colors only on an interactive stderr outside CI and NO_COLOR."""
        if os.environ.get("NO_COLOR") or os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


def _coerce_level(level: Union[int, str]) -> int:
    """Accept ``logging.DEBUG`` as well as ``"debug"`` or ``"DEBUG"``."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def _build_handler(
    level: int,
    verbose: bool,
    stream: Optional[IO[str]],
) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=not os.environ.get("NO_COLOR"),
        )
    )
    return handler


def _install(handler: logging.Handler, level: int, *, configured: bool) -> None:
    """Replace the handlers of the ``cratekeeper`` logger. Caller holds the lock."""
    global _logging_configured

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    if configured:
        root_logger.propagate = False
    _logging_configured = configured


def setup_logging(
    *,
    level: Union[int, str] = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send cratekeeper log records to a stream.

    Calling it again replaces the previous handler rather than adding a
    second one. Records stop propagating to the root logger so they are
    not printed twice.

    Args:
        level: Numeric level or level name, e.g. ``logging.DEBUG`` or
            ``"debug"``.
        verbose: Use the timestamped format that also shows the logger
            name.
        stream: Output stream; defaults to ``sys.stderr``.

    Raises:
        ValueError: ``level`` is a name ``logging`` does not know.
    """
    numeric = _coerce_level(level)
    handler = _build_handler(numeric, verbose, stream)
    with _lock:
        _install(handler, numeric, configured=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the ``cratekeeper`` namespace.

    ``"checker"`` and ``"cratekeeper.checker"`` name the same logger; an
    empty name gives the namespace root.
    """
    if not name or name == ROOT_LOGGER_NAME:
        qualified = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME + "."):
        qualified = name
    else:
        qualified = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(qualified)

    # Silence "no handlers could be found" until an application configures output
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """True once :func:`setup_logging` ran and :func:`disable_logging` did not."""
    return _logging_configured


def disable_logging() -> None:
    """Drop cratekeeper output handlers and reset the level."""
    with _lock:
        _install(logging.NullHandler(), logging.NOTSET, configured=False)
