"""
Logging for celltui.

Every module logs through a child of the ``celltui`` logger obtained with
:func:`get_logger`.  Nothing is printed until :func:`setup_logging` is
called.  While a terminal application runs it owns stdout and the visible
screen, so interactive programs should log to a file.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE = "celltui"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_root_logger = logging.getLogger(PACKAGE)
_root_logger.addHandler(logging.NullHandler())


class _Gate(logging.Filter):
    """Handler filter toggled by disable() and enable()."""

    def __init__(self) -> None:
        super().__init__()
        self.open = True

    def filter(self, record: logging.LogRecord) -> bool:
        return self.open


_gate = _Gate()


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Attach handlers to the ``celltui`` logger, replacing earlier ones.

    Args:
        level: Level name or number; unknown names fall back to INFO
        format: ``logging.Formatter`` format string
        stream: Stream to log to; defaults to stderr unless *file* is given
        file: Path of a log file, appended to

    Example:
        setup_logging("DEBUG", file="celltui.log")
    """
    numeric = _coerce_level(level)
    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    handlers: list[logging.Handler] = []
    if stream is not None or not file:
        handlers.append(logging.StreamHandler(stream or sys.stderr))
    if file:
        handlers.append(logging.FileHandler(file))

    for old in list(_root_logger.handlers):
        _root_logger.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric)
        handler.addFilter(_gate)
        _root_logger.addHandler(handler)
    _root_logger.setLevel(numeric)


def get_logger(name: str) -> logging.Logger:
    """Logger for a submodule, e.g. ``get_logger("screen.terminal")``."""
    if name == PACKAGE or name.startswith(PACKAGE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE}.{name}")


def set_level(level: str | int) -> None:
    _root_logger.setLevel(_coerce_level(level))


def disable() -> None:
    """Silence every celltui logger, children included."""
    _gate.open = False


def enable() -> None:
    _gate.open = True
