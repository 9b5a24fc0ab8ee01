"""
Logging utilities for weft.

Every module logs through a child of the ``weft`` logger.  Nothing is
printed until the host application calls :func:`setup_logging`, since a
terminal UI owns the screen and stray output would corrupt it.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("weft")
_root_logger.addHandler(logging.NullHandler())


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for weft.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from weft.logging import setup_logging

        # Keep the terminal clean, log layout decisions to a file
        setup_logging("DEBUG", file="weft.log")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    # A file alone is enough; only add a stream handler when asked or
    # when there is nowhere else to write.
    if stream is not None or not file:
        stream_handler = logging.StreamHandler(stream or sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(level)
        _root_logger.addHandler(stream_handler)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "views.linear_layout", "root")

    Returns:
        Logger instance
    """
    if name.startswith("weft."):
        return logging.getLogger(name)
    return logging.getLogger(f"weft.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for weft."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _root_logger.setLevel(level)


def disable() -> None:
    """Disable all logging for weft."""
    _root_logger.disabled = True


def enable() -> None:
    """Re-enable logging for weft."""
    _root_logger.disabled = False
