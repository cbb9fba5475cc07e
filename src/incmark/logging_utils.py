#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging helpers for incmark entry points.

The library itself only creates module-level loggers under the ``incmark``
namespace and never installs handlers; the CLI calls :func:`configure_logging`
to route those records to stderr (and optionally a file).
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LIBRARY_LOGGER_NAME = "incmark"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a numeric level or a level name into a numeric level.

    Unknown names fall back to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the incmark logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that should receive a copy of the log output.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.

    Returns
    -------
    logging.Logger
        The configured ``incmark`` logger.

    """
    level = resolve_log_level(log_level)

    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt=_TRACE_DATE_FORMAT if trace_mode else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger


__all__ = ["LIBRARY_LOGGER_NAME", "configure_logging", "resolve_log_level"]
