"""Console logging setup for tenant-clock entrypoints.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached by the CLI through ``setup_logger``.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | int, *, default: int = logging.WARNING) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else default


def setup_logger(name: str = "tenant_clock", level: str | int = "WARNING") -> logging.Logger:
    """Configure and return the package logger with one stderr handler."""
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    return logger
