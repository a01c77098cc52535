"""Diagnostic logging for pkgview.

Rendered rows go to stdout, so every log record is sent to stderr (and,
optionally, a file) to keep piped CSV/TSV output clean.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "pkgview"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for a pkgview module, e.g. ``get_logger("manifest")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install pkgview's handlers and return the package logger.

    Warnings and errors only by default; ``verbose`` lowers the threshold to
    DEBUG, which reports group and row counts for each pipeline stage. When
    ``log_file`` is given, records are also appended there with timestamps.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # At most one stderr handler and one file handler at any time.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[pkgview] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
