"""Logging sink for capture runs.

The sink is the ``pooppdf`` logger, built once at process start and passed
explicitly to the capture pipeline. Module loggers (``pooppdf.browser.*``)
are its children, so their diagnostics land in the same file.

Disabled logging is a ``NullHandler`` on a non-propagating logger: every
event is accepted and dropped.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

LOGGER_NAME = "pooppdf"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class _LowercaseLevelFormatter(logging.Formatter):
    """Render levels as ``info`` / ``error`` and UTC timestamps with milliseconds."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        record.levelname = original.lower()
        try:
            return super().format(record)
        finally:
            record.levelname = original

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return f"{super().formatTime(record, datefmt)}.{int(record.msecs):03d}Z"


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(log_file: str | Path | None = None, *, level: str = "INFO") -> logging.Logger:
    """Build the logging sink.

    Args:
        log_file: Append events to this file. ``None`` disables logging.
        level: Minimum level written to the file.

    Returns:
        The ``pooppdf`` logger, ready to hand to the pipeline.
    """
    logger = logging.getLogger(LOGGER_NAME)
    _reset_handlers(logger)
    logger.propagate = False

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(_LowercaseLevelFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def null_logger() -> logging.Logger:
    """A sink that drops every event, detached from the ``pooppdf`` hierarchy."""
    logger = logging.Logger(f"{LOGGER_NAME}.null")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


def flush_logging(logger: logging.Logger) -> None:
    """Flush and close the sink's handlers."""
    for handler in logger.handlers:
        handler.flush()
    _reset_handlers(logger)
