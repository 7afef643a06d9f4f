"""Logging utilities for trgchecks runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "trgchecks"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ComponentFormatter(logging.Formatter):
    """Console formatter that tags each line with the emitting component.

    `trgchecks.github.client` is shown as `[github.client]`; the root logger as `[trgchecks]`.
    """

    def __init__(self) -> None:
        super().__init__("[%(component)s] %(levelname)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        prefix = f"{_LOGGER_NAME}."
        record.component = (
            record.name[len(prefix):] if record.name.startswith(prefix) else record.name
        )
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the trgchecks hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route trgchecks records to the console and, optionally, a log file.

    Check runs log per repository and per guideline at DEBUG; `verbose` shows them.
    The file sink always records the full logger name with timestamps.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Service mode reconfigures per process; drop and close earlier sinks.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(_ComponentFormatter())
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
