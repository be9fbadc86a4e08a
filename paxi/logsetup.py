"""Logging setup for the package: severity levels and log file output."""

from __future__ import annotations

import logging
import os
import sys
from enum import IntEnum
from pathlib import Path

LOGGER_NAME = "paxi"

_FORMAT = "[%(levelname)s] %(asctime)s.%(msecs)03d %(filename)s:%(lineno)d: %(message)s"
_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

_installed: list[logging.Handler] = []


class Severity(IntEnum):
    """Log severity; messages at or above the threshold are written."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def level(self) -> int:
        """The matching level of the logging module."""
        return getattr(logging, self.name)


def parse_severity(value: str) -> Severity:
    """Return the severity named by ``value``, INFO when none matches."""
    return Severity.__members__.get(value.upper(), Severity.INFO)


def get_logger() -> logging.Logger:
    """Return the package's root logger."""
    return logging.getLogger(LOGGER_NAME)


def setup(log_dir: str | os.PathLike = "", level: Severity | str = Severity.INFO) -> Path:
    """Send all logs to a per-process file and warnings also to stderr.

    Returns the path of the log file.
    """
    severity = level if isinstance(level, Severity) else parse_severity(str(level))
    logger = get_logger()

    while _installed:
        handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()

    program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else LOGGER_NAME
    path = Path(log_dir or ".") / f"{program}.{os.getpid()}.log"

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
    file_handler = logging.FileHandler(path, mode="w")
    file_handler.setFormatter(formatter)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    for handler in (file_handler, stderr_handler):
        logger.addHandler(handler)
        _installed.append(handler)
    logger.setLevel(severity.level)
    return path