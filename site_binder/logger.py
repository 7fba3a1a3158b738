"""Logging setup for SiteBinder.

All modules log through the ``SiteBinder`` logger. Crawl progress
(``Visiting <url>``, ``Error scraping <url>: <cause>``) is user-facing output,
so the console handler writes to stdout and the CLI switches it to
:data:`PLAIN_FORMAT`. An optional log file keeps timestamps regardless.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
PLAIN_FORMAT: Final[str] = "%(message)s"
LOGGER_NAME: Final[str] = "SiteBinder"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

Level = Union[int, str]


def _console(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _logfile(path: Path, fmt: str) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    # a bare message is useless in a file
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT if fmt == PLAIN_FORMAT else fmt))
    return handler


def configure(
    *,
    level: Level = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach a stdout handler (and a rotating file handler if *log_file* is set).

    Old handlers are closed and dropped unless *replace_handlers* is False.
    The logger does not propagate to the root logger.
    """
    site_logger = logging.getLogger(LOGGER_NAME)
    site_logger.setLevel(level)

    if replace_handlers:
        for handler in list(site_logger.handlers):
            site_logger.removeHandler(handler)
            handler.close()

    site_logger.addHandler(_console(log_format))
    if log_file is not None:
        site_logger.addHandler(_logfile(Path(log_file), log_format))

    site_logger.propagate = False
    return site_logger


def init_logging(
    level: Level = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "DEFAULT_FORMAT", "PLAIN_FORMAT", "LOGGER_NAME"]
