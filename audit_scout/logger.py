# === FILE: audit_scout/logger.py ===
"""Logging setup for **AuditScout**.

All modules log under the ``AuditScout`` namespace (``AuditScout.fetcher``,
``AuditScout.render`` ...), so one call to :func:`configure` controls the whole
crawler::

      from audit_scout.logger import logger
      logger.info("Crawl started")

Records go to stderr, which keeps stdout free for the JSON the CLI prints.
A rotating log file can be added on top.
"""
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "AuditScout"
LEVEL_ENV: Final[str] = "AUDIT_SCOUT_LOG_LEVEL"

# third-party loggers that are chatty at INFO while crawling
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("aiohttp.access", "aiohttp.client", "aiohttp.internal")

_LevelT = Union[int, str]


def _rotating_file(file: Path | str, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=2 * 1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def configure(
    *,
    level: _LevelT | None = None,
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger.

    Parameters
    ----------
    level
        Numeric or textual level; defaults to ``$AUDIT_SCOUT_LOG_LEVEL`` or INFO.
    log_file
        Optional path of a rotating log file, in addition to stderr.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        Drop handlers installed by an earlier call.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV, "INFO").upper()

    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(log_format)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    lg.addHandler(console)
    if log_file is not None:
        lg.addHandler(_rotating_file(log_file, formatter))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT | None = None,
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Entry used by the CLI before any command runs."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
