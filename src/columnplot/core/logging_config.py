# ColumnPlot
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Logging setup for the ``columnplot`` package logger."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "columnplot"
LOG_FILENAME = "columnplot.log"

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    console_level: int = logging.INFO,
    log_dir: Path | str | None = None,
    *,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
) -> logging.Logger:
    """Attach handlers to the package logger and return it.

    A console handler is always installed. When ``log_dir`` is given, DEBUG
    and above also go to a rotating ``columnplot.log`` in that directory.
    Calling this again replaces the handlers from the previous call.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILENAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    # Stream plumbing logs every emission
    logging.getLogger(f"{PACKAGE_LOGGER}.core.streams").setLevel(logging.INFO)

    logger.debug("Logging configured (console=%s, log_dir=%s)", logging.getLevelName(console_level), log_dir)
    return logger
