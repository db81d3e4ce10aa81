"""Logging setup for lazytree.

The browser owns the terminal while it runs, so records never go to stderr:
they go to a log file when one is configured and are dropped otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "lazytree"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_file: Path | None, level: str = "WARNING") -> logging.Logger:
    """Attach a file handler (or a null handler) to the package logger.

    Previously attached handlers are closed and replaced, so calling this
    twice does not duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False
    return logger
