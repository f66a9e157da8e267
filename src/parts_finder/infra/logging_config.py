"""
Logging configuration for the application.

``setup_logging`` configures the root logger with a console handler and an
optional file handler. It is idempotent so repeated app construction (tests,
reloads) does not stack handlers.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None, logfile: str | None = None) -> None:
    """Configure root logger.

    Args:
        level: Logging level name (e.g. "DEBUG"); defaults to LOG_LEVEL or INFO
        logfile: Optional path for a file handler; defaults to LOG_FILE
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    level = level or os.getenv("LOG_LEVEL", "INFO")
    logfile = logfile or os.getenv("LOG_FILE")

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
