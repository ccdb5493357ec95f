"""Logging configuration for the vendorpatch namespace."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from vendorpatch.core.constants import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def resolve_level(configured: str, verbose: bool = False) -> int:
    """Pick the effective log level.

    Priority: ``verbose`` flag, then the ``VENDORPATCH_LOG`` environment
    variable, then the configured level. Unknown names fall back to WARNING.
    """
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV) or configured
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int = logging.WARNING, log_file: Path | None = None) -> None:
    """Configure the ``vendorpatch`` namespace logger.

    Logs go to stderr and, when ``log_file`` is given, to a rotating file
    (max 5MB per file, 3 backup files).

    Args:
        level: Logging level for every handler.
        log_file: Optional path of a log file. Its directory is created.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    pkg_logger = logging.getLogger("vendorpatch")
    pkg_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reconfigure
    pkg_logger.handlers.clear()
    pkg_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        pkg_logger.addHandler(file_handler)

    # Don't propagate to root logger
    pkg_logger.propagate = False

    logger.debug("Logging configured: level=%s, file=%s", logging.getLevelName(level), log_file)
