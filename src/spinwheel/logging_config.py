"""Logger setup for the ``spinwheel`` namespace."""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "SPINWHEEL_LOG_LEVEL"


def level_from_env(default: int = logging.INFO) -> int:
    """Read ``SPINWHEEL_LOG_LEVEL`` (name or number), falling back to ``default``."""
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configure the package logger.

    Args:
        level: Logging level; defaults to :func:`level_from_env`.
        log_file: Optional path to also write the log to.
    """
    if level is None:
        level = level_from_env()

    logger = logging.getLogger("spinwheel")
    logger.setLevel(level)

    # avoid duplicate handlers when the app is restarted in-process
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")


__all__ = ["LOG_LEVEL_ENV", "level_from_env", "setup_logging"]
