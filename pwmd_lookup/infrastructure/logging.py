from __future__ import annotations

import logging
import os


def _level() -> int:
    # PWMD_DEBUG mirrors the host's lookup debug switch and wins over PWMD_LOG_LEVEL.
    if os.getenv("PWMD_DEBUG", "").strip().lower() in {"1", "true", "yes"}:
        return logging.DEBUG
    name = os.getenv("PWMD_LOG_LEVEL", "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; configures the root handler once if nobody else has."""
    logger = logging.getLogger(name)
    if not logger.handlers and not logging.getLogger().handlers:
        logging.basicConfig(level=_level(), format="%(levelname)s | %(name)s | %(message)s")
    return logger
