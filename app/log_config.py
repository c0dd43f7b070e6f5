"""
Logging setup for the Listly data-access core.
"""

import logging
from typing import Optional

from app.config import Settings

ROOT_LOGGER = "listly"


def configure_logging(settings: Settings, force: bool = False) -> logging.Logger:
    """Apply the configured level and format and return the package root logger."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.log_format, force=force)
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below the ``listly`` namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
