"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and logging setup.
"""

from app.config import Settings, Environment, get_settings
from app.exceptions import (
    ListlyError,
    ValidationError,
    NotFoundError,
    ConflictError,
    ForbiddenError,
    TransactionStateError,
)
from app.log_config import configure_logging, get_logger

__all__ = [
    "Settings",
    "Environment",
    "get_settings",
    "ListlyError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ForbiddenError",
    "TransactionStateError",
    "configure_logging",
    "get_logger",
]
