"""Core infrastructure: config, logging, exceptions, constants."""

from storepulse.core.config import Settings, get_settings
from storepulse.core.exceptions import (
    InsufficientHistoryError,
    InvalidInputError,
    StorePulseError,
)
from storepulse.core.logging import configure_logging, get_logger, run_context, run_id_ctx

__all__ = [
    "InsufficientHistoryError",
    "InvalidInputError",
    "Settings",
    "StorePulseError",
    "configure_logging",
    "get_logger",
    "get_settings",
    "run_context",
    "run_id_ctx",
]
