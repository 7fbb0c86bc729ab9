"""Core utilities for the roster application."""

from roster.app.core.config import settings
from roster.app.core.context import get_current_request_id, set_current_request_id
from roster.app.core.logging import get_log_context, get_logger, setup_logging

__all__ = [
    "settings",
    "get_current_request_id",
    "set_current_request_id",
    "get_log_context",
    "get_logger",
    "setup_logging",
]
