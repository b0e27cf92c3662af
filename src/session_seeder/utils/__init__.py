"""Shared utility helpers for the session seeder."""

from .logging import LoggingOptions, configure_logging, get_logger, log_file_path
from .sanitize import mask_secret, mask_username, sanitize_log_message

__all__ = [
    "LoggingOptions",
    "configure_logging",
    "get_logger",
    "log_file_path",
    "mask_secret",
    "mask_username",
    "sanitize_log_message",
]
