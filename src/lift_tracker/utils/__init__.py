"""Utility helpers."""

from .dates import iso_date_to_millis, local_iso_date
from .ids import new_id, now_millis
from .log_sanitizer import LogSanitizationFilter, install_log_sanitizer, sanitize_string

__all__ = [
    "LogSanitizationFilter",
    "install_log_sanitizer",
    "iso_date_to_millis",
    "local_iso_date",
    "new_id",
    "now_millis",
    "sanitize_string",
]
