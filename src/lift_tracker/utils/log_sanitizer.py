"""Log sanitization filter that keeps GitHub credentials out of logs.

Remote API errors are logged together with request details and response
bodies, so any of these could carry the configured access token:
- GitHub personal access tokens (classic and fine-grained)
- Bearer tokens and Authorization headers
- githubToken / token fields of a serialized StorageConfig

Usage:
    from lift_tracker.utils.log_sanitizer import install_log_sanitizer

    install_log_sanitizer()
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts credentials from log records."""

    # More specific patterns come first
    PATTERNS: list[tuple[re.Pattern, str]] = [
        # Fine-grained personal access tokens
        (re.compile(r'\bgithub_pat_[A-Za-z0-9_]{20,}'), '[REDACTED_GITHUB_TOKEN]'),

        # Classic tokens: personal, OAuth, user-to-server, server-to-server, refresh
        (re.compile(r'\bgh[pousr]_[A-Za-z0-9]{20,}'), '[REDACTED_GITHUB_TOKEN]'),

        # Bearer tokens in Authorization headers
        (re.compile(r'Bearer\s+[A-Za-z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),
        (re.compile(r'(Authorization["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Serialized StorageConfig and generic token fields
        (re.compile(r'(githubToken["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(github_token["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(access_token["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place and always let it through."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))

        if record.args:
            record.args = self._sanitize_args(record.args)

        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        """Recursively sanitize log arguments."""
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        else:
            # Keep non-string args (e.g. %d values) unless they stringify to a secret
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(logger_name: str | None = None) -> None:
    """Install the sanitization filter.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
        return

    root_logger = logging.getLogger()
    root_logger.addFilter(sanitizer)
    # Filters on a logger do not apply to records propagated from children
    for handler in root_logger.handlers:
        handler.addFilter(sanitizer)


def sanitize_string(text: str) -> str:
    """Sanitize a string outside the logging system (e.g. a CLI message)."""
    return LogSanitizationFilter()._sanitize(text)
