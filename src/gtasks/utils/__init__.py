"""Shared helpers: RFC 3339 timestamps and log sanitization."""

from .datetime import parse_rfc3339, format_rfc3339
from .log_sanitizer import sanitize_for_logging

__all__ = [
    "parse_rfc3339",
    "format_rfc3339",
    "sanitize_for_logging",
]
