"""
Log sanitization utilities to prevent task content and credentials from
leaking into logs.

Task titles and notes are user content; bearer tokens and ETags are
credentials or cache validators. Each is reduced to a short, non-identifying
representation before logging.
"""

import re
from typing import Optional


def sanitize_text(text: Optional[str], max_preview_length: int = 20) -> Optional[str]:
    """
    Sanitize free text (task title, notes) for logging.

    Args:
        text: Text to sanitize
        max_preview_length: Maximum characters to show

    Returns:
        Sanitized representation, e.g. "'Buy milk' (8 chars)"
    """
    if text is None:
        return None
    if not text:
        return "[empty]"

    # Strip control characters so log lines cannot be split
    preview = re.sub(r'[\r\n\x00-\x1f\x7f-\x9f]', ' ', text[:max_preview_length])
    if len(text) > max_preview_length:
        preview += "..."

    return f"'{preview}' ({len(text)} chars)"


def sanitize_token(token: Optional[str]) -> str:
    """
    Sanitize a bearer token for logging. Only its length is kept.

    Example:
        "ya29.a0Af..." -> "[token: 183 chars]"
    """
    if not token:
        return "[no-token]"
    return f"[token: {len(token)} chars]"


def sanitize_etag(etag: Optional[str]) -> Optional[str]:
    """
    Sanitize an ETag for logging by showing only its tail.

    Example:
        '"LTE4NjQ0NzQ3Nzc"' -> '[etag: ...Nzc"]'
    """
    if etag is None:
        return None
    if len(etag) <= 4:
        return "[etag]"
    return f"[etag: ...{etag[-4:]}]"


def sanitize_for_logging(**kwargs) -> dict:
    """
    Sanitize multiple fields for logging in one call.

    Args:
        **kwargs: Fields to sanitize (title, notes, token, etag, ...)

    Returns:
        Dictionary with sanitized values
    """
    sanitized = {}

    for key, value in kwargs.items():
        if key in ('title', 'notes'):
            sanitized[key] = sanitize_text(value)
        elif key in ('token', 'access_token', 'authorization'):
            sanitized[key] = sanitize_token(value)
        elif key == 'etag':
            sanitized[key] = sanitize_etag(value)
        else:
            # Identifiers and flags are not user content
            sanitized[key] = value

    return sanitized
