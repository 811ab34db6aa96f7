import re
from datetime import datetime, timezone
import tzlocal

# date-time from RFC 3339 section 5.6
_RFC3339_RE = re.compile(
    r'\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})'
)


def parse_rfc3339(value: str) -> datetime:
    """
    Parses an RFC 3339 timestamp as sent by the Tasks API.

    Args:
        value: Timestamp string, e.g. "2025-01-15T10:00:00.000Z".

    Returns:
        A timezone-aware datetime in UTC.

    Raises:
        ValueError: If the value is not an RFC 3339 timestamp, or cannot be
            represented in UTC.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected an RFC 3339 string, got {type(value).__name__}")

    if not _RFC3339_RE.fullmatch(value):
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    text = value
    if text[-1] in ('Z', 'z'):
        text = text[:-1] + '+00:00'

    try:
        return datetime.fromisoformat(text).astimezone(timezone.utc)
    except (OverflowError, ValueError):
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}") from None


def format_rfc3339(date_time: datetime) -> str:
    """
    Formats a datetime as an RFC 3339 UTC timestamp.
    Naive datetimes are interpreted in the local timezone.

    Args:
        date_time: The datetime to format.

    Returns:
        A string such as "2025-01-15T10:00:00.000Z".
    """
    if date_time.tzinfo is None:
        date_time = date_time.replace(tzinfo=tzlocal.get_localzone())
    utc = date_time.astimezone(timezone.utc)
    return utc.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
