"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
"""

from datetime import UTC, datetime
from email.utils import format_datetime


def ensure_utc(dt: datetime) -> datetime:
    """
    Return dt as a UTC-aware datetime.

    Naive values are assumed to already be UTC; aware values are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """
    Create a UTC-aware datetime from a Unix timestamp (e.g. os.stat mtime).
    Use instead of datetime.fromtimestamp() which returns naive local time.
    """
    return datetime.fromtimestamp(timestamp, tz=UTC)


def http_date(dt: datetime) -> str:
    """Format dt as an RFC 1123 date for HTTP headers (e.g. Last-Modified)."""
    return format_datetime(ensure_utc(dt), usegmt=True)
