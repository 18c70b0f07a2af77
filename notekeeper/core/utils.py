"""
Core Utilities.

Shared utility functions used across the client.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    Local cache timestamps are stored timezone-naive and assumed to be UTC.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """
    Return an aware datetime, treating naive values as UTC.

    Note timestamps arrive both with and without an offset; comparing
    them requires a common representation.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
