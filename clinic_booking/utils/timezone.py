"""
Timezone utilities for stored timestamps.

Timestamps are stored as naive UTC: SQLite (and MySQL DATETIME) drop the
offset, and comparing a naive value with an aware one raises TypeError.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get the current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime for storage.

    Args:
        dt: A datetime object (naive assumed UTC already, or timezone-aware)

    Returns:
        naive datetime in UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt

    return dt.astimezone(timezone.utc).replace(tzinfo=None)
