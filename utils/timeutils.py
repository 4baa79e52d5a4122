"""Timestamp helpers."""

from datetime import datetime, timezone


def utc_to_local(value: datetime) -> datetime:
    """Convert a UTC timestamp to naive local time.

    Naive values are taken to be UTC, as FIT files store them.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(value.timestamp())
