"""Shared utility functions for worktime."""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta


def normalize_timestamp(ts: str | datetime) -> datetime:
    """
    Normalize a timestamp to a timezone-aware datetime object.

    Args:
        ts: Timestamp as ISO string (a trailing "Z" is accepted) or datetime object

    Returns:
        Timezone-aware datetime object (naive input is taken as UTC)
    """
    if isinstance(ts, datetime):
        dt = ts
    else:
        dt = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def normalize_duration(dur: float | timedelta) -> timedelta:
    """
    Normalize a duration to a timedelta object.

    Args:
        dur: Duration as number of milliseconds or timedelta

    Returns:
        timedelta object
    """
    if isinstance(dur, timedelta):
        return dur
    return timedelta(milliseconds=dur)


def to_iso_instant(ts: datetime) -> str:
    """Format a datetime as a UTC ISO-8601 instant with millisecond precision."""
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def ts2str(ts: datetime, format: str = "%FT%H:%M:%S") -> str:
    """Format a datetime as a string in the local timezone."""
    return ts.astimezone().strftime(format)


def chunk_by(items: Sequence, chunk_size: int) -> list[tuple]:
    """
    Split a sequence into consecutive groups of a set size.

    Args:
        items: Sequence to split
        chunk_size: Size of one chunk

    Returns:
        List of tuples, each holding chunk_size items

    Raises:
        ValueError: If chunk_size is not positive or the sequence is not
            evenly divisible into chunks of that size
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if len(items) % chunk_size != 0:
        raise ValueError(
            f"chunk_by: sequence of length {len(items)} cannot be evenly chunked by {chunk_size} items"
        )
    return [tuple(items[i : i + chunk_size]) for i in range(0, len(items), chunk_size)]
