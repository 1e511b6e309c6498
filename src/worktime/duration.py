"""Human-readable rendering of durations ("1 day 2 hours 5 minutes")."""

from datetime import timedelta

from .utils import normalize_duration

UNITS = (
    ("day", timedelta(days=1)),
    ("hour", timedelta(hours=1)),
    ("minute", timedelta(minutes=1)),
)


def format_number_with_unit(value: int, unit_name: str) -> str:
    return f"{value} {unit_name if value == 1 else unit_name + 's'}"


def format_duration(duration: float | timedelta) -> str:
    """
    Format a duration as space-separated day/hour/minute components.

    Seconds are discarded, zero components are omitted, so a duration shorter
    than a minute renders as an empty string.

    Args:
        duration: Non-negative duration as timedelta or number of milliseconds

    Returns:
        E.g. "1 day 2 hours 5 minutes", "1 hour", or ""
    """
    rest = normalize_duration(duration)
    parts = []
    for unit_name, unit in UNITS:
        value, rest = divmod(rest, unit)
        if value:
            parts.append(format_number_with_unit(value, unit_name))
    return " ".join(parts)
