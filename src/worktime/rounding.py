"""Rounding of work intervals to 5-minute boundaries.

Boundaries are counted from the Unix epoch, so they line up with wall-clock
5-minute marks in every timezone with a whole-quarter-hour offset.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from .errors import InvalidConfigurationError

ROUNDING_STEP = timedelta(minutes=5)
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class RoundingMode(Enum):
    """Policy for snapping instants to ROUNDING_STEP boundaries."""

    NONE = "none"
    FLOOR = "floor"
    CEIL = "ceil"
    CLOSEST = "closest"  # ties round up
    EXPAND = "expand"  # floor starts, ceil ends

    @classmethod
    def parse(cls, value: "str | RoundingMode") -> "RoundingMode":
        """Look up a mode by its configured name.

        Raises:
            InvalidConfigurationError: If the name is not a known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(mode.value for mode in cls)
            raise InvalidConfigurationError(
                f"Unknown rounding option: {value!r} (expected one of: {known})"
            ) from None


def _remainder(dt: datetime) -> timedelta:
    return (dt - EPOCH) % ROUNDING_STEP


def floor(dt: datetime) -> datetime:
    return dt - _remainder(dt)


def ceil(dt: datetime) -> datetime:
    remainder = _remainder(dt)
    if not remainder:
        return dt
    return dt - remainder + ROUNDING_STEP


def closest(dt: datetime) -> datetime:
    if _remainder(dt) < ROUNDING_STEP / 2:
        return floor(dt)
    return ceil(dt)


def round_datetime(dt: datetime, mode: "str | RoundingMode", is_start: bool) -> datetime:
    """
    Round an instant according to a rounding mode.

    Args:
        dt: Timezone-aware instant to round
        mode: Rounding mode or its configured name
        is_start: Whether the instant starts an interval (only matters for EXPAND)

    Returns:
        The rounded instant, in the same timezone as dt

    Raises:
        InvalidConfigurationError: If mode is unknown
    """
    mode = RoundingMode.parse(mode)
    if mode is RoundingMode.NONE:
        return dt
    if mode is RoundingMode.FLOOR:
        return floor(dt)
    if mode is RoundingMode.CEIL:
        return ceil(dt)
    if mode is RoundingMode.CLOSEST:
        return closest(dt)
    return floor(dt) if is_start else ceil(dt)


def round_interval(
    start: datetime, end: datetime, mode: "str | RoundingMode"
) -> tuple[datetime, datetime]:
    """Round both ends of an interval independently.

    Under EXPAND the interval never shrinks. The other modes apply the same
    rule to both ends regardless of position.
    """
    return round_datetime(start, mode, is_start=True), round_datetime(end, mode, is_start=False)
