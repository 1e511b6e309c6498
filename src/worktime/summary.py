"""Summary report of logged work intervals.

Pairs start/end events into intervals, rounds them, and renders one line per
interval:

    23. 09. 2024 09:35 | 10:00 | (25 minutes)

If work is still running, a note with its start time follows the intervals.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from .dates import DEFAULT_LOCALE, DateRenderer, get_date_renderer, same_local_day
from .duration import format_duration
from .errors import CorruptionError, EmptyLogError
from .events import EventKind, WorkEvent, parse_event_line
from .rounding import RoundingMode, round_interval
from .utils import chunk_by

logger = logging.getLogger(__name__)

ZERO_DURATION = "0 minutes"


@dataclass(frozen=True)
class SummaryOptions:
    """How the summary is rendered."""

    locale: str = DEFAULT_LOCALE
    separator: str = " | "
    rounding_mode: str = RoundingMode.NONE.value


@dataclass(frozen=True)
class Interval:
    """A completed start/end pair."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


def parse_events(lines: Iterable[str]) -> list[WorkEvent]:
    """Parse all non-blank workfile lines."""
    return [parse_event_line(line) for line in lines if line.strip()]


def pair_events(events: list[WorkEvent]) -> tuple[list[Interval], datetime | None]:
    """
    Pair events into completed intervals.

    Args:
        events: Events in workfile order

    Returns:
        Tuple of (completed intervals, start time of running work or None)

    Raises:
        CorruptionError: If the events do not alternate start, end, start, ...
    """
    running_since = None
    if events and events[-1].kind is EventKind.START:
        running_since = events[-1].timestamp
        events = events[:-1]

    try:
        pairs = chunk_by(events, 2)
    except ValueError as e:
        raise CorruptionError(f"Unmatched events in workfile: {e}") from e

    intervals = []
    for start, end in pairs:
        if start.kind is not EventKind.START or end.kind is not EventKind.END:
            raise CorruptionError(
                f"Expected a start followed by an end, got {start.kind.value} "
                f"at {start.timestamp.isoformat()} followed by {end.kind.value}"
            )
        intervals.append(Interval(start.timestamp, end.timestamp))
    return intervals, running_since


def rounded_duration(interval: Interval) -> timedelta:
    """Duration of an interval, clamped to zero if rounding made it negative."""
    duration = interval.duration
    if duration < timedelta(0):
        logger.warning(
            f"Interval {interval.start.isoformat()} - {interval.end.isoformat()} "
            "ends before it starts, counting it as zero"
        )
        return timedelta(0)
    return duration


def render_interval(interval: Interval, renderer: DateRenderer, separator: str) -> str:
    from_display = renderer.render_datetime(interval.start)
    if same_local_day(interval.start, interval.end):
        to_display = renderer.render_time(interval.end)
    else:
        to_display = renderer.render_datetime(interval.end)
    duration = format_duration(rounded_duration(interval)) or ZERO_DURATION
    return f"{from_display}{separator}{to_display}{separator}({duration})"


def render_running_note(running_since: datetime, renderer: DateRenderer) -> str:
    return f"Work running, started at {renderer.render_datetime(running_since)}"


def render_summary(lines: Iterable[str], options: SummaryOptions) -> str:
    """
    Render the summary of a workfile.

    Args:
        lines: Workfile lines
        options: Locale, separator and rounding mode

    Returns:
        One line per completed interval, followed by a blank line and a
        running-work note if work is running

    Raises:
        CorruptionError: If a line cannot be parsed or events do not alternate
        EmptyLogError: If there are no completed intervals
        InvalidConfigurationError: If the rounding mode or locale is unknown
    """
    mode = RoundingMode.parse(options.rounding_mode)
    lines = list(lines)
    try:
        intervals, running_since = pair_events(parse_events(lines))
    except CorruptionError as e:
        raise CorruptionError(str(e), content="\n".join(lines)) from e
    renderer = get_date_renderer(options.locale)

    running_note = None
    if running_since is not None:
        running_note = render_running_note(running_since, renderer)

    if not intervals:
        raise EmptyLogError(running_note=running_note)

    rendered = []
    for interval in intervals:
        rounded = Interval(*round_interval(interval.start, interval.end, mode))
        rendered.append(render_interval(rounded, renderer, options.separator))

    summary = "\n".join(rendered)
    if running_note:
        summary = f"{summary}\n\n{running_note}"
    return summary
