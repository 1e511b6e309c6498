"""Workfile event line grammar.

One event per line: a label token padded to a fixed width, followed by an
ISO-8601 instant in UTC::

    start 2024-09-23T09:35:00.000Z
    end   2024-09-23T10:00:00.000Z
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .errors import CorruptionError
from .utils import normalize_timestamp, to_iso_instant

# Width of the label field, including padding
LABEL_WIDTH = 6

EVENT_LINE_RE = re.compile(r"^(?P<kind>start|end)\s+(?P<timestamp>\S+)\s*$")


class EventKind(Enum):
    """Kind of a logged event. The value is the label written to the workfile."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class WorkEvent:
    """A single start or end fact from the workfile."""

    kind: EventKind
    timestamp: datetime


def format_event_line(event: WorkEvent) -> str:
    """Serialize an event to one workfile line, without the trailing newline."""
    return f"{event.kind.value:<{LABEL_WIDTH}}{to_iso_instant(event.timestamp)}"


def parse_event_line(line: str) -> WorkEvent:
    """
    Parse one workfile line into a WorkEvent.

    Args:
        line: A single line, with or without its trailing newline

    Returns:
        The parsed event

    Raises:
        CorruptionError: If the line is not a start/end label followed by a valid instant
    """
    match = EVENT_LINE_RE.match(line.strip())
    if not match:
        raise CorruptionError(f"Corrupted line in workfile: {line.strip()!r}")
    try:
        timestamp = normalize_timestamp(match["timestamp"])
    except ValueError as e:
        raise CorruptionError(f"Invalid timestamp in workfile line {line.strip()!r}: {e}") from e
    return WorkEvent(EventKind(match["kind"]), timestamp)


def line_kind(line: str) -> EventKind | None:
    """Return the kind a line's label announces, or None if it has neither label."""
    stripped = line.strip()
    for kind in EventKind:
        if stripped.startswith(kind.value):
            return kind
    return None
