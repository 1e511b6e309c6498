"""Work state machine.

The workfile is the only state: work is RUNNING when its last event is a start
without a matching end, IDLE otherwise. Transitions are:

    IDLE --start--> RUNNING --end--> IDLE

Starting while running and ending while idle are rejected without touching
the workfile.
"""

from datetime import UTC, datetime
from enum import Enum

from .errors import CorruptionError, InvalidTransitionError
from .events import EventKind, WorkEvent, line_kind, parse_event_line
from .workfile import Workfile


class WorkState(Enum):
    """Whether work is currently being tracked."""

    IDLE = "idle"
    RUNNING = "running"


def last_line(content: str) -> str | None:
    """Return the last non-blank line of content, or None if there is none."""
    lines = [line for line in content.splitlines() if line.strip()]
    return lines[-1] if lines else None


def get_running_work(content: str) -> datetime | None:
    """
    Determine whether work is running from the workfile content.

    Args:
        content: Full workfile content

    Returns:
        Start time of the running work, or None when idle

    Raises:
        CorruptionError: If the last line is neither a start nor an end event
    """
    line = last_line(content)
    if line is None:
        return None

    kind = line_kind(line)
    if kind is EventKind.END:
        return None
    if kind is not EventKind.START:
        raise CorruptionError("Last line corrupted in workfile", content=content)

    try:
        return parse_event_line(line).timestamp
    except CorruptionError as e:
        raise CorruptionError(str(e), content=content) from e


def get_work_state(content: str) -> WorkState:
    if get_running_work(content) is None:
        return WorkState.IDLE
    return WorkState.RUNNING


def start_work(workfile: Workfile, now: datetime | None = None) -> WorkEvent:
    """
    Log the start of work.

    Raises:
        InvalidTransitionError: If work is already running
    """
    if get_work_state(workfile.read()) is WorkState.RUNNING:
        raise InvalidTransitionError("Work already running, won't start it")
    event = WorkEvent(EventKind.START, now or datetime.now(UTC))
    workfile.append(event)
    return event


def end_work(workfile: Workfile, now: datetime | None = None) -> WorkEvent:
    """
    Log the end of work.

    Raises:
        InvalidTransitionError: If no work is running
    """
    if get_work_state(workfile.read()) is WorkState.IDLE:
        raise InvalidTransitionError("No work running, won't end it")
    event = WorkEvent(EventKind.END, now or datetime.now(UTC))
    workfile.append(event)
    return event
