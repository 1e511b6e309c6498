"""Exception hierarchy for worktime.

Every failure a command can hit is a subclass of WorkError, so the CLI can
map them to messages and exit codes in one place.
"""


class WorkError(Exception):
    """Base class for all worktime errors."""

    pass


class UsageError(WorkError):
    """Raised when no command or an unknown command is given."""

    pass


class InvalidTransitionError(WorkError):
    """Raised on start while running or end while idle."""

    pass


class InvalidConfigurationError(WorkError):
    """Raised when a configured value cannot be used (e.g. unknown rounding mode)."""

    pass


class CorruptionError(WorkError):
    """Raised when the workfile contains a line that is not a start/end event.

    The raw workfile content is kept so it can be shown to the user, who has
    to repair the file by hand.
    """

    def __init__(self, message: str, content: str | None = None) -> None:
        super().__init__(message)
        self.content = content

    def __str__(self) -> str:
        message = super().__str__()
        if self.content is None:
            return message
        return f"{message}. file contents:\n{self.content}"


class EmptyLogError(WorkError):
    """Raised when a summary is requested but there are no completed intervals.

    This is an expected state for a brand new workfile, so the CLI reports it
    as a notice rather than a failure.
    """

    def __init__(
        self, message: str = "Empty workfile, nothing to summarize", running_note: str | None = None
    ) -> None:
        super().__init__(message)
        self.running_note = running_note
