"""Locating and accessing the workfile.

The workfile lives in the home directory unless a local one is preferred, in
which case the nearest ".workfile" above the working directory wins.
"""

import logging
from pathlib import Path

from .errors import CorruptionError
from .events import WorkEvent, format_event_line

logger = logging.getLogger(__name__)

WORKFILE_NAME = ".workfile"


def resolve_workfile_path(
    prefer_local: bool, cwd: Path | None = None, home: Path | None = None
) -> Path:
    """
    Resolve the absolute path of the workfile.

    Args:
        prefer_local: Search for a ".workfile" from cwd upwards before using the home one
        cwd: Directory to start the search from (defaults to the current directory)
        home: Home directory (defaults to the user's home)

    Returns:
        Absolute path of the workfile (which may not exist yet)
    """
    home = (home or Path.home()).resolve()
    home_workfile = home / WORKFILE_NAME
    if not prefer_local:
        return home_workfile

    candidate = (cwd or Path.cwd()).resolve()
    while True:
        workfile = candidate / WORKFILE_NAME
        if workfile.is_file():
            logger.debug(f"Using local workfile {workfile}")
            return workfile
        parent = candidate.parent
        if candidate == home or parent == home or parent == candidate:
            break
        candidate = parent

    return home_workfile


class Workfile:
    """Access to the workfile for the duration of one command.

    The first read creates the file if it is missing and caches its content.
    The cache is never refreshed, so callers that append must use the content
    returned by append() rather than calling read() again.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._content_cache: str | None = None

    def exists(self) -> bool:
        return self.path.is_file()

    def create(self) -> None:
        logger.info(f"Creating workfile at {self.path}...")
        self.path.write_text("", encoding="utf-8")

    def read(self) -> str:
        """Return the workfile content, creating an empty workfile first if needed.

        Raises:
            CorruptionError: If the workfile is not valid UTF-8
        """
        if self._content_cache is None:
            if not self.exists():
                self.create()
            raw = self.path.read_bytes()
            try:
                self._content_cache = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise CorruptionError(
                    f"Workfile {self.path} is not valid UTF-8: {e}",
                    content=raw.decode("utf-8", errors="replace"),
                ) from e
        return self._content_cache

    def append(self, event: WorkEvent) -> str:
        """
        Append one event line to the workfile.

        Args:
            event: Event to log

        Returns:
            The workfile content including the new line
        """
        content = self.read()
        line = format_event_line(event) + "\n"
        if content and not content.endswith("\n"):
            line = "\n" + line
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line)
        logger.info(f"Logged {event.kind.value} at {event.timestamp.isoformat()} to {self.path}")
        return content + line

    def delete(self) -> bool:
        """
        Delete the workfile.

        Returns:
            True if a file was removed, False if there was nothing to clean
        """
        if not self.exists():
            logger.info("No workfile present, nothing to clean")
            return False
        self.path.unlink()
        logger.info(f"Deleted workfile {self.path}")
        return True
