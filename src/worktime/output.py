"""Logging and output utilities for worktime."""

import json
import logging
import sys
from datetime import UTC, datetime

from termcolor import cprint


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs structured logs with the command being run.
    Can output one JSON object per line for later analysis.
    """

    def __init__(self, use_json: bool = False, run_mode: dict = None) -> None:
        super().__init__()
        self.use_json = use_json
        self.run_mode = run_mode or {}

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if self.run_mode:
            log_data["run_mode"] = self.run_mode

        if self.use_json:
            return json.dumps(log_data)
        return self._format_human(log_data)

    def _format_human(self, log_data: dict) -> str:
        """Format log data in a human-readable way."""
        if log_data["level"] in ("DEBUG", "INFO"):
            return log_data["message"]
        return f"{log_data['level'].capitalize()}: {log_data['message']}"


class ColoredConsoleHandler(logging.StreamHandler):
    """
    Console handler that adds colors based on log level.
    Info is yellow, warnings and errors are bold red.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            attrs = []
            color = None

            if record.levelno > logging.ERROR:
                attrs = ["bold", "blink"]
                color = "red"
            elif record.levelno >= logging.WARNING:
                attrs = ["bold"]
                color = "red"
            elif record.levelno == logging.INFO:
                color = "yellow"

            if color or attrs:
                cprint(msg, color=color, attrs=attrs, file=self.stream)
            else:
                self.stream.write(msg + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(
    json_format: bool = False,
    log_level: int = logging.DEBUG,
    console_log_level: int = logging.INFO,
    log_file: str = None,
    run_mode: dict = None,
) -> None:
    """
    Set up the logging system.

    Args:
        json_format: If True, write the log file in JSON format
        log_level: Logging level (default: DEBUG)
        console_log_level: Console logging level (default: INFO)
        log_file: Optional file path to write logs to
        run_mode: Optional dict with run mode info (e.g. the command) added to every record
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    root_logger.handlers.clear()

    if log_file and log_level:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(use_json=json_format, run_mode=run_mode))
        root_logger.addHandler(file_handler)
    if console_log_level:
        # Diagnostics go to stderr so summaries can be piped
        console_handler = ColoredConsoleHandler(sys.stderr)
        console_handler.setLevel(console_log_level)
        console_handler.setFormatter(StructuredFormatter(run_mode=run_mode))
        root_logger.addHandler(console_handler)


def user_output(msg: str, color: str = None, attrs: list = None, file=None) -> None:
    """
    Output message to the user (program output, not debug logging).

    Args:
        msg: Message to display to the user
        color: Optional color (e.g., 'yellow', 'red', 'white')
        attrs: Optional attributes (e.g., ['bold'])
        file: Stream to write to (default: stdout)
    """
    if color or attrs:
        cprint(msg, color=color, attrs=attrs, file=file)
    else:
        print(msg, file=file)
