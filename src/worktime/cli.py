#!/usr/bin/env python3
"""
Command-line interface for worktime.

Provides the commands: start, end, clean, summary.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from .config import WorkConfig, load_config
from .errors import CorruptionError, EmptyLogError, UsageError, WorkError
from .output import setup_logging, user_output
from .state import end_work, get_running_work, start_work
from .summary import render_summary
from .utils import ts2str
from .workfile import Workfile, resolve_workfile_path

logger = logging.getLogger(__name__)

COMMANDS = ("start", "end", "clean", "summary")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="work",
        description="Track work time in a plain-text workfile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  start     Log the start of work
  end       Log the end of work
  summary   Show logged work intervals (and the running one, if any)
  clean     Delete the workfile

Examples:
  %(prog)s start
  %(prog)s end
  %(prog)s summary

  # Use another config file
  %(prog)s --config ~/work.toml summary
        """,
    )

    parser.add_argument(
        "command",
        nargs="?",
        metavar="COMMAND",
        help="One of: " + ", ".join(COMMANDS),
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        type=Path,
        help="Path to configuration file (default: ~/.work.config.toml)",
    )
    parser.add_argument(
        "--console-log-level",
        choices=["NONE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set console logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        type=Path,
        help="Also write debug logs to this file",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write the log file in JSON format",
    )

    return parser


def configure_logging(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments
    """
    console_log_level = getattr(logging, args.console_log_level, 0)
    setup_logging(
        json_format=args.log_json,
        log_level=logging.DEBUG,
        console_log_level=console_log_level,
        log_file=args.log_file,
        run_mode={"command": args.command},
    )


def validate_command(command: str | None) -> str:
    """Return command if it is a known command, otherwise raise UsageError."""
    if not command:
        raise UsageError("Provide a command (one of: " + ", ".join(COMMANDS) + ")")
    if command not in COMMANDS:
        raise UsageError(f"Unknown command: {command}")
    return command


def run_start(workfile: Workfile, config: WorkConfig, now: datetime | None = None) -> int:
    """Execute the start command."""
    event = start_work(workfile, now)
    user_output(f"Work started at {ts2str(event.timestamp, '%H:%M')}")
    return 0


def run_end(workfile: Workfile, config: WorkConfig, now: datetime | None = None) -> int:
    """Execute the end command."""
    event = end_work(workfile, now)
    user_output(f"Work ended at {ts2str(event.timestamp, '%H:%M')}")
    return 0


def run_clean(workfile: Workfile, config: WorkConfig, now: datetime | None = None) -> int:
    """Execute the clean command."""
    workfile.delete()
    return 0


def run_summary(workfile: Workfile, config: WorkConfig, now: datetime | None = None) -> int:
    """Execute the summary command."""
    content = workfile.read()
    # Validates the last line before anything is rendered
    get_running_work(content)
    user_output(render_summary(content.splitlines(), config.summary))
    return 0


HANDLERS = {
    "start": run_start,
    "end": run_end,
    "clean": run_clean,
    "summary": run_summary,
}


def run_command(
    command: str, config: WorkConfig, workfile: Workfile | None = None, now: datetime | None = None
) -> int:
    """
    Run a single command against the workfile.

    Args:
        command: One of COMMANDS
        config: Resolved configuration
        workfile: Workfile to use (defaults to the one resolved from config)
        now: Time to log for start/end (defaults to the current time)

    Returns:
        Exit code
    """
    command = validate_command(command)
    if workfile is None:
        workfile = Workfile(resolve_workfile_path(prefer_local=config.local_workfile))
    logger.debug(f"Running {command} on {workfile.path}")
    return HANDLERS[command](workfile, config, now)


def main(argv=None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args)

    try:
        config = load_config(args.config)
        return run_command(args.command, config)

    except EmptyLogError as e:
        user_output(str(e))
        if e.running_note:
            user_output("\n" + e.running_note)
        return 0
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except CorruptionError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please repair the workfile manually.", file=sys.stderr)
        return 1
    except (WorkError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nExiting...")
        return 0


if __name__ == "__main__":
    sys.exit(main())
