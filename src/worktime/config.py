import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import toml

from .config_validation import validate_and_warn
from .summary import SummaryOptions

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".work.config.toml"

default_config = """
# Look for a .workfile in the current directory and its parents (up to the
# home directory) before falling back to ~/.workfile
local_workfile = false

[summary]
# "cs-CZ" renders dates as "DD. MM. YYYY HH:MM", any other locale
# identifier (e.g. "en-US", "de-DE") uses that locale's conventions
locale = "cs-CZ"

# Printed between the start, end and duration columns
separator = " | "

# Snap interval ends to 5 minute boundaries before computing durations:
# none, floor, ceil, closest, or expand (floor starts, ceil ends)
rounding_mode = "none"
""".strip()


@dataclass(frozen=True)
class WorkConfig:
    """Resolved configuration."""

    local_workfile: bool = False
    summary: SummaryOptions = field(default_factory=SummaryOptions)


def default_config_path() -> Path:
    return Path.home() / CONFIG_FILE_NAME


def read_config_file(config_path: Path) -> dict[str, Any]:
    """Parse a TOML config file, falling back to an empty config if it is malformed."""
    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read config file {config_path} (using default):\n{e}")
        return {}


def merge_config(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge overrides into defaults one level deep (tables are merged key by key)."""
    merged = dict(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _typed(section: dict[str, Any], defaults: dict[str, Any], key: str, expected: type) -> Any:
    value = section.get(key, defaults[key])
    if not isinstance(value, expected):
        return defaults[key]
    return value


def load_config(config_path: Path | str | None = None) -> WorkConfig:
    """
    Load the configuration.

    Args:
        config_path: Explicit config file. Defaults to ~/.work.config.toml,
            which may be absent.

    Returns:
        The resolved configuration. Values of the wrong type are replaced by
        their defaults; validation problems are logged.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    defaults = toml.loads(default_config)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_path = default_config_path()

    parsed = read_config_file(config_path) if config_path.exists() else {}
    if not validate_and_warn(parsed):
        logger.warning(f"Invalid values in {config_path} replaced by their defaults")
    config = merge_config(defaults, parsed)

    summary = config["summary"] if isinstance(config["summary"], dict) else {}
    return WorkConfig(
        local_workfile=_typed(config, defaults, "local_workfile", bool),
        summary=SummaryOptions(
            locale=_typed(summary, defaults["summary"], "locale", str),
            separator=_typed(summary, defaults["summary"], "separator", str),
            rounding_mode=_typed(summary, defaults["summary"], "rounding_mode", str),
        ),
    )
