"""Configuration validation for worktime.

Validates the loaded TOML configuration and warns about potential issues.
"""

import logging
from typing import Any

from .rounding import RoundingMode

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Validates configuration dictionaries."""

    # Known top-level keys and their types
    TOP_LEVEL_PARAMS = {
        "local_workfile": bool,
        "summary": dict,
    }

    # Known summary parameters and their types
    SUMMARY_PARAMS = {
        "locale": str,
        "separator": str,
        "rounding_mode": str,
    }

    def __init__(self):
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self, config: dict[str, Any]) -> tuple[list[str], list[str]]:
        """Validate the configuration.

        Args:
            config: The configuration dictionary to validate

        Returns:
            Tuple of (errors, warnings) lists
        """
        self.errors = []
        self.warnings = []

        self._validate_top_level(config)
        summary = config.get("summary", {})
        if isinstance(summary, dict):
            self._validate_summary(summary)

        return self.errors, self.warnings

    def _validate_top_level(self, config: dict) -> None:
        """Validate top-level configuration keys."""
        for key, value in config.items():
            if key not in self.TOP_LEVEL_PARAMS:
                self.warnings.append(f"Unknown top-level config key: '{key}'")
                continue
            expected = self.TOP_LEVEL_PARAMS[key]
            if not isinstance(value, expected):
                self.errors.append(f"'{key}' must be {self._type_name(expected)}")

    def _validate_summary(self, summary: dict) -> None:
        """Validate the [summary] section."""
        for key, value in summary.items():
            if key not in self.SUMMARY_PARAMS:
                self.warnings.append(f"Unknown summary parameter: '{key}'")
                continue
            expected = self.SUMMARY_PARAMS[key]
            if not isinstance(value, expected):
                self.errors.append(
                    f"summary.{key} must be {self._type_name(expected)}, got {type(value).__name__}"
                )

        mode = summary.get("rounding_mode")
        if isinstance(mode, str) and mode not in {m.value for m in RoundingMode}:
            known = ", ".join(m.value for m in RoundingMode)
            self.errors.append(f"summary.rounding_mode must be one of: {known}, got '{mode}'")

        separator = summary.get("separator")
        if isinstance(separator, str) and not separator:
            self.warnings.append("summary.separator is empty - fields will run together")

    @staticmethod
    def _type_name(expected: type) -> str:
        return {bool: "a boolean", dict: "a table", str: "a string"}.get(expected, expected.__name__)


def validate_config(config: dict[str, Any]) -> tuple[list[str], list[str]]:
    """Validate configuration and return errors and warnings.

    Args:
        config: The configuration dictionary to validate

    Returns:
        Tuple of (errors, warnings) lists
    """
    validator = ConfigValidator()
    return validator.validate(config)


def log_validation_results(errors: list[str], warnings: list[str]) -> None:
    """Log validation results.

    Args:
        errors: List of error messages
        warnings: List of warning messages
    """
    for warning in warnings:
        logger.warning(f"Config warning: {warning}")
    for error in errors:
        logger.error(f"Config error: {error}")


def validate_and_warn(config: dict[str, Any]) -> bool:
    """Validate configuration and log warnings/errors.

    Args:
        config: The configuration dictionary to validate

    Returns:
        True if configuration is valid (no errors), False otherwise
    """
    errors, warnings = validate_config(config)
    log_validation_results(errors, warnings)
    return len(errors) == 0
