"""Runtime configuration model for biver.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_STATUS_LIMIT,
    LOG_LEVEL_ENV,
    STATUS_LIMIT_ENV,
    SUPPORTED_LOG_LEVELS,
    TRACKED_FILE_ENV,
)
from core.errors import BiverConfigError


@dataclass(frozen=True)
class BiverConfig:
    """Validated runtime configuration.

    Attributes:
        tracked_file: Optional path of the single versioned file.
        status_limit: Number of history rows shown without --all.
        log_level: Minimum structured log level.
    """

    tracked_file: Path | None
    status_limit: int
    log_level: str

    @classmethod
    def from_env(cls) -> "BiverConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BiverConfigError: If environment values are invalid.
        """
        tracked_file_value = os.getenv(TRACKED_FILE_ENV)
        status_limit_value = os.getenv(STATUS_LIMIT_ENV, str(DEFAULT_STATUS_LIMIT))
        log_level_value = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
        return cls(
            tracked_file=Path(tracked_file_value).expanduser() if tracked_file_value else None,
            status_limit=parse_status_limit(status_limit_value),
            log_level=_parse_log_level(log_level_value),
        )

    def resolve_tracked_file(self) -> Path:
        """Return the tracked file path or fail with a usable message.

        Raises:
            BiverConfigError: If no tracked file was configured.
        """
        if self.tracked_file is None:
            raise BiverConfigError(
                "No tracked file configured. "
                f"Pass --file PATH or set {TRACKED_FILE_ENV}."
            )
        return self.tracked_file


def parse_status_limit(raw_value: str, source: str = STATUS_LIMIT_ENV) -> int:
    """Parse the status limit value.

    Args:
        raw_value: Raw string from environment or CLI.
        source: Setting name reported in error messages.

    Returns:
        Parsed non-negative integer.

    Raises:
        BiverConfigError: If value is not a non-negative integer.
    """
    try:
        limit = int(raw_value)
    except ValueError as error:
        raise BiverConfigError(
            f"Invalid {source} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {source} to a numeric value."
        ) from error
    if limit < 0:
        raise BiverConfigError(
            f"Invalid {source} value: expected a non-negative integer, got {limit}."
        )
    return limit


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise BiverConfigError(
            f"Invalid {LOG_LEVEL_ENV} value '{raw_value}'. "
            f"Supported: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
