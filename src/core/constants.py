"""Core constants used across biver modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

REPOSITORY_DIR_SUFFIX = "biver"
DATA_FILE_NAME = "data.json"
TEMP_FILE_PREFIX = ".tmp-"
DEFAULT_BRANCH_NAME = "main"
DEFAULT_STATUS_LIMIT = 20
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
TRACKED_FILE_ENV = "BIVER_PATH"
STATUS_LIMIT_ENV = "BIVER_STATUS_LIMIT"
LOG_LEVEL_ENV = "BIVER_LOG_LEVEL"
DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_CHUNK_SIZE = 1024 * 1024
EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_USER_ERROR = 2
EXIT_NOTHING_TO_DO = 3
