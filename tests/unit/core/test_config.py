"""Unit tests for core config parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import BiverConfig, parse_status_limit
from core.errors import BiverConfigError


def test_from_env_reads_tracked_file_and_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve tracked file and status limit from environment."""
    monkeypatch.setenv("BIVER_PATH", "./art.psd")
    monkeypatch.setenv("BIVER_STATUS_LIMIT", "5")

    config = BiverConfig.from_env()

    assert config.tracked_file == Path("./art.psd") and config.status_limit == 5


def test_from_env_uses_defaults_when_unset() -> None:
    """Config should fall back to default limit and log level."""
    config = BiverConfig.from_env()

    assert config.tracked_file is None
    assert config.status_limit == 20 and config.log_level == "WARNING"


def test_from_env_raises_for_invalid_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric status limit."""
    monkeypatch.setenv("BIVER_STATUS_LIMIT", "many")

    with pytest.raises(BiverConfigError):
        BiverConfig.from_env()


def test_from_env_raises_for_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject unsupported log level names."""
    monkeypatch.setenv("BIVER_LOG_LEVEL", "chatty")

    with pytest.raises(BiverConfigError):
        BiverConfig.from_env()


def test_parse_status_limit_rejects_negative_values() -> None:
    """Negative limits are configuration errors."""
    with pytest.raises(BiverConfigError):
        parse_status_limit("-1")


def test_resolve_tracked_file_requires_configuration() -> None:
    """Resolving without a tracked file should explain how to provide one."""
    config = BiverConfig.from_env()

    with pytest.raises(BiverConfigError, match="BIVER_PATH"):
        config.resolve_tracked_file()


def test_parse_status_limit_reports_given_source() -> None:
    """Errors should name the setting the value came from."""
    with pytest.raises(BiverConfigError, match="--limit"):
        parse_status_limit("abc", source="--limit")
