"""Unit tests for version id encodings."""

from __future__ import annotations

import uuid

import pytest

from core.version_id import VersionId, new_version_id


def test_new_version_ids_are_distinct() -> None:
    """Fresh ids should not collide."""
    ids = {new_version_id() for _ in range(100)}

    assert len(ids) == 100


def test_storage_form_is_hyphenated_uuid() -> None:
    """Storage form should be parseable as a UUID and back into the same id."""
    version_id = VersionId.new()

    storage = version_id.storage_form()

    assert uuid.UUID(storage) == version_id.value
    assert VersionId.from_storage_form(storage) == version_id


def test_display_form_is_compact_and_parseable() -> None:
    """Display form should be shorter than storage form and decode to the same id."""
    version_id = VersionId.new()

    display = version_id.display_form()

    assert len(display) < len(version_id.storage_form())
    assert VersionId.from_display_form(display) == version_id


def test_from_display_form_rejects_wrong_length() -> None:
    """Display text that does not decode to 16 bytes should be rejected."""
    with pytest.raises(ValueError):
        VersionId.from_display_form("abc")


def test_from_display_form_rejects_invalid_alphabet() -> None:
    """Characters outside the base58 alphabet should be rejected."""
    with pytest.raises(ValueError):
        VersionId.from_display_form("0OIl")
