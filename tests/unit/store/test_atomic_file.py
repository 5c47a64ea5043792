"""Unit tests for atomic file replacement."""

from __future__ import annotations

import pytest

from core.errors import BiverStoreError
from store.atomic_file import atomic_writer, copy_file_atomic, write_bytes_atomic


def test_write_bytes_atomic_replaces_content(tmp_path) -> None:
    """Successful writes should replace the target and leave no temp files."""
    target = tmp_path / "data.json"
    target.write_bytes(b"old")

    write_bytes_atomic(target, b"new")

    assert target.read_bytes() == b"new" and sorted(tmp_path.iterdir()) == [target]


def test_failed_write_keeps_previous_content(tmp_path) -> None:
    """An exception mid-write should keep the old file and remove the temp file."""
    target = tmp_path / "data.json"
    target.write_bytes(b"old")

    with pytest.raises(RuntimeError):
        with atomic_writer(target) as handle:
            handle.write(b"partial")
            raise RuntimeError("crash")

    assert target.read_bytes() == b"old" and sorted(tmp_path.iterdir()) == [target]


def test_copy_file_atomic_raises_for_missing_source(tmp_path) -> None:
    """Missing source should raise a store error without creating the target."""
    target = tmp_path / "blob"

    with pytest.raises(BiverStoreError):
        copy_file_atomic(tmp_path / "missing", target)

    assert not target.exists()
