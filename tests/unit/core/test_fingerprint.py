"""Unit tests for content fingerprinting."""

from __future__ import annotations

import pytest

from core.constants import FILE_CHUNK_SIZE
from core.errors import BiverStoreError
from core.fingerprint import fingerprint, fingerprint_file


def test_fingerprint_file_matches_in_memory_digest(tmp_path) -> None:
    """Streaming over several chunks should equal hashing the whole payload."""
    payload = bytes(range(256)) * (FILE_CHUNK_SIZE // 256 * 2 + 3)
    tracked = tmp_path / "image.bin"
    tracked.write_bytes(payload)

    assert fingerprint_file(tracked) == fingerprint(payload)


def test_fingerprint_distinguishes_content_and_fits_128_bits() -> None:
    """Different content should hash differently within 128 bits."""
    first = fingerprint(b"layer one")
    second = fingerprint(b"layer two")

    assert first != second and 0 <= first < 2**128 and 0 <= second < 2**128


def test_fingerprint_file_raises_for_missing_file(tmp_path) -> None:
    """Unreadable tracked file should surface as a store error."""
    with pytest.raises(BiverStoreError):
        fingerprint_file(tmp_path / "missing.bin")
