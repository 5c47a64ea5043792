"""Fast content fingerprinting for change detection.

Fingerprints are XXH3-128 digests. They detect "no change" and seed
version nicknames; they are not an integrity guarantee.
"""

from __future__ import annotations

from pathlib import Path

import xxhash

from core.constants import FILE_CHUNK_SIZE
from core.errors import BiverStoreError


def fingerprint(data: bytes) -> int:
    """Return the 128-bit fingerprint of a byte string.

    Args:
        data: Content bytes.

    Returns:
        Unsigned 128-bit integer digest.
    """
    return xxhash.xxh3_128_intdigest(data)


def fingerprint_file(path: Path) -> int:
    """Return the 128-bit fingerprint of a file, streamed in chunks.

    Args:
        path: File to hash.

    Returns:
        Unsigned 128-bit integer digest, equal to fingerprint(path bytes).

    Raises:
        BiverStoreError: If the file cannot be read.
    """
    hasher = xxhash.xxh3_128()
    try:
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(FILE_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except OSError as error:
        raise BiverStoreError(
            f"Failed to read tracked file {path}: {error}. "
            "Check that the file exists and is readable."
        ) from error
    return hasher.intdigest()
