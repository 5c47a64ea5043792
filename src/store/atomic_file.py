"""Atomic file replacement helpers.

Writers stage content in a temporary file inside the destination
directory, fsync it, and rename it over the target. Readers never
observe a partially written file and a crash leaves the old file intact.
"""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
import shutil
import tempfile
from typing import BinaryIO, Iterator

from core.constants import FILE_CHUNK_SIZE, TEMP_FILE_PREFIX
from core.errors import BiverStoreError


@contextmanager
def atomic_writer(target_path: Path) -> Iterator[BinaryIO]:
    """Yield a binary handle whose content replaces target_path on success.

    An existing target keeps its permission bits.

    Args:
        target_path: Destination file path.

    Yields:
        Writable binary file handle.

    Raises:
        BiverStoreError: If staging or renaming fails.
    """
    target_dir = target_path.parent
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        file_descriptor, temp_name = tempfile.mkstemp(
            prefix=f"{TEMP_FILE_PREFIX}{target_path.name}-",
            dir=target_dir,
        )
    except OSError as error:
        raise BiverStoreError(
            f"Failed to create temporary file in {target_dir}: {error}. "
            "Check directory permissions and free space."
        ) from error
    temp_path = Path(temp_name)
    try:
        with os.fdopen(file_descriptor, "wb") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        if target_path.exists():
            shutil.copymode(target_path, temp_path)
        os.replace(temp_path, target_path)
    except OSError as error:
        _remove_quietly(temp_path)
        raise BiverStoreError(
            f"Failed to write {target_path}: {error}. "
            "The previous file content was left unchanged."
        ) from error
    except BaseException:
        _remove_quietly(temp_path)
        raise


def write_bytes_atomic(target_path: Path, payload: bytes) -> None:
    """Atomically replace target_path with payload."""
    with atomic_writer(target_path) as handle:
        handle.write(payload)


def copy_file_atomic(source_path: Path, target_path: Path) -> None:
    """Atomically replace target_path with a copy of source_path.

    Raises:
        BiverStoreError: If the source cannot be read or the target written.
    """
    try:
        source_handle = source_path.open("rb")
    except OSError as error:
        raise BiverStoreError(
            f"Failed to read {source_path}: {error}. "
            "Check that the file exists and is readable."
        ) from error
    with source_handle, atomic_writer(target_path) as target_handle:
        try:
            shutil.copyfileobj(source_handle, target_handle, FILE_CHUNK_SIZE)
        except OSError as error:
            raise BiverStoreError(
                f"Failed to copy {source_path} to {target_path}: {error}."
            ) from error


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
