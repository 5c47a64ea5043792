"""Immutable per-version content snapshots.

Each version owns one blob file named by its storage-form id and
colocated with the state document.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import BiverStoreError
from core.logging_config import get_logger
from core.version_id import VersionId
from store.atomic_file import copy_file_atomic

_LOGGER = get_logger(__name__)


class BlobStore:
    """Filesystem-backed blob store for one repository directory."""

    def __init__(self, repository_dir: Path) -> None:
        self._repository_dir = repository_dir

    def write_blob(self, version_id: VersionId, source_path: Path) -> str:
        """Copy source content into a new blob for version_id.

        Args:
            version_id: Version that will own the blob.
            source_path: Tracked file to snapshot.

        Returns:
            Blob reference stored on the version.

        Raises:
            BiverStoreError: If the copy fails.
        """
        blob_reference = version_id.storage_form()
        blob_path = self._repository_dir / blob_reference
        copy_file_atomic(source_path, blob_path)
        _LOGGER.info(
            "blob_written",
            version_id=version_id.storage_form(),
            blob_path=str(blob_path),
            size_bytes=blob_path.stat().st_size,
        )
        return blob_reference

    def blob_path(self, blob_reference: str) -> Path:
        """Return the path for a blob reference.

        Raises:
            BiverStoreError: If the blob file is missing.
        """
        blob_path = self._repository_dir / blob_reference
        if not blob_path.is_file():
            raise BiverStoreError(
                f"Missing blob {blob_reference} at {blob_path}. "
                "The repository directory may have been modified by hand."
            )
        return blob_path

    def restore_blob(self, blob_reference: str, target_path: Path) -> None:
        """Atomically replace target_path with a blob's content.

        Args:
            blob_reference: Blob to restore.
            target_path: Tracked file path to overwrite.
        """
        copy_file_atomic(self.blob_path(blob_reference), target_path)
        _LOGGER.info("blob_restored", blob_reference=blob_reference, target=str(target_path))
