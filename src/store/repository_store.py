"""Repository state document store.

This module loads and saves the single JSON document that holds the
version tree, branch pointers, and head. Saves validate invariants and
replace the whole document atomically; there is no incremental journal.
"""

from __future__ import annotations

import json

from core.errors import BiverDecodeError, BiverInvariantError, BiverStoreError
from core.logging_config import get_logger
from core.types import RepositoryData
from store.atomic_file import write_bytes_atomic
from store.repository_codec import repository_from_payload, repository_to_payload
from store.repository_invariants import validate_repository_data
from store.repository_paths import RepositoryPaths

_LOGGER = get_logger(__name__)


class RepositoryStore:
    """Whole-document persistence for one repository location."""

    def __init__(self, paths: RepositoryPaths) -> None:
        """Initialize store for repository paths.

        Args:
            paths: Repository locations.
        """
        self._paths = paths

    @property
    def paths(self) -> RepositoryPaths:
        return self._paths

    def exists(self) -> bool:
        """Return whether a state document has been written."""
        return self._paths.data_file.is_file()

    def load(self) -> RepositoryData | None:
        """Load repository data.

        Returns:
            Parsed repository data, or None when the location is not initialized.

        Raises:
            BiverDecodeError: If the document exists but is malformed or
                violates referential invariants.
            BiverStoreError: If the document cannot be read.
        """
        data_file = self._paths.data_file
        try:
            raw_text = data_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as error:
            raise BiverStoreError(
                f"Failed to read repository document {data_file}: {error}."
            ) from error
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as error:
            raise BiverDecodeError(
                f"Failed to parse repository document at {data_file}: {error.msg}. "
                "The document is not repaired automatically; restore it from a backup."
            ) from error
        data = repository_from_payload(payload, data_file)
        try:
            validate_repository_data(data)
        except BiverInvariantError as error:
            raise BiverDecodeError(
                f"Repository document at {data_file} is inconsistent: {error} "
                "The document is not repaired automatically; restore it from a backup."
            ) from error
        return data

    def save(self, data: RepositoryData) -> None:
        """Validate and atomically persist repository data.

        Args:
            data: Complete repository state to write.

        Raises:
            BiverInvariantError: If data violates referential invariants.
            BiverStoreError: If the write fails; the previous document is kept.
        """
        validate_repository_data(data)
        document = json.dumps(repository_to_payload(data), indent=2) + "\n"
        write_bytes_atomic(self._paths.data_file, document.encode("utf-8"))
        _LOGGER.info(
            "repository_saved",
            data_file=str(self._paths.data_file),
            version_count=len(data.versions),
            branch_count=len(data.branches),
        )
