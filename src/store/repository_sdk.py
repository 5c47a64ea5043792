"""Python SDK for single-file repository operations.

This module exposes high-level APIs for status, commit, discard,
checkout, and branch listing backed by the repository store.
"""

from __future__ import annotations

from pathlib import Path

from core.config import BiverConfig
from core.types import (
    CheckoutResult,
    CommitRequest,
    CommitResult,
    DiscardResult,
    HistoryOptions,
    RepositoryData,
)
from engine.commit_engine import commit_version
from engine.workspace_operations import (
    checkout,
    discard_changes,
    has_uncommitted_changes,
    live_fingerprint_or_none,
)
from history.graph_formatter import format_branch_list, prepare_history
from history.rows import HistoryView
from store.blob_store import BlobStore
from store.repository_paths import RepositoryPaths
from store.repository_store import RepositoryStore


class BiverClient:
    """Primary SDK entry point for one tracked file."""

    def __init__(self, config: BiverConfig | None = None, tracked_file: Path | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            tracked_file: Optional tracked file overriding the configured one.

        Raises:
            BiverConfigError: If no tracked file is available.
        """
        self._config = config or BiverConfig.from_env()
        self._paths = RepositoryPaths.for_tracked_file(
            tracked_file or self._config.resolve_tracked_file()
        )
        self._store = RepositoryStore(self._paths)
        self._blob_store = BlobStore(self._paths.repository_dir)

    @property
    def paths(self) -> RepositoryPaths:
        return self._paths

    def load(self) -> RepositoryData | None:
        """Load repository data, None when nothing was committed yet."""
        return self._store.load()

    def status(self, show_all: bool = False, limit: int | None = None) -> HistoryView | None:
        """Prepare the history view for the tracked file.

        Args:
            show_all: Render the full lineage.
            limit: Optional row limit overriding the configured one.

        Returns:
            History view, or None when the repository is not initialized.
        """
        data = self._store.load()
        if data is None:
            return None
        options = HistoryOptions(
            limit=self._config.status_limit if limit is None else limit,
            show_all=show_all,
        )
        live_fingerprint = live_fingerprint_or_none(self._paths.tracked_file)
        return prepare_history(data, options, live_fingerprint)

    def commit(self, description: str = "", branch: str | None = None) -> CommitResult:
        """Commit the tracked file.

        Args:
            description: Free text for the new version.
            branch: Optional new branch name.

        Returns:
            Commit result.
        """
        request = CommitRequest(description=description, branch_name=branch)
        return commit_version(self._store, self._blob_store, self._paths.tracked_file, request)

    def has_uncommitted_changes(self) -> bool:
        """Return whether the tracked file differs from head, False when not initialized."""
        data = self._store.load()
        if data is None:
            return False
        return has_uncommitted_changes(data, self._paths.tracked_file)

    def discard(self) -> DiscardResult:
        """Restore the head version into the tracked file."""
        return discard_changes(self._store, self._blob_store, self._paths.tracked_file)

    def checkout(self, target: str, force: bool = False) -> CheckoutResult:
        """Move head to a branch or version id and restore its content."""
        return checkout(self._store, self._blob_store, self._paths.tracked_file, target, force)

    def branches(self) -> list[str]:
        """Return rendered branch list lines, empty when not initialized."""
        data = self._store.load()
        if data is None:
            return []
        return format_branch_list(data)
