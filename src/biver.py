"""Public SDK surface for biver.

This module provides a stable import path for library users.
It re-exports the primary client and typed models.
"""

from __future__ import annotations

from core.config import BiverConfig
from core.errors import (
    BiverConfigError,
    BiverDecodeError,
    BiverError,
    BiverInvariantError,
    BiverStoreError,
)
from core.fingerprint import fingerprint, fingerprint_file
from core.types import (
    BranchHead,
    CommitRequest,
    CommitResult,
    DetachedHead,
    HistoryOptions,
    OperationOutcome,
    RepositoryData,
    Version,
)
from core.version_id import VersionId, new_version_id
from history.graph_formatter import format_versions, prepare_history
from store.repository_sdk import BiverClient

__all__ = [
    "BiverClient",
    "BiverConfig",
    "BiverConfigError",
    "BiverDecodeError",
    "BiverError",
    "BiverInvariantError",
    "BiverStoreError",
    "BranchHead",
    "CommitRequest",
    "CommitResult",
    "DetachedHead",
    "HistoryOptions",
    "OperationOutcome",
    "RepositoryData",
    "Version",
    "VersionId",
    "fingerprint",
    "fingerprint_file",
    "format_versions",
    "new_version_id",
    "prepare_history",
]
