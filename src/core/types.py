"""Shared typed models.

This module defines the immutable version-tree model and the typed
request, result, and outcome models passed between engine, store,
history, and CLI layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, Mapping, Union

from core.version_id import VersionId


@dataclass(frozen=True)
class Version:
    """One committed snapshot of the tracked file.

    Attributes:
        id: Unique version identifier.
        creation_time: UTC commit timestamp.
        content_fingerprint: 128-bit fingerprint of committed bytes.
        nickname: Label derived from the fingerprint.
        description: Free text, possibly empty.
        parent: Previous head version, None for the root.
        blob_reference: Blob file name in the repository directory.
    """

    id: VersionId
    creation_time: datetime
    content_fingerprint: int
    nickname: str
    description: str
    parent: VersionId | None
    blob_reference: str


@dataclass(frozen=True)
class BranchHead:
    """Symbolic head naming a branch."""

    name: str


@dataclass(frozen=True)
class DetachedHead:
    """Detached head naming a version directly."""

    version_id: VersionId


Head = Union[BranchHead, DetachedHead]


@dataclass(frozen=True)
class RepositoryData:
    """Whole repository state document.

    Versions form an arena keyed by id in commit order; parents and
    branch tips are ids into it, never object references.

    Attributes:
        head: Checked-out position.
        versions: Versions keyed by id, insertion order is commit order.
        branches: Branch name to tip version id.
    """

    head: Head
    versions: Mapping[VersionId, Version]
    branches: Mapping[str, VersionId]

    def version(self, version_id: VersionId) -> Version:
        """Return a version by id.

        Raises:
            KeyError: If the id is unknown.
        """
        return self.versions[version_id]

    def head_version_id(self) -> VersionId:
        if isinstance(self.head, BranchHead):
            return self.branches[self.head.name]
        return self.head.version_id

    def head_version(self) -> Version:
        return self.versions[self.head_version_id()]

    def head_branch(self) -> str | None:
        """Return the symbolic head branch name, None when detached."""
        if isinstance(self.head, BranchHead):
            return self.head.name
        return None

    def iter_version_and_ancestors(self, version_id: VersionId) -> Iterator[Version]:
        """Yield a version followed by its parents up to the root."""
        current: VersionId | None = version_id
        while current is not None:
            version = self.versions[current]
            yield version
            current = version.parent

    def iter_head_and_ancestors(self) -> Iterator[Version]:
        """Yield the head version followed by its parents up to the root."""
        return self.iter_version_and_ancestors(self.head_version_id())

    def sorted_branch_names(self) -> list[str]:
        return sorted(self.branches)

    def find_version_by_text(self, text: str) -> Version | None:
        """Find a version by display or storage id text."""
        for version in self.versions.values():
            if text in (version.id.display_form(), version.id.storage_form()):
                return version
        return None


class OperationOutcome(Enum):
    """Typed result of a state-machine operation.

    Only OK changes anything; every other outcome leaves the
    repository document and the tracked file untouched.
    """

    OK = "ok"
    NOTHING_TO_COMMIT = "nothing_to_commit"
    BRANCH_REQUIRED = "branch_required"
    BRANCH_ALREADY_EXISTS = "branch_already_exists"
    NOTHING_TO_DISCARD = "nothing_to_discard"
    UNCOMMITTED_CHANGES = "uncommitted_changes"
    UNKNOWN_TARGET = "unknown_target"
    NOT_INITIALIZED = "not_initialized"


@dataclass(frozen=True)
class CommitRequest:
    """Commit input options.

    Attributes:
        description: Free text attached to the new version.
        branch_name: Optional new branch to create for the commit.
    """

    description: str = ""
    branch_name: str | None = None


@dataclass(frozen=True)
class CommitResult:
    """Commit outcome with the created version when OK."""

    outcome: OperationOutcome
    version: Version | None = None
    branch_name: str | None = None


@dataclass(frozen=True)
class CheckoutResult:
    """Checkout outcome with the resulting head when OK."""

    outcome: OperationOutcome
    head: Head | None = None


@dataclass(frozen=True)
class DiscardResult:
    """Discard outcome with the restored version when OK."""

    outcome: OperationOutcome
    restored_version: Version | None = None


@dataclass(frozen=True)
class HistoryOptions:
    """History rendering options.

    Attributes:
        limit: Rows kept nearest head when show_all is False.
        show_all: Render the full lineage without a summary row.
    """

    limit: int
    show_all: bool = False
