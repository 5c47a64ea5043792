"""Commit state machine.

This module decides whether a commit is needed, resolves its target
branch, allocates the new version, and persists the whole state.
The blob is always written before the state document, so a persisted
version never references a missing blob.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from core.constants import DEFAULT_BRANCH_NAME
from core.fingerprint import fingerprint_file
from core.logging_config import get_logger
from core.nickname import nickname_for
from core.types import (
    BranchHead,
    CommitRequest,
    CommitResult,
    DetachedHead,
    OperationOutcome,
    RepositoryData,
    Version,
)
from core.version_id import VersionId, new_version_id
from store.blob_store import BlobStore
from store.repository_store import RepositoryStore

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CommitPlan:
    """Decision produced by plan_commit.

    Attributes:
        outcome: OK when a commit should happen, otherwise the refusal reason.
        target_branch: Branch that receives the new version when OK.
    """

    outcome: OperationOutcome
    target_branch: str | None = None


def plan_commit(
    data: RepositoryData | None,
    live_fingerprint: int,
    branch_name: str | None,
) -> CommitPlan:
    """Decide whether and where to commit without touching any state.

    Args:
        data: Current repository data, None when not initialized.
        live_fingerprint: Fingerprint of the tracked file right now.
        branch_name: Optional explicit new branch name.

    Returns:
        Commit plan with outcome and target branch.
    """
    if data is not None and live_fingerprint == data.head_version().content_fingerprint:
        return CommitPlan(outcome=OperationOutcome.NOTHING_TO_COMMIT)
    if branch_name is not None:
        if data is not None and branch_name in data.branches:
            return CommitPlan(outcome=OperationOutcome.BRANCH_ALREADY_EXISTS)
        return CommitPlan(outcome=OperationOutcome.OK, target_branch=branch_name)
    if data is None:
        return CommitPlan(outcome=OperationOutcome.OK, target_branch=DEFAULT_BRANCH_NAME)
    head_branch = data.head_branch()
    if head_branch is None:
        return CommitPlan(outcome=OperationOutcome.BRANCH_REQUIRED)
    return CommitPlan(outcome=OperationOutcome.OK, target_branch=head_branch)


def apply_commit(
    data: RepositoryData | None,
    version: Version,
    target_branch: str,
) -> RepositoryData:
    """Return new repository data with version appended on target_branch.

    Args:
        data: Current repository data, None when not initialized.
        version: Fully built new version.
        target_branch: Branch to advance.

    Returns:
        New repository data; the input is never modified.
    """
    versions: dict[VersionId, Version] = dict(data.versions) if data is not None else {}
    branches: dict[str, VersionId] = dict(data.branches) if data is not None else {}
    versions[version.id] = version
    branches[target_branch] = version.id
    return RepositoryData(
        head=BranchHead(name=target_branch),
        versions=versions,
        branches=branches,
    )


def commit_version(
    store: RepositoryStore,
    blob_store: BlobStore,
    tracked_file: Path,
    request: CommitRequest,
    now: datetime | None = None,
) -> CommitResult:
    """Commit the tracked file as a new version.

    Args:
        store: Repository state store.
        blob_store: Blob store colocated with the state document.
        tracked_file: Versioned file path.
        request: Commit options.
        now: Optional commit timestamp, defaults to current UTC time.

    Returns:
        Commit result. Non-OK outcomes perform no writes.

    Raises:
        BiverStoreError: If reading the file or writing blob/state fails.
        BiverDecodeError: If the existing state document is malformed.
    """
    data = store.load()
    live_fingerprint = fingerprint_file(tracked_file)
    plan = plan_commit(data, live_fingerprint, request.branch_name)
    if plan.outcome is not OperationOutcome.OK or plan.target_branch is None:
        _LOGGER.info("commit_skipped", outcome=plan.outcome.value, branch=request.branch_name)
        return CommitResult(outcome=plan.outcome)
    version_id = new_version_id()
    blob_reference = blob_store.write_blob(version_id, tracked_file)
    version = Version(
        id=version_id,
        creation_time=now or datetime.now(timezone.utc),
        content_fingerprint=live_fingerprint,
        nickname=nickname_for(live_fingerprint),
        description=request.description,
        parent=data.head_version_id() if data is not None else None,
        blob_reference=blob_reference,
    )
    store.save(apply_commit(data, version, plan.target_branch))
    _LOGGER.info(
        "version_committed",
        version_id=version_id.storage_form(),
        branch=plan.target_branch,
        parent=version.parent.storage_form() if version.parent else None,
        was_detached=data is not None and isinstance(data.head, DetachedHead),
    )
    return CommitResult(
        outcome=OperationOutcome.OK,
        version=version,
        branch_name=plan.target_branch,
    )
