"""Tracked-file restore operations.

This module restores committed content into the tracked file: discard
drops uncommitted edits, checkout moves head to a branch or version.
Both refuse instead of silently losing uncommitted work.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.fingerprint import fingerprint_file
from core.logging_config import get_logger
from core.types import (
    BranchHead,
    CheckoutResult,
    DetachedHead,
    DiscardResult,
    Head,
    OperationOutcome,
    RepositoryData,
)
from store.blob_store import BlobStore
from store.repository_store import RepositoryStore

_LOGGER = get_logger(__name__)


def live_fingerprint_or_none(tracked_file: Path) -> int | None:
    """Return the tracked file fingerprint, None when the file is absent."""
    if not tracked_file.exists():
        return None
    return fingerprint_file(tracked_file)


def has_uncommitted_changes(data: RepositoryData, tracked_file: Path) -> bool:
    """Return whether the tracked file differs from the head version.

    A missing tracked file counts as a change.
    """
    live_fingerprint = live_fingerprint_or_none(tracked_file)
    return live_fingerprint != data.head_version().content_fingerprint


def discard_changes(
    store: RepositoryStore,
    blob_store: BlobStore,
    tracked_file: Path,
) -> DiscardResult:
    """Restore the head version content into the tracked file.

    Args:
        store: Repository state store.
        blob_store: Blob store.
        tracked_file: Versioned file path.

    Returns:
        Discard result. The state document is never written.
    """
    data = store.load()
    if data is None:
        return DiscardResult(outcome=OperationOutcome.NOT_INITIALIZED)
    if not has_uncommitted_changes(data, tracked_file):
        return DiscardResult(outcome=OperationOutcome.NOTHING_TO_DISCARD)
    head_version = data.head_version()
    blob_store.restore_blob(head_version.blob_reference, tracked_file)
    _LOGGER.info("changes_discarded", version_id=head_version.id.storage_form())
    return DiscardResult(outcome=OperationOutcome.OK, restored_version=head_version)


def resolve_checkout_target(data: RepositoryData, target: str) -> Head | None:
    """Resolve a branch name or a display/storage version id into a head.

    Branch names win over ids. Returns None when nothing matches.
    """
    if target in data.branches:
        return BranchHead(name=target)
    version = data.find_version_by_text(target)
    if version is None:
        return None
    return DetachedHead(version_id=version.id)


def checkout(
    store: RepositoryStore,
    blob_store: BlobStore,
    tracked_file: Path,
    target: str,
    force: bool = False,
) -> CheckoutResult:
    """Move head to a branch or version and restore its content.

    Args:
        store: Repository state store.
        blob_store: Blob store.
        tracked_file: Versioned file path.
        target: Branch name, display id, or storage id.
        force: Overwrite uncommitted changes in the tracked file.

    Returns:
        Checkout result with the new head when OK.
    """
    data = store.load()
    if data is None:
        return CheckoutResult(outcome=OperationOutcome.NOT_INITIALIZED)
    head = resolve_checkout_target(data, target)
    if head is None:
        return CheckoutResult(outcome=OperationOutcome.UNKNOWN_TARGET)
    if not force and has_uncommitted_changes(data, tracked_file):
        return CheckoutResult(outcome=OperationOutcome.UNCOMMITTED_CHANGES)
    next_data = replace(data, head=head)
    blob_store.restore_blob(next_data.head_version().blob_reference, tracked_file)
    store.save(next_data)
    _LOGGER.info(
        "checkout_completed",
        target=target,
        version_id=next_data.head_version_id().storage_form(),
        detached=isinstance(head, DetachedHead),
    )
    return CheckoutResult(outcome=OperationOutcome.OK, head=head)
