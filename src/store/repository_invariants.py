"""Referential invariants checked before every state write.

A violation is a programming error: the save aborts before anything
touches disk so the previous document stays intact.
"""

from __future__ import annotations

from core.errors import BiverInvariantError
from core.types import BranchHead, RepositoryData
from core.version_id import VersionId


def validate_repository_data(data: RepositoryData) -> None:
    """Assert the version tree, branch map, and head are consistent.

    Args:
        data: Repository data about to be persisted.

    Raises:
        BiverInvariantError: If any invariant is violated.
    """
    if not data.versions:
        raise BiverInvariantError("Repository data must contain at least one version.")
    seen: set[VersionId] = set()
    root_count = 0
    for version_id, version in data.versions.items():
        if version_id != version.id:
            raise BiverInvariantError(
                f"Version keyed as {version_id.storage_form()} "
                f"carries id {version.id.storage_form()}."
            )
        if version.parent is None:
            root_count += 1
        elif version.parent not in seen:
            raise BiverInvariantError(
                f"Version {version.id.storage_form()} references parent "
                f"{version.parent.storage_form()} that is missing or committed later."
            )
        seen.add(version_id)
    if root_count != 1:
        raise BiverInvariantError(f"Expected exactly one root version, found {root_count}.")
    for name, target in data.branches.items():
        if target not in data.versions:
            raise BiverInvariantError(
                f"Branch '{name}' targets missing version {target.storage_form()}."
            )
    if isinstance(data.head, BranchHead):
        if data.head.name not in data.branches:
            raise BiverInvariantError(f"Head names missing branch '{data.head.name}'.")
    elif data.head.version_id not in data.versions:
        raise BiverInvariantError(
            f"Detached head targets missing version {data.head.version_id.storage_form()}."
        )
