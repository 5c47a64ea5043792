"""Unit tests for the repository data model queries."""

from __future__ import annotations

from core.types import DetachedHead
from tests.repository_builders import build_repository, make_chain, make_version


def test_iter_head_and_ancestors_walks_to_root() -> None:
    """Lineage should start at head and end at the root."""
    chain = make_chain(3)
    data = build_repository(chain, {"main": chain[-1]})

    lineage = [version.id for version in data.iter_head_and_ancestors()]

    assert lineage == [chain[2].id, chain[1].id, chain[0].id]


def test_detached_head_has_no_branch() -> None:
    """Detached head should resolve its version without a branch name."""
    chain = make_chain(2)
    data = build_repository(chain, {"main": chain[-1]}, head=DetachedHead(chain[0].id))

    assert data.head_branch() is None and data.head_version() == chain[0]


def test_find_version_by_text_accepts_both_id_forms() -> None:
    """Lookup should match display and storage forms."""
    root = make_version()
    data = build_repository([root], {"main": root})

    by_display = data.find_version_by_text(root.id.display_form())
    by_storage = data.find_version_by_text(root.id.storage_form())

    assert by_display == root and by_storage == root and data.find_version_by_text("x") is None


def test_sorted_branch_names_are_lexicographic() -> None:
    """Branch iteration for display should not depend on insertion order."""
    root = make_version()
    data = build_repository([root], {"zeta": root, "alpha": root, "main": root})

    assert data.sorted_branch_names() == ["alpha", "main", "zeta"]
