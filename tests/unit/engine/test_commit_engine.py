"""Unit tests for the commit state machine."""

from __future__ import annotations

from pathlib import Path

from core.constants import DEFAULT_BRANCH_NAME
from core.fingerprint import fingerprint
from core.types import BranchHead, CommitRequest, DetachedHead, OperationOutcome
from engine.commit_engine import commit_version, plan_commit
from store.blob_store import BlobStore
from store.repository_paths import RepositoryPaths
from store.repository_store import RepositoryStore
from tests.repository_builders import build_repository, make_chain


def _setup(tmp_path: Path) -> tuple[RepositoryStore, BlobStore, Path]:
    tracked = tmp_path / "art.psd"
    tracked.write_bytes(b"v0")
    paths = RepositoryPaths.for_tracked_file(tracked)
    return RepositoryStore(paths), BlobStore(paths.repository_dir), paths.tracked_file


def test_first_commit_initializes_default_branch(tmp_path) -> None:
    """First commit should create the root on the default branch."""
    store, blobs, tracked = _setup(tmp_path)

    result = commit_version(store, blobs, tracked, CommitRequest(description="start"))
    data = store.load()

    assert result.outcome is OperationOutcome.OK and result.branch_name == DEFAULT_BRANCH_NAME
    assert data.head == BranchHead(DEFAULT_BRANCH_NAME)
    assert data.head_version().parent is None and data.head_version().description == "start"
    assert data.head_version().content_fingerprint == fingerprint(b"v0")


def test_first_commit_uses_explicit_branch_verbatim(tmp_path) -> None:
    """An explicit branch on the first commit replaces the default name."""
    store, blobs, tracked = _setup(tmp_path)

    commit_version(store, blobs, tracked, CommitRequest(branch_name="sketches"))

    assert store.load().branches.keys() == {"sketches"}


def test_unchanged_content_is_nothing_to_commit_and_byte_identical(tmp_path) -> None:
    """Repeated commits of the same bytes must not rewrite the document."""
    store, blobs, tracked = _setup(tmp_path)
    commit_version(store, blobs, tracked, CommitRequest())
    before = store.paths.data_file.read_bytes()
    blob_count = len(list(store.paths.repository_dir.iterdir()))

    results = [commit_version(store, blobs, tracked, CommitRequest()) for _ in range(3)]

    assert all(result.outcome is OperationOutcome.NOTHING_TO_COMMIT for result in results)
    assert store.paths.data_file.read_bytes() == before
    assert len(list(store.paths.repository_dir.iterdir())) == blob_count


def test_commit_links_parent_and_advances_branch(tmp_path) -> None:
    """Second commit should point at the previous head and move the branch tip."""
    store, blobs, tracked = _setup(tmp_path)
    first = commit_version(store, blobs, tracked, CommitRequest())
    tracked.write_bytes(b"v1")

    second = commit_version(store, blobs, tracked, CommitRequest(description="edit"))
    data = store.load()

    assert second.version.parent == first.version.id
    assert data.branches[DEFAULT_BRANCH_NAME] == second.version.id
    assert list(data.versions) == [first.version.id, second.version.id]


def test_existing_branch_name_is_rejected_without_mutation(tmp_path) -> None:
    """Naming an existing branch must leave the document unchanged."""
    store, blobs, tracked = _setup(tmp_path)
    commit_version(store, blobs, tracked, CommitRequest())
    tracked.write_bytes(b"v1")
    before = store.paths.data_file.read_bytes()

    result = commit_version(store, blobs, tracked, CommitRequest(branch_name=DEFAULT_BRANCH_NAME))

    assert result.outcome is OperationOutcome.BRANCH_ALREADY_EXISTS
    assert store.paths.data_file.read_bytes() == before


def test_new_branch_moves_head_and_keeps_old_tip(tmp_path) -> None:
    """Committing onto a new branch should fork from the current head."""
    store, blobs, tracked = _setup(tmp_path)
    root = commit_version(store, blobs, tracked, CommitRequest()).version
    tracked.write_bytes(b"experiment")

    result = commit_version(store, blobs, tracked, CommitRequest(branch_name="feature"))
    data = store.load()

    assert data.head == BranchHead("feature")
    assert data.branches == {DEFAULT_BRANCH_NAME: root.id, "feature": result.version.id}
    assert result.version.parent == root.id


def test_every_persisted_version_has_its_blob(tmp_path) -> None:
    """Blobs are written before the document references them."""
    store, blobs, tracked = _setup(tmp_path)
    for content in (b"a", b"b", b"c"):
        tracked.write_bytes(content)
        commit_version(store, blobs, tracked, CommitRequest())

    data = store.load()

    assert [blobs.blob_path(v.blob_reference).read_bytes() for v in data.versions.values()] == [
        b"a",
        b"b",
        b"c",
    ]


def test_plan_commit_requires_branch_when_detached() -> None:
    """Detached head without a branch name cannot commit."""
    chain = make_chain(2)
    data = build_repository(chain, {"main": chain[-1]}, head=DetachedHead(chain[0].id))

    plan = plan_commit(data, live_fingerprint=12345, branch_name=None)

    assert plan.outcome is OperationOutcome.BRANCH_REQUIRED and plan.target_branch is None


def test_plan_commit_detached_with_new_branch_is_ok() -> None:
    """A new branch name unlocks committing from a detached head."""
    chain = make_chain(2)
    data = build_repository(chain, {"main": chain[-1]}, head=DetachedHead(chain[0].id))

    plan = plan_commit(data, live_fingerprint=12345, branch_name="retry")

    assert plan.outcome is OperationOutcome.OK and plan.target_branch == "retry"


def test_plan_commit_checks_content_before_branch_rules() -> None:
    """Unchanged content wins over a duplicate branch name."""
    chain = make_chain(1)
    data = build_repository(chain, {"main": chain[0]})

    plan = plan_commit(data, chain[0].content_fingerprint, branch_name="main")

    assert plan.outcome is OperationOutcome.NOTHING_TO_COMMIT
