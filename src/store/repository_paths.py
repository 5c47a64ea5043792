"""Repository location derived from the tracked file path."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import DATA_FILE_NAME, REPOSITORY_DIR_SUFFIX


@dataclass(frozen=True)
class RepositoryPaths:
    """Filesystem locations for one tracked file.

    Attributes:
        tracked_file: Absolute path of the versioned file.
        repository_dir: Directory holding blobs and the state document.
        data_file: State document path.
    """

    tracked_file: Path
    repository_dir: Path
    data_file: Path

    @classmethod
    def for_tracked_file(cls, tracked_file: Path) -> "RepositoryPaths":
        """Build paths next to the tracked file.

        ``art.psd`` maps to ``art.psd.biver/`` and ``notes`` to ``notes.biver/``.

        Args:
            tracked_file: Path of the versioned file.

        Returns:
            Resolved repository paths.
        """
        resolved = tracked_file.expanduser().resolve()
        repository_dir = resolved.with_name(f"{resolved.name}.{REPOSITORY_DIR_SUFFIX}")
        return cls(
            tracked_file=resolved,
            repository_dir=repository_dir,
            data_file=repository_dir / DATA_FILE_NAME,
        )
