"""History and branch-graph formatter.

This module is a pure transform from repository data and display
options into aligned rows. It walks the head lineage, truncates it to
the display limit, annotates branch tips and forks, and aligns the
nickname and relative-time columns over the rendered rows only.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Sequence

import humanize

from core.constants import DISPLAY_TIME_FORMAT
from core.types import HistoryOptions, RepositoryData, Version
from core.version_id import VersionId
from history.rows import HistoryView, SummaryRow, UncommittedRow, VersionRow

_TIMESTAMP_WIDTH = len(datetime(2000, 1, 1).strftime(DISPLAY_TIME_FORMAT))


def prepare_history(
    data: RepositoryData,
    options: HistoryOptions,
    live_fingerprint: int | None,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> HistoryView:
    """Prepare the head-and-ancestors history view.

    Args:
        data: Repository data to render.
        options: Display limit and show-all flag.
        live_fingerprint: Current tracked file fingerprint, None if the file is absent.
        now: Reference time for relative timestamps, defaults to current UTC time.
        tz: Display timezone, defaults to the local timezone.

    Returns:
        History view with rows ordered oldest first.
    """
    reference_time = now or datetime.now(timezone.utc)
    lineage = list(data.iter_head_and_ancestors())
    limit = len(lineage) if options.show_all else min(options.limit, len(lineage))
    visible = lineage[:limit]
    hidden = lineage[limit:]
    forks = forking_branches_by_join_point(data, lineage)
    rows = _build_version_rows(data, list(reversed(visible)), forks, reference_time, tz)
    id_position = _id_column_position(rows)
    summary = None
    if hidden:
        hidden_forks = sorted(name for version in hidden for name in forks.get(version.id, []))
        summary = _summary_row(len(hidden), hidden_forks, rows, id_position)
    uncommitted = None
    if live_fingerprint != data.head_version().content_fingerprint:
        uncommitted = UncommittedRow(offset=id_position)
    return HistoryView(summary=summary, versions=tuple(rows), uncommitted=uncommitted)


def format_versions(
    data: RepositoryData,
    versions: Sequence[Version],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[str]:
    """Render an arbitrary list of versions with shared alignment.

    Args:
        data: Repository data the versions belong to.
        versions: Versions in display order.
        now: Reference time for relative timestamps.
        tz: Display timezone.

    Returns:
        Rendered lines, one per version.
    """
    reference_time = now or datetime.now(timezone.utc)
    lineage = list(data.iter_head_and_ancestors())
    forks = forking_branches_by_join_point(data, lineage)
    rows = _build_version_rows(data, list(versions), forks, reference_time, tz)
    return [row.render() for row in rows]


def format_branch_list(data: RepositoryData) -> list[str]:
    """Render sorted branch names, marking the symbolic head branch with ``*``."""
    head_branch = data.head_branch()
    return [
        f"{'*' if name == head_branch else ' '} {name}" for name in data.sorted_branch_names()
    ]


def forking_branches_by_join_point(
    data: RepositoryData,
    lineage: Iterable[Version],
) -> dict[VersionId, list[str]]:
    """Map each join point on the lineage to the branches forking there.

    Only branches whose tip is off the lineage fork. The join point is the
    nearest ancestor of the tip that lies on the lineage.

    Args:
        data: Repository data.
        lineage: Head and ancestors.

    Returns:
        Join point id to sorted branch names.
    """
    lineage_ids = {version.id for version in lineage}
    forks: dict[VersionId, list[str]] = {}
    for name in data.sorted_branch_names():
        tip = data.branches[name]
        if tip in lineage_ids:
            continue
        join_point = next(
            version.id
            for version in data.iter_version_and_ancestors(tip)
            if version.id in lineage_ids
        )
        forks.setdefault(join_point, []).append(name)
    return forks


def _branches_by_version(data: RepositoryData) -> dict[VersionId, list[str]]:
    branches: dict[VersionId, list[str]] = {}
    for name in data.sorted_branch_names():
        branches.setdefault(data.branches[name], []).append(name)
    return branches


def _build_version_rows(
    data: RepositoryData,
    versions: list[Version],
    forks: dict[VersionId, list[str]],
    now: datetime,
    tz: tzinfo | None,
) -> list[VersionRow]:
    """Build version rows, then pad columns to the widest rendered value."""
    branches_here = _branches_by_version(data)
    head_branch = data.head_branch()
    head_version_id = data.head_version_id()
    rows: list[VersionRow] = []
    for version in versions:
        other_branches = [
            name for name in branches_here.get(version.id, []) if name != head_branch
        ]
        forking = forks.get(version.id, [])
        rows.append(
            VersionRow(
                creation_time=version.creation_time.astimezone(tz).strftime(DISPLAY_TIME_FORMAT),
                creation_time_humanized=f"({_humanize_age(version.creation_time, now)})",
                version_id=version.id.display_form(),
                nickname=version.nickname,
                head_badge=_head_badge(head_branch)
                if version.id == head_version_id
                else None,
                other_branches_here=f"[{', '.join(other_branches)}]" if other_branches else None,
                forking_branches=f"->[{', '.join(forking)}]" if forking else None,
                description=version.description or None,
            )
        )
    return _align_rows(rows)


def _align_rows(rows: list[VersionRow]) -> list[VersionRow]:
    humanized_width = max((len(row.creation_time_humanized) for row in rows), default=0)
    id_width = max((len(row.version_id) for row in rows), default=0)
    nickname_width = max((len(row.nickname) for row in rows), default=0)
    return [
        replace(
            row,
            creation_time_humanized=row.creation_time_humanized.ljust(humanized_width),
            version_id=row.version_id.ljust(id_width),
            nickname=row.nickname.rjust(nickname_width),
        )
        for row in rows
    ]


def _id_column_position(rows: list[VersionRow]) -> int:
    """Return the column where aligned version ids start."""
    humanized_width = max((len(row.creation_time_humanized) for row in rows), default=0)
    return _TIMESTAMP_WIDTH + 1 + humanized_width + 1


def _summary_row(
    hidden_count: int,
    hidden_forks: list[str],
    rows: list[VersionRow],
    id_position: int,
) -> SummaryRow:
    """Build the summary row so fork labels line up after the nickname column."""
    id_width = max((len(row.version_id) for row in rows), default=0)
    nickname_width = max((len(row.nickname) for row in rows), default=0)
    slot_width = id_width + 1 + nickname_width
    text_width = len(SummaryRow(hidden_count, 0, 0).text)
    return SummaryRow(
        hidden_count=hidden_count,
        text_offset=id_position,
        forking_branches_offset=slot_width - min(text_width, slot_width) + 1,
        forking_branches=f"->[{', '.join(hidden_forks)}]" if hidden_forks else None,
    )


def _head_badge(head_branch: str | None) -> str:
    if head_branch is None:
        return "[HEAD]"
    return f"[HEAD = {head_branch}]"


def _humanize_age(creation_time: datetime, now: datetime) -> str:
    age = max(now - creation_time, timedelta(0))
    return humanize.naturaltime(age)
