"""Display row models produced by the history formatter."""

from __future__ import annotations

from dataclasses import dataclass

UNCOMMITTED_CHANGES_TEXT = "(uncommitted changes)"
_CLEARANCE = " "


@dataclass(frozen=True)
class VersionRow:
    """One rendered lineage version with pre-padded columns.

    Attributes:
        creation_time: Fixed-width local timestamp.
        creation_time_humanized: Relative time, left-aligned to the widest row.
        version_id: Display id, left-aligned to the widest row.
        nickname: Nickname, right-aligned to the widest row.
        head_badge: ``[HEAD = name]`` or ``[HEAD]`` on the head row.
        other_branches_here: Branches targeting this version, head branch excluded.
        forking_branches: Branches diverging from this version.
        description: Version description when non-empty.
    """

    creation_time: str
    creation_time_humanized: str
    version_id: str
    nickname: str
    head_badge: str | None = None
    other_branches_here: str | None = None
    forking_branches: str | None = None
    description: str | None = None

    def render(self) -> str:
        fields = [
            self.creation_time,
            self.creation_time_humanized,
            self.version_id,
            self.nickname,
            self.head_badge,
            self.other_branches_here,
            self.forking_branches,
            self.description,
        ]
        return _CLEARANCE.join(field for field in fields if field is not None)


@dataclass(frozen=True)
class SummaryRow:
    """Collapsed row standing in for versions older than the display limit.

    Attributes:
        hidden_count: Number of lineage versions not rendered.
        text_offset: Column where the summary text starts.
        forking_branches_offset: Gap between summary text and fork labels.
        forking_branches: Fork labels whose join point is hidden.
    """

    hidden_count: int
    text_offset: int
    forking_branches_offset: int
    forking_branches: str | None = None

    @property
    def text(self) -> str:
        return f"...{self.hidden_count} more versions"

    def render(self) -> str:
        line = " " * self.text_offset + self.text
        if self.forking_branches is not None:
            line += " " * self.forking_branches_offset + self.forking_branches
        return line


@dataclass(frozen=True)
class UncommittedRow:
    """Trailing marker for a tracked file that differs from head."""

    offset: int

    def render(self) -> str:
        return " " * self.offset + UNCOMMITTED_CHANGES_TEXT


@dataclass(frozen=True)
class HistoryView:
    """Prepared history: summary, versions oldest first, uncommitted marker."""

    summary: SummaryRow | None
    versions: tuple[VersionRow, ...]
    uncommitted: UncommittedRow | None

    def lines(self) -> list[str]:
        """Render all rows in display order."""
        rendered: list[str] = []
        if self.summary is not None:
            rendered.append(self.summary.render())
        rendered.extend(row.render() for row in self.versions)
        if self.uncommitted is not None:
            rendered.append(self.uncommitted.render())
        return rendered
