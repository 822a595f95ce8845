"""Data models for version-control history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class CommitRecord:
    """A single commit extracted from the repository log.

    Attributes:
        hash: Full commit hash.
        author: Author display string, ``"Name <email>"``.
        authored_at: Timezone-aware author timestamp.
        subject: First line of the commit message.
        files: Repository-relative paths that differ from the previous commit
            in the analyzed window. Empty for the oldest commit in the window.
    """

    hash: str
    author: str
    authored_at: datetime
    subject: str
    files: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class DateRange:
    """Inclusive calendar range, both bounds as ``YYYY-MM-DD`` strings."""

    start: str
    end: str


@dataclass(slots=True, frozen=True)
class RepositorySnapshot:
    """Aggregate view over one bounded window of commits.

    Every aggregate (counts, authors, date range, languages) is computed from
    the same ``commits`` tuple.
    """

    commits: tuple[CommitRecord, ...]
    total_commits: int
    authors: tuple[str, ...]
    date_range: DateRange
    languages: tuple[str, ...] = field(default_factory=tuple)

    @property
    def recent_subjects(self) -> list[str]:
        return [commit.subject for commit in self.commits]
