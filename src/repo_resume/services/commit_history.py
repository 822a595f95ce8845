"""Commit history extraction over a bounded window of recent commits.

Each commit's touched files are the two-way diff against the next older
commit in the window. The oldest commit in the window has no predecessor
inside the window, so its file list is always empty.
"""

from __future__ import annotations

import logging
from datetime import UTC
from pathlib import Path

from repo_resume.models.commits import CommitRecord, DateRange, RepositorySnapshot
from repo_resume.technology_inference import infer_languages
from repo_resume.utils.git import diff_file_list, get_recent_log, is_git_repo

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_LIMIT = 100


def extract_commits(repo_path: Path | str, limit: int = DEFAULT_COMMIT_LIMIT) -> list[CommitRecord]:
    """Return at most ``limit`` commits, newest first, annotated with touched files.

    Returns an empty list when ``repo_path`` is not a repository or any git
    query fails; callers treat that as "no history available".
    """
    repo = Path(repo_path)
    if limit <= 0:
        return []
    if not is_git_repo(repo):
        logger.warning("Not a git repository: %s", repo)
        return []

    try:
        entries = get_recent_log(repo, limit)
        records: list[CommitRecord] = []
        for index, entry in enumerate(entries):
            files: list[str] = []
            if index < len(entries) - 1:
                parent = entries[index + 1]
                files = diff_file_list(repo, parent.hash, entry.hash)
            records.append(
                CommitRecord(
                    hash=entry.hash,
                    author=entry.author,
                    authored_at=entry.authored_at,
                    subject=entry.subject,
                    files=tuple(files),
                )
            )
    except RuntimeError as exc:
        logger.warning("Could not read commit history for %s: %s", repo, exc)
        return []

    logger.debug("Extracted %d commits from %s", len(records), repo)
    return records


def _calendar_date(commit: CommitRecord) -> str:
    return commit.authored_at.astimezone(UTC).date().isoformat()


def build_snapshot(commits: list[CommitRecord]) -> RepositorySnapshot:
    """Aggregate one commit window.

    Raises:
        ValueError: If ``commits`` is empty.
    """
    if not commits:
        raise ValueError("Cannot build a repository snapshot without commits")

    window = tuple(commits)
    authors: list[str] = []
    for commit in window:
        if commit.author not in authors:
            authors.append(commit.author)

    oldest = min(window, key=lambda c: c.authored_at)
    newest = max(window, key=lambda c: c.authored_at)
    languages = infer_languages(path for commit in window for path in commit.files)

    return RepositorySnapshot(
        commits=window,
        total_commits=len(window),
        authors=tuple(authors),
        date_range=DateRange(start=_calendar_date(oldest), end=_calendar_date(newest)),
        languages=tuple(languages),
    )


def get_repository_snapshot(
    repo_path: Path | str, limit: int = DEFAULT_COMMIT_LIMIT
) -> RepositorySnapshot | None:
    """Extract commits and aggregate them, or return None when there is no history."""
    commits = extract_commits(repo_path, limit)
    if not commits:
        return None
    return build_snapshot(commits)


__all__ = [
    "DEFAULT_COMMIT_LIMIT",
    "build_snapshot",
    "extract_commits",
    "get_repository_snapshot",
]
