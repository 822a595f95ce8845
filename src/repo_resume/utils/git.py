"""Git related utilities."""

from __future__ import annotations

import datetime
import subprocess
from dataclasses import dataclass
from pathlib import Path

# Unit separator keeps subjects containing "|" or tabs intact.
_FIELD_SEP = "\x1f"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%aI", "%s", "%an", "%ae"])

# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class LogEntry:
    """Represents one line of ``git log`` output in :data:`_LOG_FORMAT`."""

    hash: str
    authored_at: datetime.datetime
    subject: str
    author_name: str
    author_email: str

    @property
    def author(self) -> str:
        return f"{self.author_name} <{self.author_email}>"


# ---------------------------------------------------------------------------
# Git Execution
# ---------------------------------------------------------------------------


def is_git_repo(path: Path | str) -> bool:
    """Return True when ``path`` is inside a Git working tree.

    Uses ``git rev-parse --is-inside-work-tree`` for robustness across
    subdirectories, worktrees, and submodules.
    """
    try:
        result = subprocess.run(
            ["git", "-C", str(path), "rev-parse", "--is-inside-work-tree"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        return result.returncode == 0
    except (OSError, ValueError):
        return False


def run_git(repo: Path | str, *args: str) -> str:
    """Run a git command inside `repo` and return its stdout.

    Raises:
        RuntimeError: if the command exits with a non-zero status or git is missing.
    """
    repo_path = Path(repo)
    try:
        proc = subprocess.run(
            ["git", "-C", str(repo_path), *args],
            check=True,
            capture_output=True,
            text=True,
        )
        return proc.stdout
    except subprocess.CalledProcessError as exc:
        raise RuntimeError(f"git command failed ({' '.join(args)}): {exc.stderr.strip()}") from exc
    except OSError as exc:
        raise RuntimeError(f"git could not be executed: {exc}") from exc


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_log(output: str) -> list[LogEntry]:
    """Convert ``git log --format=<_LOG_FORMAT>`` output to structured entries.

    Lines with the wrong field count or an unparsable date are skipped.
    """
    entries: list[LogEntry] = []
    for line in output.splitlines():
        parts = line.split(_FIELD_SEP)
        if len(parts) != 5:
            continue
        sha, date_s, subject, name, email = parts
        try:
            authored_at = datetime.datetime.fromisoformat(date_s.strip())
        except ValueError:
            continue
        entries.append(
            LogEntry(
                hash=sha.strip(),
                authored_at=authored_at,
                subject=subject.strip(),
                author_name=name.strip(),
                author_email=email.strip(),
            )
        )
    return entries


def parse_name_only(output: str) -> list[str]:
    """Return non-blank paths from ``git diff --name-only`` output."""
    return [line.strip() for line in output.splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_recent_log(repo: Path | str, limit: int) -> list[LogEntry]:
    """Return at most ``limit`` commits reachable from HEAD, newest first."""
    output = run_git(repo, "log", f"--max-count={int(limit)}", f"--format={_LOG_FORMAT}")
    return parse_log(output)


def diff_file_list(repo: Path | str, base: str, head: str) -> list[str]:
    """Return paths that differ between two revisions (two-way diff)."""
    output = run_git(repo, "diff", "--name-only", base, head)
    return parse_name_only(output)


def get_current_branch(repo: Path | str) -> str:
    """Return the checked-out branch name, ``"main"`` when it cannot be determined."""
    try:
        branch = run_git(repo, "rev-parse", "--abbrev-ref", "HEAD").strip()
    except RuntimeError:
        return "main"
    if not branch or branch == "HEAD":
        return "main"
    return branch


def get_remote_url(repo: Path | str, remote: str = "origin") -> str | None:
    """Return the fetch URL of ``remote`` or None if it is not configured."""
    try:
        url = run_git(repo, "remote", "get-url", remote).strip()
    except RuntimeError:
        return None
    return url or None


__all__ = [
    "LogEntry",
    "is_git_repo",
    "run_git",
    "parse_log",
    "parse_name_only",
    "get_recent_log",
    "diff_file_list",
    "get_current_branch",
    "get_remote_url",
]
