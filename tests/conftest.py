from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest


def _run(cmd: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> None:
    subprocess.run(cmd, cwd=str(cwd), check=True, capture_output=True, text=True, env=env)


class GitRepoBuilder:
    """Build a throwaway repository with controlled authors and dates."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.clock = datetime(2024, 1, 10, 12, 0, tzinfo=UTC)
        _run(["git", "init", "-q", "--initial-branch=main"], cwd=root)
        _run(["git", "config", "user.name", "Tester"], cwd=root)
        _run(["git", "config", "user.email", "tester@example.com"], cwd=root)
        _run(["git", "config", "commit.gpgsign", "false"], cwd=root)

    def commit(
        self,
        files: dict[str, str],
        message: str,
        *,
        author: str = "Ada Lovelace",
        email: str = "ada@example.com",
        when: datetime | None = None,
    ) -> None:
        for name, content in files.items():
            path = self.root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            _run(["git", "add", name], cwd=self.root)

        if when is None:
            self.clock += timedelta(days=1)
            when = self.clock
        stamp = f"{int(when.timestamp())} +0000"
        env = os.environ.copy()
        env.update(
            {
                "GIT_AUTHOR_NAME": author,
                "GIT_AUTHOR_EMAIL": email,
                "GIT_COMMITTER_NAME": author,
                "GIT_COMMITTER_EMAIL": email,
                "GIT_AUTHOR_DATE": stamp,
                "GIT_COMMITTER_DATE": stamp,
            }
        )
        _run(["git", "commit", "-q", "-m", message], cwd=self.root, env=env)

    def add_remote(self, url: str, name: str = "origin") -> None:
        _run(["git", "remote", "add", name, url], cwd=self.root)


@pytest.fixture
def git_repo(tmp_path: Path) -> Callable[..., GitRepoBuilder]:
    """Factory returning a :class:`GitRepoBuilder` rooted under ``tmp_path``."""

    def _make(name: str = "repo") -> GitRepoBuilder:
        root = tmp_path / name
        root.mkdir()
        return GitRepoBuilder(root)

    return _make


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real API keys and preferences out of every test."""
    for var in (
        "GEMINI_API_KEY",
        "LLM_PROVIDER",
        "LLM_MODEL",
        "GITHUB_TOKEN",
        "RESUME_COMMIT_LIMIT",
        "RESUME_LATEX_COMPILER",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("RESUME_PREFERENCES_PATH", str(tmp_path / "prefs" / "preferences.json"))
