"""Utility functions and helpers"""

from repo_resume.utils.git import (
    get_current_branch,
    get_remote_url,
    is_git_repo,
    run_git,
)

__all__ = [
    "get_current_branch",
    "get_remote_url",
    "is_git_repo",
    "run_git",
]
