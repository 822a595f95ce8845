"""Import a public GitHub profile and its repositories over the REST API."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
DEFAULT_MAX_REPOS = 6
NO_DESCRIPTION = "No description provided."
README_DESCRIPTION_MAX_CHARS = 200


class ProfileImportError(RuntimeError):
    """Raised when a profile cannot be imported."""


@dataclass(slots=True)
class ImportedRepository:
    """Summary of one imported repository."""

    name: str
    description: str
    url: str
    language: str | None = None


@dataclass(slots=True)
class ImportedProfile:
    """Profile record returned by :class:`GitHubProfileImporter`.

    ``languages`` holds the distinct primary languages of the imported
    repositories in first-seen order.
    """

    handle: str
    name: str = ""
    email: str = ""
    bio: str = ""
    url: str = ""
    languages: list[str] = field(default_factory=list)
    repositories: list[ImportedRepository] = field(default_factory=list)


def _readme_summary(markdown: str) -> str:
    """First prose paragraph of a README, skipping headings and badges."""
    paragraph: list[str] = []
    for raw in markdown.splitlines():
        line = raw.strip()
        if not line:
            if paragraph:
                break
            continue
        if line.startswith(("#", "![", "[![", "<")):
            if paragraph:
                break
            continue
        paragraph.append(line)
    text = " ".join(paragraph)
    if len(text) > README_DESCRIPTION_MAX_CHARS:
        text = text[:README_DESCRIPTION_MAX_CHARS].rstrip() + "..."
    return text


class GitHubProfileImporter:
    """Fetch a user's profile and most recently updated repositories.

    Args:
        session: HTTP session to use; a new ``requests.Session`` by default.
        token: Optional token sent as a bearer ``Authorization`` header.
        max_repos: Upper bound on imported repositories.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        token: str | None = None,
        max_repos: int = DEFAULT_MAX_REPOS,
        timeout: float = 15.0,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self.max_repos = max_repos
        self.timeout = timeout
        self.api_url = api_url.rstrip("/")

    def _get_json(self, path: str, **params: Any) -> Any:
        response = self.session.get(f"{self.api_url}{path}", params=params or None, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_profile(self, handle: str) -> ImportedProfile:
        """Import ``handle``'s profile and repositories.

        Raises:
            ProfileImportError: If the handle is blank or the user or repository
                listing cannot be fetched.
        """
        handle = handle.strip().lstrip("@")
        if not handle:
            raise ProfileImportError("GitHub handle must not be empty")

        try:
            user = self._get_json(f"/users/{handle}")
            repos = self._get_json(
                f"/users/{handle}/repos", sort="updated", direction="desc", per_page=100
            )
        except (requests.RequestException, ValueError) as exc:
            raise ProfileImportError(f"Failed to import GitHub profile {handle!r}: {exc}") from exc

        if not isinstance(user, dict) or not isinstance(repos, list):
            raise ProfileImportError(f"Unexpected response shape for GitHub profile {handle!r}")

        repositories: list[ImportedRepository] = []
        for repo in repos:
            if len(repositories) >= self.max_repos:
                break
            if not isinstance(repo, dict) or repo.get("fork"):
                continue
            repositories.append(self._to_repository(handle, repo))

        languages: list[str] = []
        for repo in repositories:
            if repo.language and repo.language not in languages:
                languages.append(repo.language)

        logger.info("Imported %d repositories for GitHub user %s", len(repositories), handle)
        return ImportedProfile(
            handle=handle,
            name=user.get("name") or "",
            email=user.get("email") or "",
            bio=user.get("bio") or "",
            url=user.get("html_url") or f"https://github.com/{handle}",
            languages=languages,
            repositories=repositories,
        )

    def _to_repository(self, handle: str, repo: dict[str, Any]) -> ImportedRepository:
        name = str(repo.get("name") or "")
        description = (repo.get("description") or "").strip()
        if not description:
            description = self.fetch_readme_description(handle, name)
        return ImportedRepository(
            name=name,
            description=description,
            url=repo.get("html_url") or f"https://github.com/{handle}/{name}",
            language=repo.get("language") or None,
        )

    def fetch_readme_description(self, handle: str, repo_name: str) -> str:
        """Describe a repository from its README, or return the placeholder on any failure."""
        try:
            payload = self._get_json(f"/repos/{handle}/{repo_name}/readme")
            content = base64.b64decode(payload.get("content", "")).decode("utf-8", errors="replace")
        except (requests.RequestException, ValueError, AttributeError) as exc:
            logger.debug("No README description for %s/%s: %s", handle, repo_name, exc)
            return NO_DESCRIPTION
        return _readme_summary(content) or NO_DESCRIPTION


__all__ = [
    "DEFAULT_MAX_REPOS",
    "GitHubProfileImporter",
    "ImportedProfile",
    "ImportedRepository",
    "NO_DESCRIPTION",
    "ProfileImportError",
]
