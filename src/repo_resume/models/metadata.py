"""Data models for project manifest and README metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class ManifestData:
    """Normalized fields read from a project manifest (``package.json`` or ``pyproject.toml``).

    Attributes:
        source: File name the data was read from.
        repository: Raw repository reference; a URL string or a mapping with a ``url`` key.
    """

    source: str
    name: str = ""
    version: str = ""
    description: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    scripts: dict[str, str] = field(default_factory=dict)
    keywords: list[str] = field(default_factory=list)
    author: str = ""
    license: str = ""
    repository: Any = None

    @property
    def dependency_names(self) -> list[str]:
        """Runtime and dev dependency names, runtime first."""
        names = list(self.dependencies)
        names.extend(name for name in self.dev_dependencies if name not in self.dependencies)
        return names

    @property
    def repository_url(self) -> str:
        repo = self.repository
        if isinstance(repo, str):
            return repo
        if isinstance(repo, dict):
            url = repo.get("url")
            if isinstance(url, str):
                return url
        return ""


@dataclass(slots=True)
class ReadmeData:
    """Heuristic extraction results for a README-like file."""

    source: str
    content: str
    title: str = ""
    description: str = ""
    sections: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ProjectMetadata:
    """Manifest and README data for a project root. Either half may be ``None``."""

    project_name: str
    project_path: Path
    manifest: ManifestData | None = None
    readme: ReadmeData | None = None
    tools: list[str] = field(default_factory=list)

    @property
    def description(self) -> str:
        """README description, then manifest description, else empty."""
        if self.readme and self.readme.description:
            return self.readme.description
        if self.manifest and self.manifest.description:
            return self.manifest.description
        return ""
