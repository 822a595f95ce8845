"""Project manifest and README reader.

Absence of either file is a normal state: the readers return ``None`` and the
synthesizer falls back to repository-only content.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import Path
from typing import Any

from repo_resume.constants.technology_constants import MANIFEST_CANDIDATES, README_CANDIDATES
from repo_resume.file_walker import DirectoryWalker, ExcludePredicate
from repo_resume.models.metadata import ManifestData, ProjectMetadata, ReadmeData
from repo_resume.technology_inference import detect_readme_technologies, detect_tools_from_files

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_CHARS = 200

_TITLE_RE = re.compile(r"^#(?!#)\s+(?P<text>.+)$")
_SECTION_RE = re.compile(r"^##(?!#)\s+(?P<text>.+)$")
_BULLET_PREFIXES = ("- ", "* ")


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


def _str_mapping(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _author_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        name = value.get("name") or ""
        email = value.get("email")
        return f"{name} <{email}>" if email else str(name)
    return ""


def parse_package_json(text: str) -> ManifestData | None:
    """Parse ``package.json`` text, returning None when it is not a JSON object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Malformed package.json ignored: %s", exc)
        return None
    if not isinstance(data, dict):
        logger.warning("package.json is not a JSON object; ignoring it")
        return None

    return ManifestData(
        source="package.json",
        name=str(data.get("name") or ""),
        version=str(data.get("version") or ""),
        description=str(data.get("description") or ""),
        dependencies=_str_mapping(data.get("dependencies")),
        dev_dependencies=_str_mapping(data.get("devDependencies")),
        scripts=_str_mapping(data.get("scripts")),
        keywords=_str_list(data.get("keywords")),
        author=_author_text(data.get("author")),
        license=str(data.get("license") or ""),
        repository=data.get("repository"),
    )


def _requirement_name(requirement: str) -> str:
    # "fastapi[all]>=0.100 ; python_version>'3.10'" -> "fastapi"
    name = re.split(r"[\s\[<>=!~;@]", requirement.strip(), maxsplit=1)[0]
    return name.lower()


def _requirement_version(requirement: str, name: str) -> str:
    rest = requirement.strip()[len(name) :].strip()
    return rest or "*"


def parse_pyproject(text: str) -> ManifestData | None:
    """Parse the ``[project]`` table of ``pyproject.toml`` text."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Malformed pyproject.toml ignored: %s", exc)
        return None

    project = data.get("project")
    if not isinstance(project, dict):
        logger.warning("pyproject.toml has no [project] table; ignoring it")
        return None

    dependencies: dict[str, str] = {}
    for requirement in _str_list(project.get("dependencies")):
        name = _requirement_name(requirement)
        if name:
            dependencies[name] = _requirement_version(requirement, name)

    dev_dependencies: dict[str, str] = {}
    optional = project.get("optional-dependencies")
    if isinstance(optional, dict):
        for requirements in optional.values():
            for requirement in _str_list(requirements):
                name = _requirement_name(requirement)
                if name and name not in dependencies:
                    dev_dependencies[name] = _requirement_version(requirement, name)

    authors = project.get("authors")
    author = _author_text(authors[0]) if isinstance(authors, list) and authors else ""

    urls = project.get("urls")
    repository = None
    if isinstance(urls, dict):
        for key in ("Repository", "repository", "Source", "source", "Homepage", "homepage"):
            if isinstance(urls.get(key), str):
                repository = urls[key]
                break

    license_value = project.get("license")
    if isinstance(license_value, dict):
        license_value = license_value.get("text") or license_value.get("file")

    return ManifestData(
        source="pyproject.toml",
        name=str(project.get("name") or ""),
        version=str(project.get("version") or ""),
        description=str(project.get("description") or ""),
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        scripts=_str_mapping(project.get("scripts")),
        keywords=_str_list(project.get("keywords")),
        author=author,
        license=str(license_value or ""),
        repository=repository,
    )


_MANIFEST_PARSERS = {
    "package.json": parse_package_json,
    "pyproject.toml": parse_pyproject,
}


def read_manifest(root: Path | str) -> ManifestData | None:
    """Read the first existing manifest candidate under ``root``."""
    root = Path(root)
    for candidate in MANIFEST_CANDIDATES:
        path = root / candidate
        if not path.is_file():
            continue
        text = _read_text(path)
        if text is None:
            return None
        return _MANIFEST_PARSERS[candidate](text)
    logger.info("No project manifest found in %s", root)
    return None


# ---------------------------------------------------------------------------
# README
# ---------------------------------------------------------------------------


def extract_title(lines: list[str]) -> str:
    """Return the text of the first level-one heading, or an empty string."""
    for line in lines:
        match = _TITLE_RE.match(line.strip())
        if match:
            return match.group("text").strip()
    return ""


def extract_description(lines: list[str]) -> str:
    """Accumulate prose after the title until the first ``##`` heading or the length cap.

    Without a title, accumulation starts at the top of the document.
    """
    start = 0
    for index, line in enumerate(lines):
        if _TITLE_RE.match(line.strip()):
            start = index + 1
            break

    description = ""
    for line in lines[start:]:
        trimmed = line.strip()
        if _SECTION_RE.match(trimmed):
            break
        if not trimmed or trimmed.startswith("#"):
            continue
        description += trimmed + " "
        if len(description) > DESCRIPTION_MAX_CHARS:
            break
    return description.strip()


def extract_sections(lines: list[str]) -> list[str]:
    """Return every ``##`` heading in document order."""
    sections: list[str] = []
    for line in lines:
        match = _SECTION_RE.match(line.strip())
        if match:
            sections.append(match.group("text").strip())
    return sections


def extract_features(lines: list[str]) -> list[str]:
    """Return bullet items found inside ``##`` sections whose heading mentions "feature"."""
    features: list[str] = []
    in_features = False
    for line in lines:
        trimmed = line.strip()
        match = _SECTION_RE.match(trimmed)
        if match:
            in_features = "feature" in match.group("text").lower()
            continue
        if in_features and trimmed.startswith(_BULLET_PREFIXES):
            feature = trimmed[2:].strip()
            if feature:
                features.append(feature)
    return features


def parse_readme(content: str, source: str = "README.md") -> ReadmeData:
    """Run every extraction pass independently over the same line array."""
    lines = content.splitlines()
    return ReadmeData(
        source=source,
        content=content,
        title=extract_title(lines),
        description=extract_description(lines),
        sections=extract_sections(lines),
        technologies=detect_readme_technologies(content),
        features=extract_features(lines),
    )


def read_readme(root: Path | str) -> ReadmeData | None:
    """Parse the first README candidate that exists under ``root``."""
    root = Path(root)
    for candidate in README_CANDIDATES:
        path = root / candidate
        if not path.is_file():
            continue
        content = _read_text(path)
        if content is None:
            return None
        return parse_readme(content, source=candidate)
    logger.info("No README found in %s", root)
    return None


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


def get_project_metadata(
    root: Path | str,
    *,
    exclude: set[ExcludePredicate] | None = None,
) -> ProjectMetadata:
    """Read manifest, README and tool signals for ``root``.

    The project name resolves to the manifest name, then the README title,
    then the directory name.
    """
    root = Path(root)
    manifest = read_manifest(root)
    readme = read_readme(root)

    try:
        tools = detect_tools_from_files(DirectoryWalker.walk(root, exclude).paths)
    except ValueError:
        tools = []

    project_name = (
        (manifest.name if manifest else "") or (readme.title if readme else "") or root.resolve().name
    )
    return ProjectMetadata(
        project_name=project_name,
        project_path=root,
        manifest=manifest,
        readme=readme,
        tools=tools,
    )


__all__ = [
    "DESCRIPTION_MAX_CHARS",
    "extract_description",
    "extract_features",
    "extract_sections",
    "extract_title",
    "get_project_metadata",
    "parse_package_json",
    "parse_pyproject",
    "parse_readme",
    "read_manifest",
    "read_readme",
]
