"""Table-driven language and technology inference.

Every function here is a pure lookup against the tables in
:mod:`repo_resume.constants.technology_constants`; nothing touches the network
or the file system.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath

from repo_resume.constants.technology_constants import (
    DATABASE_KEYWORDS,
    EXTENSION_LANGUAGE_MAP,
    FILENAME_LANGUAGE_MAP,
    FRAMEWORK_KEYWORDS,
    KEYWORD_SHADOWS,
    README_TECH_KEYWORDS,
    SKILL_CATEGORIES,
    SKILL_FALLBACK_KEYWORDS,
    TOOL_FILE_NAMES,
    TOOL_PATH_PREFIXES,
)


def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive substring containment of ``keyword`` in ``text``.

    Words listed for ``keyword`` in ``KEYWORD_SHADOWS`` are blanked out first,
    so ``"java"`` is not found in ``"JavaScript"``.
    """
    if not text or not keyword:
        return False
    needle = keyword.lower()
    haystack = text.lower()
    for shadow in KEYWORD_SHADOWS.get(needle, ()):
        haystack = haystack.replace(shadow, " ")
    return needle in haystack


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


def language_for_path(path: str) -> str | None:
    """Map a repository-relative path to a language name, or None if unknown."""
    posix = PurePosixPath(path.replace("\\", "/"))
    mapped = EXTENSION_LANGUAGE_MAP.get(posix.suffix.lower())
    if mapped is not None:
        return mapped
    return FILENAME_LANGUAGE_MAP.get(posix.name.lower())


def infer_languages(paths: Iterable[str]) -> list[str]:
    """Return distinct language names for ``paths`` in first-seen order.

    Unknown extensions are dropped silently.
    """
    return _unique(lang for lang in (language_for_path(p) for p in paths) if lang is not None)


# ---------------------------------------------------------------------------
# Frameworks / databases
# ---------------------------------------------------------------------------


def _match_keyword_table(
    table: Mapping[str, str],
    text: str | None,
    dependency_names: Iterable[str] | None,
) -> list[str]:
    normalized = (text or "").lower()
    deps = [str(name).lower() for name in (dependency_names or [])]
    found: list[str] = []
    for keyword, display in table.items():
        in_deps = any(contains_keyword(dep, keyword) for dep in deps)
        if in_deps or contains_keyword(normalized, keyword):
            found.append(display)
    return _unique(found)


def extract_frameworks(text: str | None = None, dependency_names: Iterable[str] | None = None) -> list[str]:
    """Map free text and dependency names to framework display names."""
    return _match_keyword_table(FRAMEWORK_KEYWORDS, text, dependency_names)


def extract_databases(text: str | None = None, dependency_names: Iterable[str] | None = None) -> list[str]:
    """Map free text and dependency names to datastore display names."""
    return _match_keyword_table(DATABASE_KEYWORDS, text, dependency_names)


# ---------------------------------------------------------------------------
# README technologies / skill fallback
# ---------------------------------------------------------------------------


def detect_readme_technologies(content: str) -> list[str]:
    """Return README_TECH_KEYWORDS entries that occur in ``content``."""
    lowered = content.lower()
    return _unique(tech for tech in README_TECH_KEYWORDS if contains_keyword(lowered, tech))


def extract_skills_fallback(context: str) -> dict[str, list[str]]:
    """Categorise skills by scanning ``context`` against the fallback keyword table.

    Returns:
        Mapping with ``technical``, ``frameworks``, ``tools`` and ``databases`` keys.
    """
    lowered = context.lower()
    skills: dict[str, list[str]] = {}
    for category in SKILL_CATEGORIES:
        table = SKILL_FALLBACK_KEYWORDS[category]
        skills[category] = _unique(
            display for keyword, display in table.items() if contains_keyword(lowered, keyword)
        )
    return skills


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def detect_tools_from_files(rel_paths: Iterable[str]) -> list[str]:
    """Detect development tools from project file names and path prefixes.

    Args:
        rel_paths: POSIX-style paths relative to the project root.

    Returns:
        Tool names in table order.
    """
    names: set[str] = set()
    normalized: list[str] = []
    for path in rel_paths:
        posix = path.replace("\\", "/")
        normalized.append(posix)
        names.add(PurePosixPath(posix).name)

    tools: list[str] = []
    for tool, file_names in TOOL_FILE_NAMES.items():
        if names & file_names:
            tools.append(tool)
    for tool, prefixes in TOOL_PATH_PREFIXES.items():
        if any(p.startswith(prefix) for p in normalized for prefix in prefixes):
            tools.append(tool)
    return tools


__all__ = [
    "contains_keyword",
    "detect_readme_technologies",
    "detect_tools_from_files",
    "extract_databases",
    "extract_frameworks",
    "extract_skills_fallback",
    "infer_languages",
    "language_for_path",
]
