"""Order-preserving, case-insensitive merging of skill and string lists."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from repo_resume.services.resume_data import ResumeSkills


def merge_unique(*sources: Iterable[str] | None) -> list[str]:
    """Union string sequences, keeping the first-seen casing and order.

    Entries are trimmed; blanks and non-strings are dropped. Two entries are
    the same when their trimmed, case-folded forms match.

    >>> merge_unique(["React", "Go"], ["react", "Rust"])
    ['React', 'Go', 'Rust']
    """
    seen: set[str] = set()
    merged: list[str] = []
    for source in sources:
        if not source:
            continue
        for item in source:
            if not isinstance(item, str):
                continue
            value = item.strip()
            key = value.casefold()
            if not value or key in seen:
                continue
            seen.add(key)
            merged.append(value)
    return merged


def split_user_skills(text: str | None) -> list[str]:
    """Split comma-separated user input into trimmed, de-duplicated skills."""
    if not text:
        return []
    return merge_unique(part.strip() for part in text.split(","))


def merge_skill_sources(
    synthesized: ResumeSkills,
    *,
    languages: Sequence[str] = (),
    frameworks: Sequence[str] = (),
    databases: Sequence[str] = (),
    readme_technologies: Sequence[str] = (),
    readme_features: Sequence[str] = (),
    user_skills: Sequence[str] = (),
    imported_languages: Sequence[str] = (),
) -> ResumeSkills:
    """Union every skill signal into the four skill categories.

    Synthesized values always lead. Inferred frameworks and datastores join
    their own categories; languages, README technologies, README features,
    user-entered skills and imported languages join ``technical``.
    """
    return {
        "technical": merge_unique(
            synthesized.get("technical"),
            languages,
            readme_technologies,
            readme_features,
            user_skills,
            imported_languages,
        ),
        "frameworks": merge_unique(synthesized.get("frameworks"), frameworks),
        "tools": merge_unique(synthesized.get("tools")),
        "databases": merge_unique(synthesized.get("databases"), databases),
    }


def collect_endorsements(
    skills: ResumeSkills, table: Mapping[str, Sequence[str]]
) -> dict[str, list[str]]:
    """Return endorsers for every displayed skill that has at least one.

    Lookup is by exact skill string. The skill lists are not modified.
    """
    annotations: dict[str, list[str]] = {}
    for category in ("technical", "frameworks", "tools", "databases"):
        for skill in skills.get(category, []):
            endorsers = table.get(skill)
            if endorsers and skill not in annotations:
                annotations[skill] = list(endorsers)
    return annotations


__all__ = [
    "collect_endorsements",
    "merge_skill_sources",
    "merge_unique",
    "split_user_skills",
]
