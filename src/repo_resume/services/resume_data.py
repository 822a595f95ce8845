"""Template-agnostic data contracts for resume generation.

These TypedDicts define the canonical resume document that flows from the
content synthesizer to every resume template. Templates depend ONLY on these
contracts.
"""

from __future__ import annotations

from typing import TypedDict

__all__ = [
    "ResumeDocument",
    "ResumeExperienceEntry",
    "ResumePersonalInfo",
    "ResumeProjectEntry",
    "ResumeSkills",
]


class ResumePersonalInfo(TypedDict):
    """Name, title and contact links shown in the resume header."""

    name: str
    title: str
    email: str
    github: str  # external profile link, may be empty


class ResumeSkills(TypedDict):
    """Skill lists split by category."""

    technical: list[str]
    frameworks: list[str]
    tools: list[str]
    databases: list[str]


class ResumeExperienceEntry(TypedDict):
    """A single experience record."""

    project_name: str
    description: str
    achievements: list[str]
    technologies: list[str]
    duration: str


class ResumeProjectEntry(TypedDict, total=False):
    """A single project record. ``url`` is optional."""

    name: str
    description: str
    technologies: list[str]
    highlights: list[str]
    url: str


class ResumeDocument(TypedDict, total=False):
    """Top-level bundle passed to every template's ``build()`` method.

    ``endorsements`` maps skill strings present in ``skills`` to their
    endorsers; it is display-only and never affects the skill lists.
    """

    personal_info: ResumePersonalInfo
    summary: str
    skills: ResumeSkills
    experience: list[ResumeExperienceEntry]
    projects: list[ResumeProjectEntry]
    endorsements: dict[str, list[str]]
