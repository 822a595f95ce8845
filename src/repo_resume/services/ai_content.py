"""Validated shapes for generated resume sections.

Generated JSON is never trusted structurally. Each payload model coerces what
it can and downgrades any field that fails its shape check to "absent"
(``None``) instead of rejecting the whole payload. Callers then decide whether
enough survived to use the section.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = [
    "ExperiencePayload",
    "ProjectPayload",
    "SkillsPayload",
    "parse_experience_list",
    "parse_project_list",
]


def _string_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _string_list_or_none(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SkillsPayload(_Payload):
    """Categorised skills object: ``{"technical": [...], "frameworks": [...], ...}``."""

    technical: list[str] | None = None
    frameworks: list[str] | None = None
    tools: list[str] | None = None
    databases: list[str] | None = None

    @field_validator("technical", "frameworks", "tools", "databases", mode="before")
    @classmethod
    def _list_shape(cls, value: Any) -> list[str] | None:
        return _string_list_or_none(value)

    def is_empty(self) -> bool:
        return not any((self.technical, self.frameworks, self.tools, self.databases))


class ExperiencePayload(_Payload):
    """One generated experience entry. Accepts camelCase keys."""

    project_name: str | None = None
    description: str | None = None
    achievements: list[str] | None = None
    technologies: list[str] | None = None
    duration: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> ExperiencePayload | None:
        if not isinstance(raw, dict):
            return None
        data = dict(raw)
        if "projectName" in data and "project_name" not in data:
            data["project_name"] = data.pop("projectName")
        return cls.model_validate(data)

    @field_validator("project_name", "description", "duration", mode="before")
    @classmethod
    def _string_shape(cls, value: Any) -> str | None:
        return _string_or_none(value)

    @field_validator("achievements", "technologies", mode="before")
    @classmethod
    def _list_shape(cls, value: Any) -> list[str] | None:
        return _string_list_or_none(value)


class ProjectPayload(_Payload):
    """One generated project entry."""

    name: str | None = None
    description: str | None = None
    technologies: list[str] | None = None
    highlights: list[str] | None = None
    url: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> ProjectPayload | None:
        if not isinstance(raw, dict):
            return None
        return cls.model_validate(raw)

    @field_validator("name", "description", "url", mode="before")
    @classmethod
    def _string_shape(cls, value: Any) -> str | None:
        return _string_or_none(value)

    @field_validator("technologies", "highlights", mode="before")
    @classmethod
    def _list_shape(cls, value: Any) -> list[str] | None:
        return _string_list_or_none(value)


def parse_experience_list(raw: Any) -> list[ExperiencePayload]:
    """Validate a JSON array of experience entries, dropping entries without a name."""
    if not isinstance(raw, list):
        return []
    entries = (ExperiencePayload.from_raw(item) for item in raw)
    return [entry for entry in entries if entry is not None and entry.project_name]


def parse_project_list(raw: Any) -> list[ProjectPayload]:
    """Validate a JSON array of project entries, dropping entries without a name."""
    if not isinstance(raw, list):
        return []
    entries = (ProjectPayload.from_raw(item) for item in raw)
    return [entry for entry in entries if entry is not None and entry.name]
