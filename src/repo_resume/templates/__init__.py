"""Template registry for resume generation."""

from __future__ import annotations

from enum import Enum

from repo_resume.templates.base import ResumeTemplate
from repo_resume.templates.classic import ClassicResumeTemplate
from repo_resume.templates.developer import DeveloperResumeTemplate
from repo_resume.templates.minimal import MinimalResumeTemplate
from repo_resume.templates.modern import ModernResumeTemplate

__all__ = [
    "ResumeStyle",
    "ResumeTemplate",
    "get_template",
    "list_templates",
]


class ResumeStyle(str, Enum):
    """Supported document styles."""

    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"
    DEVELOPER = "developer"


_REGISTRY: dict[str, ResumeTemplate] = {
    ResumeStyle.MODERN.value: ModernResumeTemplate(),
    ResumeStyle.CLASSIC.value: ClassicResumeTemplate(),
    ResumeStyle.MINIMAL.value: MinimalResumeTemplate(),
    ResumeStyle.DEVELOPER.value: DeveloperResumeTemplate(),
}


def get_template(name: str | ResumeStyle) -> ResumeTemplate:
    """Return the template registered under *name*.

    Raises:
        ValueError: If no template with that name exists.
    """
    key = name.value if isinstance(name, ResumeStyle) else str(name).strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        available = ", ".join(list_templates())
        msg = f"Unknown template {name!r}. Available: {available}"
        raise ValueError(msg) from None


def list_templates() -> list[str]:
    """Return style names in menu order."""
    return [style.value for style in ResumeStyle]
