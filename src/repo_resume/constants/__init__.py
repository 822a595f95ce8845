from __future__ import annotations

from repo_resume.constants.technology_constants import (
    DATABASE_KEYWORDS,
    EXTENSION_LANGUAGE_MAP,
    FRAMEWORK_KEYWORDS,
    README_TECH_KEYWORDS,
)

__all__ = [
    "DATABASE_KEYWORDS",
    "EXTENSION_LANGUAGE_MAP",
    "FRAMEWORK_KEYWORDS",
    "README_TECH_KEYWORDS",
]
