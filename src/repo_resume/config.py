"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from repo_resume.services.commit_history import DEFAULT_COMMIT_LIMIT
from repo_resume.services.llm_providers import DEFAULT_GEMINI_MODEL

DEFAULT_PREFERENCES_PATH = Path("~/.config/repo-resume/preferences.json")
DEFAULT_LATEX_COMPILER = "pdflatex"


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(slots=True)
class ResumeConfig:
    """Settings passed explicitly into the pipeline.

    Attributes:
        gemini_api_key: Key for the Gemini provider; None disables generation.
        llm_provider: Provider name understood by ``LLMService.provider_from_name``.
        llm_model: Model identifier for the provider.
        github_token: Optional token for the GitHub profile import.
        commit_limit: Size of the analyzed commit window.
        preferences_path: Location of the persisted user preferences.
        latex_compiler: Executable used to build the PDF.
    """

    gemini_api_key: str | None = None
    llm_provider: str = "gemini"
    llm_model: str = DEFAULT_GEMINI_MODEL
    github_token: str | None = None
    commit_limit: int = DEFAULT_COMMIT_LIMIT
    preferences_path: Path = DEFAULT_PREFERENCES_PATH.expanduser()
    latex_compiler: str = DEFAULT_LATEX_COMPILER

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResumeConfig:
        """Build a config from ``environ`` (``os.environ`` after ``load_dotenv`` by default)."""
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            gemini_api_key=environ.get("GEMINI_API_KEY") or None,
            llm_provider=(environ.get("LLM_PROVIDER") or "gemini").lower(),
            llm_model=environ.get("LLM_MODEL") or DEFAULT_GEMINI_MODEL,
            github_token=environ.get("GITHUB_TOKEN") or None,
            commit_limit=_positive_int(environ.get("RESUME_COMMIT_LIMIT"), DEFAULT_COMMIT_LIMIT),
            preferences_path=Path(
                environ.get("RESUME_PREFERENCES_PATH") or DEFAULT_PREFERENCES_PATH
            ).expanduser(),
            latex_compiler=environ.get("RESUME_LATEX_COMPILER") or DEFAULT_LATEX_COMPILER,
        )

    @property
    def ai_available(self) -> bool:
        return bool(self.gemini_api_key)
