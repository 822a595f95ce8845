"""
End-to-end resume pipeline for one project root.

States advance ``IDLE -> COLLECTING_SIGNALS -> ASSISTED_SYNTHESIS and/or
FALLBACK_SYNTHESIS -> MERGING -> RENDERED``. A run that stops early ends in
``ABORTED`` with a reason and has written nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from repo_resume.config import ResumeConfig
from repo_resume.project_metadata import get_project_metadata
from repo_resume.services.commit_history import get_repository_snapshot
from repo_resume.services.content_synthesizer import ContentSynthesizer, UserInput
from repo_resume.services.endorsements import EndorsementStore
from repo_resume.services.github_import import (
    GitHubProfileImporter,
    ImportedProfile,
    ProfileImportError,
)
from repo_resume.services.llm_providers import LLMError
from repo_resume.services.llm_service import LLMService
from repo_resume.services.resume_data import ResumeDocument
from repo_resume.services.resume_generator import generate_resume_files
from repo_resume.templates import ResumeStyle, list_templates
from repo_resume.user_config import UserPreferences
from repo_resume.utils.git import get_remote_url, is_git_repo

logger = logging.getLogger(__name__)

ABORT_NOT_A_REPO = "not a git repository"
ABORT_NO_COMMITS = "no commits found"
ABORT_CANCELLED = "cancelled"


class PipelineState(str, Enum):
    IDLE = "idle"
    COLLECTING_SIGNALS = "collecting_signals"
    ASSISTED_SYNTHESIS = "assisted_synthesis"
    FALLBACK_SYNTHESIS = "fallback_synthesis"
    MERGING = "merging"
    RENDERED = "rendered"
    ABORTED = "aborted"


class Prompter(Protocol):
    """Host-side input collaborator. ``None`` answers mean the user cancelled."""

    def choose_style(self, styles: list[str], default: str | None) -> str | None: ...

    def ask(self, label: str, default: str = "") -> str | None: ...


Renderer = Callable[..., dict[str, Path]]


@dataclass(slots=True)
class ResumeRequest:
    """Per-run options gathered by the host."""

    project_root: Path
    style: str | None = None
    user: UserInput = field(default_factory=UserInput)
    github_handle: str | None = None
    use_ai: bool = True
    output_dir: Path | None = None
    tex_only: bool = False
    interactive: bool = True


@dataclass(slots=True)
class PipelineResult:
    state: PipelineState
    history: list[PipelineState] = field(default_factory=list)
    abort_reason: str | None = None
    document: ResumeDocument | None = None
    files: dict[str, Path] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)
    style: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.RENDERED


class ResumePipeline:
    """Run signal collection, synthesis, merging and rendering for one project.

    Args:
        config: Runtime configuration.
        prompter: Source of interactive answers; None runs non-interactively.
        llm: Text-generation service. When omitted one is built from
            ``config`` if an API key is configured.
        importer: Profile importer; a :class:`GitHubProfileImporter` by default.
        renderer: Callable with the signature of ``generate_resume_files``.
        preferences: Persisted preferences; loaded from
            ``config.preferences_path`` when omitted.
    """

    def __init__(
        self,
        config: ResumeConfig,
        *,
        prompter: Prompter | None = None,
        llm: LLMService | None = None,
        importer: GitHubProfileImporter | None = None,
        renderer: Renderer = generate_resume_files,
        preferences: UserPreferences | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self._llm = llm
        self._importer = importer
        self.renderer = renderer
        self.preferences = preferences or UserPreferences.load(config.preferences_path)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def _resolve_llm(self, use_ai: bool) -> LLMService | None:
        if not use_ai:
            return None
        if self._llm is not None:
            return self._llm
        if not self.config.ai_available:
            logger.info("No API key configured; generating content locally")
            return None
        try:
            provider = LLMService.provider_from_name(
                self.config.llm_provider,
                api_key=self.config.gemini_api_key,
                model=self.config.llm_model,
            )
        except LLMError as exc:
            logger.warning("Text generation unavailable, generating content locally: %s", exc)
            return None
        return LLMService(provider)

    def _import_profile(self, handle: str | None) -> ImportedProfile | None:
        if not handle:
            return None
        importer = self._importer or GitHubProfileImporter(token=self.config.github_token)
        try:
            profile = importer.fetch_profile(handle)
        except ProfileImportError as exc:
            logger.warning("Skipping profile import: %s", exc)
            return None
        self.preferences.last_import_handle = profile.handle
        return profile

    def _save_preferences(self) -> None:
        try:
            self.preferences.save(self.config.preferences_path)
        except OSError as exc:
            logger.warning("Could not save preferences to %s: %s", self.config.preferences_path, exc)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _resolve_style(self, request: ResumeRequest) -> str | None:
        if request.style:
            return request.style
        default = self.preferences.last_style or ResumeStyle.MODERN.value
        if self.prompter is None or not request.interactive:
            return default
        return self.prompter.choose_style(list_templates(), default)

    def _complete_user_input(self, request: ResumeRequest) -> tuple[UserInput, str | None]:
        user = request.user
        handle = request.github_handle
        if self.prompter is None or not request.interactive:
            return user, handle

        def ask(label: str, current: str, default: str = "") -> str:
            if current:
                return current
            answer = self.prompter.ask(label, default)
            return (answer or "").strip()

        completed = UserInput(
            name=ask("Full name (blank uses the git author)", user.name),
            email=ask("Email (blank uses the git author email)", user.email),
            title=ask("Professional title", user.title, "Software Developer"),
            skills=ask("Additional skills, comma separated", user.skills),
        )
        if handle is None:
            handle = ask(
                "GitHub handle to import (optional)", "", self.preferences.last_import_handle or ""
            ) or None
        return completed, handle

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, request: ResumeRequest) -> PipelineResult:
        """Execute one run.

        Raises:
            RenderError: If rendering fails. Nothing is written in that case.
        """
        root = Path(request.project_root)
        result = PipelineResult(state=PipelineState.IDLE, history=[PipelineState.IDLE])

        def advance(state: PipelineState) -> None:
            result.state = state
            result.history.append(state)
            logger.debug("Pipeline state: %s", state.value)

        def abort(reason: str) -> PipelineResult:
            advance(PipelineState.ABORTED)
            result.abort_reason = reason
            logger.info("Pipeline aborted: %s", reason)
            return result

        advance(PipelineState.COLLECTING_SIGNALS)
        if not is_git_repo(root):
            return abort(ABORT_NOT_A_REPO)

        snapshot = get_repository_snapshot(root, self.config.commit_limit)
        if snapshot is None:
            return abort(ABORT_NO_COMMITS)

        style = self._resolve_style(request)
        if not style:
            return abort(ABORT_CANCELLED)
        result.style = style
        user, handle = self._complete_user_input(request)

        metadata = get_project_metadata(root)
        remote_url = get_remote_url(root)
        profile = self._import_profile(handle)
        endorsements = EndorsementStore(root).load()

        llm = self._resolve_llm(request.use_ai)
        advance(
            PipelineState.ASSISTED_SYNTHESIS if llm is not None else PipelineState.FALLBACK_SYNTHESIS
        )
        synthesis = ContentSynthesizer(llm).synthesize(
            snapshot,
            metadata,
            user=user,
            profile=profile,
            endorsements=endorsements,
            remote_url=remote_url,
        )
        if llm is not None and "fallback" in synthesis.sources.values():
            advance(PipelineState.FALLBACK_SYNTHESIS)
        result.sources = dict(synthesis.sources)

        advance(PipelineState.MERGING)
        result.document = synthesis.document

        result.files = self.renderer(
            synthesis.document,
            request.output_dir or root,
            style,
            compiler=self.config.latex_compiler,
            tex_only=request.tex_only,
        )
        advance(PipelineState.RENDERED)

        self.preferences.last_style = style
        self._save_preferences()
        return result


__all__ = [
    "ABORT_CANCELLED",
    "ABORT_NOT_A_REPO",
    "ABORT_NO_COMMITS",
    "PipelineResult",
    "PipelineState",
    "Prompter",
    "ResumePipeline",
    "ResumeRequest",
]
