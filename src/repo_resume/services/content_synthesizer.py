"""
Content synthesis for the resume document.

Turns a :class:`RepositorySnapshot` and :class:`ProjectMetadata` (plus optional
generated text, user input, an imported profile and endorsements) into one
:class:`ResumeDocument`.

Each of the four generated sections (summary, skills, experience, projects)
is requested independently. A section whose call fails, or whose response has
no usable JSON, falls back to deterministic synthesis without affecting the
other three.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from repo_resume.models.commits import RepositorySnapshot
from repo_resume.models.metadata import ProjectMetadata
from repo_resume.services.ai_content import (
    SkillsPayload,
    parse_experience_list,
    parse_project_list,
)
from repo_resume.services.github_import import ImportedProfile
from repo_resume.services.llm_providers import GenerationSettings, LLMError
from repo_resume.services.llm_service import LLMService
from repo_resume.services.resume_data import (
    ResumeDocument,
    ResumeExperienceEntry,
    ResumePersonalInfo,
    ResumeProjectEntry,
    ResumeSkills,
)
from repo_resume.services.skill_merge import (
    collect_endorsements,
    merge_skill_sources,
    merge_unique,
    split_user_skills,
)
from repo_resume.technology_inference import (
    extract_databases,
    extract_frameworks,
    extract_skills_fallback,
)

logger = logging.getLogger(__name__)

SectionSource = Literal["ai", "fallback"]

RECENT_COMMIT_SAMPLE = 10

# JSON sections are sampled cooler than the prose summary.
STRUCTURED_SETTINGS = GenerationSettings(temperature=0.3)

FALLBACK_SUMMARY = (
    "Experienced software developer with expertise in modern web technologies and a "
    "passion for creating efficient, scalable solutions. Demonstrated ability to work "
    "with version control systems and collaborative development practices."
)
FALLBACK_DESCRIPTION = "Software development project"
PLACEHOLDER_HIGHLIGHTS = (
    "Implemented core functionality",
    "Applied best practices",
    "Maintained code quality",
)
DEFAULT_NAME = "Developer Name"
DEFAULT_TITLE = "Software Developer"
DEFAULT_EMAIL = "developer@example.com"

SUMMARY_INSTRUCTIONS = (
    "Based on the following project information, write a professional summary for a "
    "developer's resume. The summary should be 2-3 sentences that highlight the "
    "developer's technical expertise, mention key technologies and frameworks, and "
    "emphasize problem-solving skills. Return only the summary text, no formatting."
)
SKILLS_INSTRUCTIONS = (
    "Based on the following project information, extract and categorize technical "
    "skills into programming languages, frameworks and libraries, tools and "
    "technologies, and databases and storage. Only include skills that are clearly "
    "evident from the project data. Respond with a JSON object:\n"
    '{"technical": ["language1"], "frameworks": ["framework1"], '
    '"tools": ["tool1"], "databases": ["db1"]}'
)
EXPERIENCE_INSTRUCTIONS = (
    "Based on the following project information and Git history, generate 2-3 "
    "professional experience entries focused on quantifiable achievements and "
    "technical contributions. Respond with a JSON array:\n"
    '[{"projectName": "Project Name", "description": "Brief project description", '
    '"achievements": ["achievement1", "achievement2"], "technologies": ["tech1"], '
    '"duration": "MM/YYYY - MM/YYYY"}]'
)
PROJECTS_INSTRUCTIONS = (
    "Based on the following project information, generate 1-2 project entries for a "
    "resume covering implementation details, key features and technologies used. "
    "Respond with a JSON array:\n"
    '[{"name": "Project Name", "description": "Project description", '
    '"technologies": ["tech1"], "highlights": ["highlight1", "highlight2"]}]'
)

_AUTHOR_RE = re.compile(r"^(?P<name>[^<]*?)\s*(?:<(?P<email>[^>]*)>)?\s*$")


@dataclass(slots=True)
class UserInput:
    """Values typed by the user. Empty strings mean "not provided"."""

    name: str = ""
    email: str = ""
    title: str = ""
    skills: str = ""


@dataclass(slots=True)
class SynthesisResult:
    """The finished document plus which path produced each generated section."""

    document: ResumeDocument
    sources: dict[str, SectionSource] = field(default_factory=dict)

    @property
    def assisted(self) -> bool:
        return any(source == "ai" for source in self.sources.values())


def parse_author(author: str) -> tuple[str, str]:
    """Split ``"Name <email>"`` into ``(name, email)``; missing parts are empty."""
    match = _AUTHOR_RE.match(author.strip())
    if not match:
        return author.strip(), ""
    return (match.group("name") or "").strip(), (match.group("email") or "").strip()


def github_link(*candidates: str | None) -> str:
    """Return the first candidate that references github.com, normalized to https."""
    for candidate in candidates:
        if not candidate or "github.com" not in candidate:
            continue
        url = candidate.strip()
        if url.startswith("git+"):
            url = url[len("git+") :]
        if url.startswith("git@github.com:"):
            url = "https://github.com/" + url[len("git@github.com:") :]
        if url.endswith(".git"):
            url = url[: -len(".git")]
        return url
    return ""


class ContentSynthesizer:
    """Build a :class:`ResumeDocument` from repository and project signals.

    Args:
        llm: Text-generation service. ``None`` selects fallback synthesis for
            every section.
    """

    def __init__(self, llm: LLMService | None = None) -> None:
        self.llm = llm

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    @staticmethod
    def prepare_context(snapshot: RepositorySnapshot, metadata: ProjectMetadata) -> str:
        """Assemble the textual context shared by every generation prompt."""
        lines: list[str] = []
        manifest = metadata.manifest
        readme = metadata.readme

        if manifest is not None:
            lines.append(f"Project: {manifest.name or metadata.project_name}")
            lines.append(f"Description: {manifest.description}")
            lines.append(f"Dependencies: {', '.join(manifest.dependency_names)}")
        else:
            lines.append(f"Project: {metadata.project_name}")

        if readme is not None:
            lines.append(f"README Title: {readme.title}")
            lines.append(f"README Description: {readme.description}")
            lines.append(f"Technologies: {', '.join(readme.technologies)}")
            lines.append(f"Features: {', '.join(readme.features)}")

        lines.append(f"Programming Languages: {', '.join(snapshot.languages)}")
        lines.append(f"Total Commits: {snapshot.total_commits}")
        lines.append(
            f"Development Period: {snapshot.date_range.start} to {snapshot.date_range.end}"
        )
        lines.append("Recent Commit Messages:")
        lines.extend(f"- {subject}" for subject in snapshot.recent_subjects[:RECENT_COMMIT_SAMPLE])
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------
    # Generated sections
    # ------------------------------------------------------------------

    def _ask(self, section: str, instructions: str, context: str, opener: str | None = None) -> Any:
        """Send one section prompt; return the text, or the embedded JSON when ``opener`` is set.

        Returns None on any failure so the caller can fall back.
        """
        if self.llm is None:
            return None
        prompt = self.llm.build_prompt(instructions, f"Project Information:\n{context}")
        try:
            settings = STRUCTURED_SETTINGS if opener else None
            response = self.llm.generate(prompt, settings).strip()
            if opener is None:
                return response or None
            return LLMService.extract_json_from_response(response, opener)
        except LLMError as exc:
            logger.warning("Generating %s failed, using fallback: %s", section, exc)
        except Exception:
            logger.exception("Unexpected error generating %s, using fallback", section)
        return None

    def generate_summary(self, context: str) -> str | None:
        """Return a generated summary, or None when generation fails."""
        return self._ask("summary", SUMMARY_INSTRUCTIONS, context)

    def generate_skills(self, context: str) -> ResumeSkills | None:
        """Return generated categorised skills, or None when nothing usable came back."""
        raw = self._ask("skills", SKILLS_INSTRUCTIONS, context, "{")
        if raw is None:
            return None
        payload = SkillsPayload.model_validate(raw)
        if payload.is_empty():
            logger.warning("Generated skills were empty, using keyword fallback")
            return None
        return {
            "technical": merge_unique(payload.technical),
            "frameworks": merge_unique(payload.frameworks),
            "tools": merge_unique(payload.tools),
            "databases": merge_unique(payload.databases),
        }

    def extract_skills(self, context: str) -> ResumeSkills:
        """Return categorised skills, generated when possible.

        A failed call or a response without a usable JSON object yields the
        keyword-table fallback applied to the same ``context``.
        """
        return self.generate_skills(context) or self.extract_skills_fallback(context)

    @staticmethod
    def extract_skills_fallback(context: str) -> ResumeSkills:
        skills = extract_skills_fallback(context)
        return {
            "technical": skills["technical"],
            "frameworks": skills["frameworks"],
            "tools": skills["tools"],
            "databases": skills["databases"],
        }

    def generate_experience(self, context: str) -> list[ResumeExperienceEntry] | None:
        """Return generated experience entries, or None when nothing usable came back."""
        raw = self._ask("experience", EXPERIENCE_INSTRUCTIONS, context, "[")
        if raw is None:
            return None
        entries = parse_experience_list(raw)
        if not entries:
            logger.warning("Generated experience had no valid entries, using fallback")
            return None
        return [
            {
                "project_name": entry.project_name or "",
                "description": entry.description or "",
                "achievements": merge_unique(entry.achievements),
                "technologies": merge_unique(entry.technologies),
                "duration": entry.duration or "",
            }
            for entry in entries
        ]

    def generate_projects(self, context: str) -> list[ResumeProjectEntry] | None:
        """Return generated project entries, or None when nothing usable came back."""
        raw = self._ask("projects", PROJECTS_INSTRUCTIONS, context, "[")
        if raw is None:
            return None
        entries = parse_project_list(raw)
        if not entries:
            logger.warning("Generated projects had no valid entries, using fallback")
            return None
        projects: list[ResumeProjectEntry] = []
        for entry in entries:
            project: ResumeProjectEntry = {
                "name": entry.name or "",
                "description": entry.description or "",
                "technologies": merge_unique(entry.technologies),
                "highlights": merge_unique(entry.highlights),
            }
            if entry.url:
                project["url"] = entry.url
            projects.append(project)
        return projects

    # ------------------------------------------------------------------
    # Deterministic fallbacks
    # ------------------------------------------------------------------

    @staticmethod
    def fallback_summary() -> str:
        return FALLBACK_SUMMARY

    @staticmethod
    def fallback_skills(snapshot: RepositorySnapshot, metadata: ProjectMetadata) -> ResumeSkills:
        """Skills drawn directly from inferred languages, frameworks, datastores and tools."""
        dependency_names = metadata.manifest.dependency_names if metadata.manifest else []
        return {
            "technical": list(snapshot.languages),
            "frameworks": extract_frameworks(dependency_names=dependency_names),
            "tools": merge_unique(["Git"], metadata.tools),
            "databases": extract_databases(dependency_names=dependency_names),
        }

    @staticmethod
    def fallback_experience(
        snapshot: RepositorySnapshot, metadata: ProjectMetadata
    ) -> list[ResumeExperienceEntry]:
        """One experience entry built from the commit window's aggregate statistics."""
        return [
            {
                "project_name": metadata.project_name,
                "description": metadata.description or FALLBACK_DESCRIPTION,
                "achievements": [
                    f"Implemented {snapshot.total_commits} commits across "
                    f"{len(snapshot.languages)} programming languages",
                    "Collaborated on version control and code review processes",
                    "Developed features using modern development practices",
                ],
                "technologies": list(snapshot.languages),
                "duration": f"{snapshot.date_range.start} - {snapshot.date_range.end}",
            }
        ]

    @staticmethod
    def fallback_projects(
        snapshot: RepositorySnapshot, metadata: ProjectMetadata
    ) -> list[ResumeProjectEntry]:
        readme = metadata.readme
        features = list(readme.features) if readme and readme.features else []
        technologies = merge_unique(readme.technologies if readme else None, snapshot.languages)
        return [
            {
                "name": metadata.project_name,
                "description": metadata.description or FALLBACK_DESCRIPTION,
                "technologies": technologies,
                "highlights": features or list(PLACEHOLDER_HIGHLIGHTS),
            }
        ]

    @staticmethod
    def extract_personal_info(
        snapshot: RepositorySnapshot,
        metadata: ProjectMetadata,
        user: UserInput,
        *,
        remote_url: str | None = None,
    ) -> ResumePersonalInfo:
        """Personal info from user input, then the first commit author.

        The link comes from the manifest repository when it points at GitHub,
        else from ``remote_url``. Fields may be left empty here; placeholders
        are applied after the imported profile had a chance to fill them.
        """
        git_name, git_email = parse_author(snapshot.authors[0]) if snapshot.authors else ("", "")
        manifest_url = metadata.manifest.repository_url if metadata.manifest else ""
        return {
            "name": user.name.strip() or git_name,
            "title": user.title.strip(),
            "email": user.email.strip() or git_email,
            "github": github_link(manifest_url, remote_url),
        }

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def synthesize(
        self,
        snapshot: RepositorySnapshot,
        metadata: ProjectMetadata,
        *,
        user: UserInput | None = None,
        profile: ImportedProfile | None = None,
        endorsements: Mapping[str, Sequence[str]] | None = None,
        remote_url: str | None = None,
    ) -> SynthesisResult:
        """Produce the resume document for one run.

        Args:
            snapshot: Aggregated commit window.
            metadata: Manifest, README and tool signals.
            user: Values typed by the user.
            profile: Imported external profile, if any.
            endorsements: Endorsement table, skill -> endorsers.
            remote_url: Git ``origin`` URL, used for the profile link when the
                manifest has none.
        """
        user = user or UserInput()
        context = self.prepare_context(snapshot, metadata)
        sources: dict[str, SectionSource] = {}

        if self.llm is None:
            logger.info("No text-generation service configured; synthesizing all sections locally")
            summary = self.fallback_summary()
            skills = self.fallback_skills(snapshot, metadata)
            experience = self.fallback_experience(snapshot, metadata)
            projects = self.fallback_projects(snapshot, metadata)
            sources = dict.fromkeys(("summary", "skills", "experience", "projects"), "fallback")
        else:
            generated_summary = self.generate_summary(context)
            summary = generated_summary or self.fallback_summary()
            sources["summary"] = "ai" if generated_summary else "fallback"

            generated_skills = self.generate_skills(context)
            skills = generated_skills or self.extract_skills_fallback(context)
            sources["skills"] = "ai" if generated_skills else "fallback"

            generated_experience = self.generate_experience(context)
            experience = generated_experience or self.fallback_experience(snapshot, metadata)
            sources["experience"] = "ai" if generated_experience else "fallback"

            generated_projects = self.generate_projects(context)
            projects = generated_projects or self.fallback_projects(snapshot, metadata)
            sources["projects"] = "ai" if generated_projects else "fallback"

        document: ResumeDocument = {
            "personal_info": self.extract_personal_info(
                snapshot, metadata, user, remote_url=remote_url
            ),
            "summary": summary,
            "skills": skills,
            "experience": experience,
            "projects": projects,
        }
        merged = self.merge(
            document,
            snapshot,
            metadata,
            user_skills=split_user_skills(user.skills),
            profile=profile,
            endorsements=endorsements,
        )
        return SynthesisResult(document=merged, sources=sources)

    @staticmethod
    def merge(
        document: ResumeDocument,
        snapshot: RepositorySnapshot,
        metadata: ProjectMetadata,
        *,
        user_skills: Sequence[str] = (),
        profile: ImportedProfile | None = None,
        endorsements: Mapping[str, Sequence[str]] | None = None,
    ) -> ResumeDocument:
        """Apply the merge policy to a freshly synthesized document.

        Skill lists are unioned across every signal, the imported profile fills
        empty personal fields and contributes projects, placeholders fill what
        is still empty, and endorsements are attached for display.
        """
        dependency_names = metadata.manifest.dependency_names if metadata.manifest else []
        readme = metadata.readme

        skills = merge_skill_sources(
            document["skills"],
            languages=snapshot.languages,
            frameworks=extract_frameworks(dependency_names=dependency_names),
            databases=extract_databases(dependency_names=dependency_names),
            readme_technologies=readme.technologies if readme else (),
            readme_features=readme.features if readme else (),
            user_skills=user_skills,
            imported_languages=profile.languages if profile else (),
        )

        personal = dict(document["personal_info"])
        projects = list(document["projects"])
        if profile is not None:
            for key, value in (("name", profile.name), ("email", profile.email), ("github", profile.url)):
                if not personal.get(key) and value:
                    personal[key] = value
            for repo in profile.repositories:
                entry: ResumeProjectEntry = {
                    "name": repo.name,
                    "description": repo.description,
                    "technologies": [repo.language] if repo.language else [],
                    "highlights": [],
                }
                if repo.url:
                    entry["url"] = repo.url
                projects.append(entry)

        personal_info: ResumePersonalInfo = {
            "name": personal.get("name") or DEFAULT_NAME,
            "title": personal.get("title") or DEFAULT_TITLE,
            "email": personal.get("email") or DEFAULT_EMAIL,
            "github": personal.get("github") or "",
        }

        experience: list[ResumeExperienceEntry] = [
            {
                **entry,
                "achievements": merge_unique(entry["achievements"]),
                "technologies": merge_unique(entry["technologies"]),
            }
            for entry in document["experience"]
        ]
        deduped_projects: list[ResumeProjectEntry] = []
        for project in projects:
            cleaned: ResumeProjectEntry = dict(project)  # type: ignore[assignment]
            cleaned["technologies"] = merge_unique(project.get("technologies"))
            cleaned["highlights"] = merge_unique(project.get("highlights"))
            deduped_projects.append(cleaned)

        return {
            "personal_info": personal_info,
            "summary": document["summary"],
            "skills": skills,
            "experience": experience,
            "projects": deduped_projects,
            "endorsements": collect_endorsements(skills, endorsements or {}),
        }


__all__ = [
    "ContentSynthesizer",
    "DEFAULT_EMAIL",
    "DEFAULT_NAME",
    "DEFAULT_TITLE",
    "FALLBACK_SUMMARY",
    "PLACEHOLDER_HIGHLIGHTS",
    "SynthesisResult",
    "UserInput",
    "github_link",
    "parse_author",
]
