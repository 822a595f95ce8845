from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from repo_resume.models.commits import CommitRecord, DateRange, RepositorySnapshot
from repo_resume.models.metadata import ManifestData, ProjectMetadata, ReadmeData
from repo_resume.services.content_synthesizer import (
    DEFAULT_EMAIL,
    DEFAULT_NAME,
    DEFAULT_TITLE,
    EXPERIENCE_INSTRUCTIONS,
    FALLBACK_SUMMARY,
    PLACEHOLDER_HIGHLIGHTS,
    PROJECTS_INSTRUCTIONS,
    SKILLS_INSTRUCTIONS,
    SUMMARY_INSTRUCTIONS,
    ContentSynthesizer,
    UserInput,
    github_link,
    parse_author,
)
from repo_resume.services.github_import import ImportedProfile, ImportedRepository
from repo_resume.services.llm_providers import LLMError, LLMProvider
from repo_resume.services.llm_service import LLMService
from repo_resume.technology_inference import extract_skills_fallback


class ScriptedProvider(LLMProvider):
    """Answers each section prompt from a table; a callable value is invoked instead."""

    def __init__(self, **answers: object) -> None:
        self.answers = answers
        self.prompts: list[str] = []
        self.configs: dict[str, dict] = {}

    def send_prompt(self, prompt: str, config: dict) -> str:
        self.prompts.append(prompt)
        for section, instructions in (
            ("summary", SUMMARY_INSTRUCTIONS),
            ("skills", SKILLS_INSTRUCTIONS),
            ("experience", EXPERIENCE_INSTRUCTIONS),
            ("projects", PROJECTS_INSTRUCTIONS),
        ):
            if prompt.startswith(f"System instruction:\n{instructions}"):
                self.configs[section] = config
                answer = self.answers.get(section, "")
                if callable(answer):
                    return answer()
                return str(answer)
        raise AssertionError(f"unexpected prompt: {prompt[:60]}")


def _raise(exc: Exception):
    def _inner() -> str:
        raise exc

    return _inner


def _snapshot(*, authors: tuple[str, ...] = ("Ada Lovelace <ada@example.com>",)) -> RepositorySnapshot:
    commits = tuple(
        CommitRecord(
            hash=f"h{i}",
            author=authors[0] if authors else "",
            authored_at=datetime(2024, 1, 1 + i, tzinfo=UTC),
            subject=subject,
        )
        for i, subject in enumerate(["Add checkout flow", "Wire up API", "Initial commit"])
    )
    return RepositorySnapshot(
        commits=commits,
        total_commits=3,
        authors=authors,
        date_range=DateRange(start="2024-01-01", end="2024-03-01"),
        languages=("Python", "JavaScript"),
    )


def _metadata(*, readme: bool = True, manifest: bool = True) -> ProjectMetadata:
    return ProjectMetadata(
        project_name="shop",
        project_path=Path("/tmp/shop"),
        manifest=ManifestData(
            source="package.json",
            name="shop",
            description="Online shop",
            dependencies={"react": "^18", "pg": "^8"},
            repository={"type": "git", "url": "git+https://github.com/ada/shop.git"},
        )
        if manifest
        else None,
        readme=ReadmeData(
            source="README.md",
            content="",
            title="Shop",
            description="A tiny web shop.",
            technologies=["Docker"],
            features=["Fast checkout", "Fast checkout"],
        )
        if readme
        else None,
        tools=["npm"],
    )


def test_prepare_context_lists_signals() -> None:
    context = ContentSynthesizer.prepare_context(_snapshot(), _metadata())

    assert "Project: shop" in context
    assert "Dependencies: react, pg" in context
    assert "Features: Fast checkout, Fast checkout" in context
    assert "Programming Languages: Python, JavaScript" in context
    assert "Total Commits: 3" in context
    assert "Development Period: 2024-01-01 to 2024-03-01" in context
    assert "- Add checkout flow" in context


class TestWithoutTextGeneration:
    def test_every_section_falls_back(self) -> None:
        result = ContentSynthesizer().synthesize(_snapshot(), _metadata())

        assert result.sources == dict.fromkeys(("summary", "skills", "experience", "projects"), "fallback")
        assert not result.assisted

        document = result.document
        assert document["summary"] == FALLBACK_SUMMARY
        assert len(document["experience"]) == 1
        experience = document["experience"][0]
        assert experience["achievements"][0] == "Implemented 3 commits across 2 programming languages"
        assert experience["duration"] == "2024-01-01 - 2024-03-01"
        assert experience["description"] == "A tiny web shop."

    def test_fallback_skills_from_inferred_signals(self) -> None:
        skills = ContentSynthesizer().synthesize(_snapshot(), _metadata()).document["skills"]

        assert skills == {
            "technical": ["Python", "JavaScript", "Docker", "Fast checkout"],
            "frameworks": ["React"],
            "tools": ["Git", "npm"],
            "databases": ["PostgreSQL"],
        }

    def test_projects_use_readme_features(self) -> None:
        projects = ContentSynthesizer().synthesize(_snapshot(), _metadata()).document["projects"]

        assert projects == [
            {
                "name": "shop",
                "description": "A tiny web shop.",
                "technologies": ["Docker", "Python", "JavaScript"],
                "highlights": ["Fast checkout"],
            }
        ]

    def test_projects_without_readme_use_placeholders(self) -> None:
        document = ContentSynthesizer().synthesize(_snapshot(), _metadata(readme=False)).document

        project = document["projects"][0]
        assert project["highlights"] == list(PLACEHOLDER_HIGHLIGHTS)
        assert project["description"] == "Online shop"

    def test_personal_info_from_commit_author_and_manifest(self) -> None:
        info = ContentSynthesizer().synthesize(_snapshot(), _metadata()).document["personal_info"]

        assert info == {
            "name": "Ada Lovelace",
            "title": DEFAULT_TITLE,
            "email": "ada@example.com",
            "github": "https://github.com/ada/shop",
        }

    def test_user_input_wins(self) -> None:
        user = UserInput(name="Grace", email="grace@x.io", title="Backend Engineer", skills="Go, go, Helm")

        document = ContentSynthesizer().synthesize(_snapshot(), _metadata(), user=user).document

        assert document["personal_info"]["name"] == "Grace"
        assert document["personal_info"]["email"] == "grace@x.io"
        assert document["personal_info"]["title"] == "Backend Engineer"
        assert document["skills"]["technical"][-2:] == ["Go", "Helm"]

    def test_placeholders_when_nothing_is_known(self) -> None:
        document = ContentSynthesizer().synthesize(
            _snapshot(authors=()), _metadata(manifest=False)
        ).document

        assert document["personal_info"] == {
            "name": DEFAULT_NAME,
            "title": DEFAULT_TITLE,
            "email": DEFAULT_EMAIL,
            "github": "",
        }

    def test_remote_url_used_without_manifest_link(self) -> None:
        document = ContentSynthesizer().synthesize(
            _snapshot(), _metadata(manifest=False), remote_url="git@github.com:ada/shop.git"
        ).document

        assert document["personal_info"]["github"] == "https://github.com/ada/shop"


class TestWithTextGeneration:
    def test_all_sections_generated(self) -> None:
        provider = ScriptedProvider(
            summary="Seasoned engineer.",
            skills='```json\n{"technical": ["Python"], "frameworks": ["React"], "tools": ["Docker"], "databases": []}\n```',
            experience='[{"projectName": "shop", "description": "d", "achievements": ["a", "a"], '
            '"technologies": ["Go"], "duration": "01/2024 - 03/2024"}]',
            projects='Sure: [{"name": "shop", "description": "p", "technologies": ["Go"], "highlights": ["h"]}]',
        )

        result = ContentSynthesizer(LLMService(provider)).synthesize(_snapshot(), _metadata())

        assert result.sources == dict.fromkeys(("summary", "skills", "experience", "projects"), "ai")
        assert result.assisted
        assert len(provider.prompts) == 4
        assert provider.configs == {
            "summary": {"temperature": 0.7},
            "skills": {"temperature": 0.3},
            "experience": {"temperature": 0.3},
            "projects": {"temperature": 0.3},
        }
        document = result.document
        assert document["summary"] == "Seasoned engineer."
        assert document["experience"][0]["achievements"] == ["a"]
        assert document["projects"][0]["highlights"] == ["h"]
        assert document["skills"]["technical"][:3] == ["Python", "JavaScript", "Docker"]
        assert document["skills"]["tools"] == ["Docker"]

    def test_sections_fall_back_independently(self) -> None:
        provider = ScriptedProvider(
            summary="Seasoned engineer.",
            skills="I think they know Python well.",
            experience=_raise(LLMError("quota exceeded")),
            projects=_raise(RuntimeError("boom")),
        )

        result = ContentSynthesizer(LLMService(provider)).synthesize(_snapshot(), _metadata())

        assert result.sources == {
            "summary": "ai",
            "skills": "fallback",
            "experience": "fallback",
            "projects": "fallback",
        }
        assert result.document["summary"] == "Seasoned engineer."
        assert result.document["experience"][0]["achievements"][0].startswith("Implemented 3 commits")

    def test_prose_skills_response_uses_keyword_fallback(self) -> None:
        synthesizer = ContentSynthesizer(LLMService(ScriptedProvider(skills="Python and Docker, mostly.")))
        context = synthesizer.prepare_context(_snapshot(), _metadata())

        assert synthesizer.extract_skills(context) == extract_skills_fallback(context)

    def test_empty_skills_object_uses_keyword_fallback(self) -> None:
        synthesizer = ContentSynthesizer(LLMService(ScriptedProvider(skills='{"technical": []}')))

        assert synthesizer.generate_skills("Project: x\n") is None

    def test_empty_summary_falls_back(self) -> None:
        synthesizer = ContentSynthesizer(LLMService(ScriptedProvider(summary="   ")))

        assert synthesizer.generate_summary("Project: x\n") is None


class TestMerge:
    def _profile(self) -> ImportedProfile:
        return ImportedProfile(
            handle="octo",
            name="Octo Cat",
            email="octo@x.io",
            url="https://github.com/octo",
            languages=["Rust", "Python"],
            repositories=[
                ImportedRepository(name="cli", description="A CLI", url="https://github.com/octo/cli", language="Rust"),
                ImportedRepository(name="notes", description="No description provided.", url="https://github.com/octo/notes"),
            ],
        )

    def test_profile_only_fills_empty_fields(self) -> None:
        document = ContentSynthesizer().synthesize(
            _snapshot(), _metadata(manifest=False), user=UserInput(name="Grace"), profile=self._profile()
        ).document

        assert document["personal_info"]["name"] == "Grace"
        assert document["personal_info"]["email"] == "ada@example.com"
        assert document["personal_info"]["github"] == "https://github.com/octo"

    def test_profile_repositories_become_projects(self) -> None:
        document = ContentSynthesizer().synthesize(_snapshot(), _metadata(), profile=self._profile()).document

        names = [project["name"] for project in document["projects"]]
        assert names == ["shop", "cli", "notes"]
        assert document["projects"][1] == {
            "name": "cli",
            "description": "A CLI",
            "technologies": ["Rust"],
            "highlights": [],
            "url": "https://github.com/octo/cli",
        }
        assert document["projects"][2]["technologies"] == []

    def test_imported_languages_join_technical(self) -> None:
        document = ContentSynthesizer().synthesize(_snapshot(), _metadata(), profile=self._profile()).document

        technical = document["skills"]["technical"]
        assert technical[-1] == "Rust"
        assert technical.count("Python") == 1

    def test_endorsements_attached_by_exact_skill(self) -> None:
        table = {"Python": ["Ann"], "python": ["Bo"], "Kubernetes": ["Cy"]}

        document = ContentSynthesizer().synthesize(_snapshot(), _metadata(), endorsements=table).document

        assert document["endorsements"] == {"Python": ["Ann"]}
        assert "Kubernetes" not in document["skills"]["technical"]


@pytest.mark.parametrize(
    ("candidates", "expected"),
    [
        (("git+https://github.com/a/b.git",), "https://github.com/a/b"),
        (("git@github.com:a/b.git",), "https://github.com/a/b"),
        (("https://gitlab.com/a/b", "https://github.com/c/d"), "https://github.com/c/d"),
        (("", None), ""),
    ],
)
def test_github_link(candidates: tuple[str | None, ...], expected: str) -> None:
    assert github_link(*candidates) == expected


def test_parse_author() -> None:
    assert parse_author("Ada Lovelace <ada@example.com>") == ("Ada Lovelace", "ada@example.com")
    assert parse_author("solo") == ("solo", "")
