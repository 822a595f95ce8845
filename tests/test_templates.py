"""Tests for the resume template registry and the four built-in styles."""

from __future__ import annotations

import pytest
from pylatex import Document

from repo_resume.services.resume_data import ResumeDocument
from repo_resume.templates import ResumeStyle, ResumeTemplate, get_template, list_templates
from repo_resume.templates.classic import ClassicResumeTemplate
from repo_resume.templates.developer import DeveloperResumeTemplate
from repo_resume.templates.minimal import MinimalResumeTemplate
from repo_resume.templates.modern import ModernResumeTemplate


def _document(**overrides) -> ResumeDocument:
    document: ResumeDocument = {
        "personal_info": {
            "name": "Ada Lovelace",
            "title": "Software Developer",
            "email": "ada@example.com",
            "github": "https://github.com/ada/engine",
        },
        "summary": "Builds analytical engines & tooling at 100% effort.",
        "skills": {
            "technical": ["Python", "C#"],
            "frameworks": ["Flask"],
            "tools": ["Git"],
            "databases": [],
        },
        "experience": [
            {
                "project_name": "engine",
                "description": "Difference engine firmware",
                "achievements": ["Implemented 3 commits across 2 programming languages"],
                "technologies": ["Python"],
                "duration": "2024-01-01 - 2024-03-01",
            }
        ],
        "projects": [
            {
                "name": "notes_app",
                "description": "Note taking",
                "technologies": ["Flask"],
                "highlights": ["Offline sync"],
                "url": "https://github.com/ada/notes_app",
            }
        ],
        "endorsements": {"Python": ["Grace", "Alan"]},
    }
    document.update(overrides)  # type: ignore[typeddict-item]
    return document


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_list_templates_in_menu_order(self) -> None:
        assert list_templates() == ["modern", "classic", "minimal", "developer"]

    @pytest.mark.parametrize(
        ("name", "cls"),
        [
            ("modern", ModernResumeTemplate),
            ("Classic", ClassicResumeTemplate),
            (" minimal ", MinimalResumeTemplate),
            (ResumeStyle.DEVELOPER, DeveloperResumeTemplate),
        ],
    )
    def test_get_template(self, name, cls) -> None:
        template = get_template(name)
        assert isinstance(template, cls)
        assert isinstance(template, ResumeTemplate)

    def test_unknown_template(self) -> None:
        with pytest.raises(ValueError, match="Unknown template 'fancy'"):
            get_template("fancy")

    def test_templates_have_name_and_description(self) -> None:
        names = [get_template(style).name for style in list_templates()]
        assert names == ["Modern", "Classic", "Minimal", "Developer"]
        assert all(get_template(style).description for style in list_templates())

    def test_style_enum_is_string_valued(self) -> None:
        assert ResumeStyle("classic") is ResumeStyle.CLASSIC
        assert ResumeStyle.MODERN == "modern"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    @pytest.mark.parametrize(
        ("raw", "escaped"),
        [
            ("R&D", r"R\&D"),
            ("100%", r"100\%"),
            ("$5", r"\$5"),
            ("C#", r"C\#"),
            ("snake_case", r"snake\_case"),
            ("{x}", r"\{x\}"),
            ("a~b", r"a\textasciitilde{}b"),
            ("x^2", r"x\textasciicircum{}2"),
            ("C:\\path", r"C:\textbackslash{}path"),
            ("plain text", "plain text"),
        ],
    )
    def test_escape_latex(self, raw: str, escaped: str) -> None:
        assert ResumeTemplate.escape_latex(raw) == escaped

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://github.com/ada", "github.com/ada"),
            ("http://example.com/", "example.com"),
            ("github.com/ada", "github.com/ada"),
        ],
    )
    def test_strip_protocol(self, url: str, expected: str) -> None:
        assert ResumeTemplate._strip_protocol(url) == expected

    @pytest.mark.parametrize(
        ("url", "escaped"),
        [
            ("https://x.io/a#demo?q=50%", r"https://x.io/a\#demo?q=50\%"),
            ("https://x.io/?a=1&b=2", r"https://x.io/?a=1\&b=2"),
            ("https://x.io/{id}", "https://x.io/%7Bid%7D"),
            ("https://github.com/ada/notes_app", "https://github.com/ada/notes_app"),
        ],
    )
    def test_escape_url(self, url: str, escaped: str) -> None:
        assert ResumeTemplate.escape_url(url) == escaped

    def test_href_escapes_target_and_label_separately(self) -> None:
        template = get_template("modern")

        assert template.href("https://x.io/a#b") == r"\href{https://x.io/a\#b}{x.io/a\#b}"
        assert template.href("mailto:a_b@x.io", "a_b@x.io") == r"\href{mailto:a_b@x.io}{a\_b@x.io}"

    def test_format_skill_appends_endorsement_count(self) -> None:
        template = get_template("modern")
        endorsements = {"Python": ["Grace", "Alan"]}

        assert template.format_skill("Python", endorsements) == r"Python $\star$\,(2)"
        assert template.format_skill("python", endorsements) == "python"
        assert template.format_skill("C#", {}) == r"C\#"

    def test_skill_rows_skip_empty_categories(self) -> None:
        rows = get_template("modern").skill_rows(_document())

        assert [label for label, _ in rows] == ["Languages", "Frameworks", "Tools"]
        assert rows[0][1] == r"Python $\star$\,(2), C\#"

    def test_endorsement_roster(self) -> None:
        roster = get_template("classic").endorsement_roster(_document())

        assert roster == ["Python: Grace, Alan"]

    def test_contact_parts(self) -> None:
        parts = get_template("minimal").contact_parts(_document())

        assert parts == [
            r"\href{mailto:ada@example.com}{ada@example.com}",
            r"\href{https://github.com/ada/engine}{github.com/ada/engine}",
        ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("style", list_templates())
class TestEveryStyle:
    def test_build_returns_document(self, style: str) -> None:
        assert isinstance(get_template(style).build(_document()), Document)

    def test_content_is_escaped_and_present(self, style: str) -> None:
        tex = get_template(style).build(_document()).dumps()

        assert r"\documentclass[letterpaper" in tex
        assert "Ada Lovelace" in tex
        assert r"Builds analytical engines \& tooling at 100\% effort." in tex
        assert r"notes\_app" in tex
        assert "Implemented 3 commits across 2 programming languages" in tex
        assert r"\href{https://github.com/ada/notes_app}{github.com/ada/notes\_app}" in tex
        assert r"$\star$\,(2)" in tex
        assert "Grace, Alan" in tex

    def test_empty_sections_are_omitted(self, style: str) -> None:
        document = _document(summary="", experience=[], projects=[], endorsements={})
        document["skills"] = {"technical": [], "frameworks": [], "tools": [], "databases": []}

        tex = get_template(style).build(document).dumps()

        assert r"\section{Experience}" not in tex
        assert r"\section{Projects}" not in tex
        assert r"$\star$" not in tex
        assert "Ada Lovelace" in tex

    def test_link_with_comment_and_hash_characters(self, style: str) -> None:
        document = _document()
        document["projects"][0]["url"] = "https://x.io/a#demo?q=50%"
        document["personal_info"]["github"] = "https://x.io/u#me"

        tex = get_template(style).build(document).dumps()

        assert r"\href{https://x.io/a\#demo?q=50\%}{x.io/a\#demo?q=50\%}" in tex
        assert r"\href{https://x.io/u\#me}{x.io/u\#me}" in tex
        assert "a#demo" not in tex
        assert "50%}" not in tex

    def test_missing_link_and_title(self, style: str) -> None:
        document = _document()
        document["personal_info"] = {"name": "Ada", "title": "", "email": "", "github": ""}

        tex = get_template(style).build(document).dumps()

        assert "mailto:" not in tex
        assert "github.com/ada/engine" not in tex


def test_modern_layout_markers() -> None:
    tex = ModernResumeTemplate().build(_document()).dumps()

    assert r"\colorbox{accent}" in tex
    assert r"\section{Summary}" in tex
    assert r"\textit{Endorsed:} Python: Grace, Alan" in tex


def test_classic_layout_markers() -> None:
    tex = ClassicResumeTemplate().build(_document()).dumps()

    assert "11pt" in tex
    assert r"\section{Professional Summary}" in tex
    assert r"\section{Technical Skills}" in tex
    assert r"\section{Endorsements}" in tex
    assert tex.index(r"\section{Experience}") < tex.index(r"\section{Technical Skills}")


def test_developer_layout_markers() -> None:
    tex = DeveloperResumeTemplate().build(_document()).dumps()

    assert r"\usepackage{inconsolata}" in tex
    assert r"\techtag{Flask}" in tex
    assert r"\item \textbf{languages} = [Python $\star$\,(2), C\#]" in tex
