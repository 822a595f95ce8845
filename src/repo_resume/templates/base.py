"""Abstract base class for pluggable resume templates."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

if TYPE_CHECKING:
    from repo_resume.services.resume_data import ResumeDocument

__all__ = ["SKILL_ROWS", "ResumeTemplate"]

# Characters that have special meaning in LaTeX.
_LATEX_REPLACEMENTS = {
    "\\": r"\textbackslash{}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    **{char: "\\" + char for char in "&%$#_{}"},
}
_LATEX_SPECIAL = re.compile(r"[\\~^&%$#_{}]")
# Inside \href targets hyperref accepts \% \# \&; braces and backslashes are
# percent-encoded so the argument stays balanced.
_URL_REPLACEMENTS = {"%": r"\%", "#": r"\#", "&": r"\&", "\\": "%5C", "{": "%7B", "}": "%7D"}
_URL_SPECIAL = re.compile(r"[%#&\\{}]")
_PROTOCOL = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)

# (document key, row label), in display order.
SKILL_ROWS: tuple[tuple[str, str], ...] = (
    ("technical", "Languages"),
    ("frameworks", "Frameworks"),
    ("tools", "Tools"),
    ("databases", "Databases"),
)


class ResumeTemplate(ABC):
    """Interface that every resume template must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable template name shown in the UI."""

    @property
    @abstractmethod
    def description(self) -> str:
        """One-line description shown when choosing a style."""

    @abstractmethod
    def build(self, data: ResumeDocument) -> Document:
        """Construct a PyLaTeX ``Document`` from *data*."""

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    @staticmethod
    def escape_latex(text: str) -> str:
        r"""Escape LaTeX special characters in *text*.

        Handles: ``& % $ # _ { } ~ ^ \``
        """
        # Single pass: inserted escapes are never re-escaped.
        return _LATEX_SPECIAL.sub(lambda m: _LATEX_REPLACEMENTS[m.group()], text)

    @staticmethod
    def _strip_protocol(url: str) -> str:
        """``https://github.com/octo`` -> ``github.com/octo``."""
        return _PROTOCOL.sub("", url).rstrip("/")

    @staticmethod
    def escape_url(url: str) -> str:
        """Make *url* safe as the target argument of ``\\href``."""
        return _URL_SPECIAL.sub(lambda m: _URL_REPLACEMENTS[m.group()], url)

    def href(self, url: str, label: str | None = None) -> str:
        """``\\href`` fragment for *url*; the label defaults to the URL without its scheme."""
        shown = self._strip_protocol(url) if label is None else label
        return rf"\href{{{self.escape_url(url)}}}{{{self.escape_latex(shown)}}}"

    @staticmethod
    def create_document(
        packages: Sequence[Package],
        preamble: Sequence[str],
        *,
        font_size: str = "10pt",
    ) -> Document:
        """Return an empty letter-size article with *packages* and raw *preamble* fragments."""
        doc = Document(
            documentclass="article",
            document_options=["letterpaper", font_size],
            page_numbers=False,
            indent=False,
            lmodern=False,
            textcomp=False,
            microtype=False,
            fontenc=None,
            inputenc=None,
        )
        for pkg in packages:
            doc.packages.append(pkg)
        for fragment in preamble:
            doc.preamble.append(NoEscape(fragment))
        return doc

    def format_skill(self, skill: str, endorsements: Mapping[str, Sequence[str]]) -> str:
        r"""Escape *skill* and append ``$\star$ (n)`` when it has endorsers."""
        text = self.escape_latex(skill)
        endorsers = endorsements.get(skill)
        if endorsers:
            text += rf" $\star$\,({len(endorsers)})"
        return text

    def skill_rows(self, data: ResumeDocument) -> list[tuple[str, str]]:
        """Non-empty ``(label, formatted skills)`` rows in display order."""
        skills = data.get("skills", {})
        endorsements = data.get("endorsements", {})
        rows: list[tuple[str, str]] = []
        for key, label in SKILL_ROWS:
            values = skills.get(key, [])
            if values:
                rows.append((label, ", ".join(self.format_skill(v, endorsements) for v in values)))
        return rows

    def endorsement_roster(self, data: ResumeDocument) -> list[str]:
        """``Skill: Alice, Bob`` lines for every endorsed skill."""
        esc = self.escape_latex
        return [
            f"{esc(skill)}: {esc(', '.join(endorsers))}"
            for skill, endorsers in data.get("endorsements", {}).items()
            if endorsers
        ]

    def contact_parts(self, data: ResumeDocument) -> list[str]:
        """Email and profile link as ``\\href`` fragments."""
        info = data.get("personal_info", {})
        parts: list[str] = []
        email = info.get("email")
        if email:
            parts.append(self.href(f"mailto:{email}", email))
        github = info.get("github")
        if github:
            parts.append(self.href(github))
        return parts
