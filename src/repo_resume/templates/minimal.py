"""Minimal resume template: plain text hierarchy, no rules or colour."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from repo_resume.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from repo_resume.services.resume_data import ResumeDocument

__all__ = ["MinimalResumeTemplate"]

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("margin=0.8in")),
    Package("titlesec"),
    Package("enumitem"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
]

_PREAMBLE_SETUP = r"""
\urlstyle{same}
\raggedright
\setlength{\parindent}{0pt}
\setlist[itemize]{leftmargin=1em, itemsep=0pt, topsep=2pt}
\titleformat{\section}{\normalsize\bfseries}{}{0em}{\MakeUppercase}
\titlespacing{\section}{0pt}{10pt}{4pt}
\pdfgentounicode=1
"""


class MinimalResumeTemplate(ResumeTemplate):
    """Clean single-column resume with minimal decoration."""

    @property
    def name(self) -> str:
        return "Minimal"

    @property
    def description(self) -> str:
        return "Clean and simple design with minimal elements"

    def build(self, data: ResumeDocument) -> Document:
        esc = self.escape_latex
        doc = self.create_document(_PACKAGES, [_PREAMBLE_SETUP])
        info = data.get("personal_info", {})

        header = [rf"{{\Large {esc(info.get('name', ''))}}}"]
        if info.get("title"):
            header.append(esc(info["title"]))
        parts = self.contact_parts(data)
        if parts:
            header.append(r"\small " + r" \quad ".join(parts))
        doc.append(NoEscape(" \\\\\n".join(header)))

        if data.get("summary"):
            doc.append(NoEscape("\\section{Summary}\n" + esc(data["summary"])))

        rows = self.skill_rows(data)
        if rows:
            lines = [r"\section{Skills}"]
            lines.extend(rf"{label}: {joined} \\" for label, joined in rows)
            roster = self.endorsement_roster(data)
            if roster:
                lines.append(r"{\footnotesize Endorsed: " + "; ".join(roster) + "}")
            doc.append(NoEscape("\n".join(lines)))

        experience = data.get("experience", [])
        if experience:
            lines = [r"\section{Experience}"]
            for entry in experience:
                lines.append(
                    rf"\textbf{{{esc(entry.get('project_name', ''))}}} \hfill {esc(entry.get('duration', ''))} \\"
                )
                if entry.get("description"):
                    lines.append(esc(entry["description"]))
                lines.extend(self._bullets(entry.get("achievements", [])))
            doc.append(NoEscape("\n".join(lines)))

        projects = data.get("projects", [])
        if projects:
            lines = [r"\section{Projects}"]
            for entry in projects:
                heading = rf"\textbf{{{esc(entry.get('name', ''))}}}"
                techs = entry.get("technologies", [])
                if techs:
                    heading += rf" \textendash\ {esc(', '.join(techs))}"
                url = entry.get("url")
                if url:
                    heading += r" \hfill " + self.href(url)
                lines.append(heading + r" \\")
                if entry.get("description"):
                    lines.append(esc(entry["description"]))
                lines.extend(self._bullets(entry.get("highlights", [])))
            doc.append(NoEscape("\n".join(lines)))

        return doc

    def _bullets(self, items: list[str]) -> list[str]:
        if not items:
            return [r"\par\smallskip"]
        return [r"\begin{itemize}", *(rf"\item {self.escape_latex(i)}" for i in items), r"\end{itemize}"]
