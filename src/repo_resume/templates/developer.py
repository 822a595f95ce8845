"""Developer resume template.

Monospace body with code-comment style section titles (``// Skills``) and
technology tags rendered in brackets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from repo_resume.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from repo_resume.services.resume_data import ResumeDocument

__all__ = ["DeveloperResumeTemplate"]

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("margin=0.7in")),
    Package("titlesec"),
    Package("enumitem"),
    Package("xcolor"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
    Package("inconsolata"),
]

_PREAMBLE_SETUP = r"""
\definecolor{keyword}{HTML}{2B6CB0}
\definecolor{comment}{HTML}{718096}
\renewcommand{\familydefault}{\ttdefault}
\urlstyle{tt}
\raggedright
\setlength{\parindent}{0pt}
\setlist[itemize]{label={>}, leftmargin=1.5em, itemsep=0pt, topsep=2pt}
\titleformat{\section}{\color{comment}\bfseries}{}{0em}{// }
\titlespacing{\section}{0pt}{10pt}{3pt}
\newcommand{\techtag}[1]{\colorbox{keyword!10}{\footnotesize #1}}
\pdfgentounicode=1
"""


class DeveloperResumeTemplate(ResumeTemplate):
    """Monospace, tech-focused resume."""

    @property
    def name(self) -> str:
        return "Developer"

    @property
    def description(self) -> str:
        return "Monospace fonts with tech-focused styling"

    def build(self, data: ResumeDocument) -> Document:
        esc = self.escape_latex
        doc = self.create_document(_PACKAGES, [_PREAMBLE_SETUP])
        info = data.get("personal_info", {})

        header = rf"{{\Large\bfseries\color{{keyword}} {esc(info.get('name', ''))}}}"
        if info.get("title"):
            header += rf" \\ {{\color{{comment}}\# {esc(info['title'])}}}"
        parts = self.contact_parts(data)
        if parts:
            header += r" \\ \small " + " | ".join(parts)
        doc.append(NoEscape(header))

        if data.get("summary"):
            doc.append(NoEscape("\\section{Summary}\n" + esc(data["summary"])))

        rows = self.skill_rows(data)
        if rows:
            lines = [r"\section{Skills}", r"\begin{itemize}"]
            lines.extend(rf"\item \textbf{{{label.lower()}}} = [{joined}]" for label, joined in rows)
            lines.append(r"\end{itemize}")
            roster = self.endorsement_roster(data)
            if roster:
                lines.append(r"\section{Endorsements}")
                lines.append(r"\begin{itemize}")
                lines.extend(rf"\item {line}" for line in roster)
                lines.append(r"\end{itemize}")
            doc.append(NoEscape("\n".join(lines)))

        experience = data.get("experience", [])
        if experience:
            lines = [r"\section{Experience}"]
            for entry in experience:
                lines.append(
                    rf"\textbf{{{esc(entry.get('project_name', ''))}}} \hfill "
                    rf"{{\color{{comment}}{esc(entry.get('duration', ''))}}} \\"
                )
                lines.append(self._tags(entry.get("technologies", [])))
                if entry.get("description"):
                    lines.append(esc(entry["description"]))
                lines.extend(self._bullets(entry.get("achievements", [])))
            doc.append(NoEscape("\n".join(lines)))

        projects = data.get("projects", [])
        if projects:
            lines = [r"\section{Projects}"]
            for entry in projects:
                heading = rf"\textbf{{{esc(entry.get('name', ''))}}}"
                url = entry.get("url")
                if url:
                    heading += r" \hfill " + self.href(url)
                lines.append(heading + r" \\")
                lines.append(self._tags(entry.get("technologies", [])))
                if entry.get("description"):
                    lines.append(esc(entry["description"]))
                lines.extend(self._bullets(entry.get("highlights", [])))
            doc.append(NoEscape("\n".join(lines)))

        return doc

    def _tags(self, technologies: list[str]) -> str:
        if not technologies:
            return ""
        return " ".join(rf"\techtag{{{self.escape_latex(t)}}}" for t in technologies) + r" \\"

    def _bullets(self, items: list[str]) -> list[str]:
        if not items:
            return [r"\par\smallskip"]
        return [r"\begin{itemize}", *(rf"\item {self.escape_latex(i)}" for i in items), r"\end{itemize}"]
