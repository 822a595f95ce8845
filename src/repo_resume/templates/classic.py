"""Classic resume template.

Traditional serif layout: centred small-caps name, ruled section headers and
a formal two-column entry heading.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from repo_resume.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from repo_resume.services.resume_data import (
        ResumeDocument,
        ResumeExperienceEntry,
        ResumeProjectEntry,
    )

__all__ = ["ClassicResumeTemplate"]

_PACKAGES: list[Package] = [
    Package("fullpage", options=NoEscape("empty")),
    Package("titlesec"),
    Package("enumitem"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
    Package("mathptmx"),
    Package("tabularx"),
]

_PREAMBLE_SETUP = r"""
\addtolength{\oddsidemargin}{-0.4in}
\addtolength{\evensidemargin}{-0.4in}
\addtolength{\textwidth}{0.8in}
\addtolength{\topmargin}{-.4in}
\addtolength{\textheight}{0.8in}
\urlstyle{same}
\raggedbottom
\raggedright
\setlength{\tabcolsep}{0in}
\titleformat{\section}{\vspace{-4pt}\scshape\raggedright\large}{}{0em}{}[\titlerule \vspace{-5pt}]
\pdfgentounicode=1
"""

_CUSTOM_COMMANDS = r"""
\newcommand{\classicHeading}[3]{
  \vspace{-2pt}\item
    \begin{tabular*}{0.97\textwidth}[t]{l@{\extracolsep{\fill}}r}
      \textbf{#1} & #2 \\
      \multicolumn{2}{l}{\textit{\small #3}} \\
    \end{tabular*}\vspace{-7pt}
}
\newcommand{\classicItem}[1]{\item\small{{#1 \vspace{-2pt}}}}
\newcommand{\classicListStart}{\begin{itemize}[leftmargin=0.15in, label={}]}
\newcommand{\classicListEnd}{\end{itemize}}
\newcommand{\classicItemListStart}{\begin{itemize}}
\newcommand{\classicItemListEnd}{\end{itemize}\vspace{-5pt}}
"""


class ClassicResumeTemplate(ResumeTemplate):
    """Serif resume with ruled small-caps section headers."""

    @property
    def name(self) -> str:
        return "Classic"

    @property
    def description(self) -> str:
        return "Traditional serif fonts with formal styling"

    def build(self, data: ResumeDocument) -> Document:
        doc = self.create_document(_PACKAGES, [_PREAMBLE_SETUP, _CUSTOM_COMMANDS], font_size="11pt")
        self._add_heading(doc, data)

        summary = data.get("summary", "")
        if summary:
            doc.append(NoEscape("\\section{Professional Summary}\n" + self.escape_latex(summary)))

        experience = data.get("experience", [])
        if experience:
            self._add_experience(doc, experience)

        projects = data.get("projects", [])
        if projects:
            self._add_projects(doc, projects)

        if self.skill_rows(data):
            self._add_skills(doc, data)

        return doc

    def _add_heading(self, doc: Document, data: ResumeDocument) -> None:
        esc = self.escape_latex
        info = data.get("personal_info", {})
        heading = r"\begin{center}"
        heading += rf"{{\Huge\scshape {esc(info.get('name', ''))}}} \\ \vspace{{2pt}}"
        title = info.get("title")
        if title:
            heading += rf"{{\large\itshape {esc(title)}}} \\ \vspace{{1pt}}"
        parts = self.contact_parts(data)
        if parts:
            heading += r"\small " + r" $\cdot$ ".join(parts)
        heading += r"\end{center}"
        doc.append(NoEscape(heading))

    def _add_experience(self, doc: Document, entries: list[ResumeExperienceEntry]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Experience}", r"\classicListStart"]
        for entry in entries:
            techs = ", ".join(entry.get("technologies", []))
            lines.append(
                rf"\classicHeading{{{esc(entry.get('project_name', ''))}}}"
                rf"{{{esc(entry.get('duration', ''))}}}{{{esc(techs)}}}"
            )
            bullets = list(entry.get("achievements", []))
            description = entry.get("description")
            if description:
                bullets.insert(0, description)
            if bullets:
                lines.append(r"\classicItemListStart")
                lines.extend(rf"\classicItem{{{esc(b)}}}" for b in bullets)
                lines.append(r"\classicItemListEnd")
        lines.append(r"\classicListEnd")
        doc.append(NoEscape("\n".join(lines)))

    def _add_projects(self, doc: Document, entries: list[ResumeProjectEntry]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Projects}", r"\classicListStart"]
        for entry in entries:
            url = entry.get("url")
            link = self.href(url) if url else ""
            techs = ", ".join(entry.get("technologies", []))
            lines.append(
                rf"\classicHeading{{{esc(entry.get('name', ''))}}}{{{link}}}{{{esc(techs)}}}"
            )
            bullets = list(entry.get("highlights", []))
            description = entry.get("description")
            if description:
                bullets.insert(0, description)
            if bullets:
                lines.append(r"\classicItemListStart")
                lines.extend(rf"\classicItem{{{esc(b)}}}" for b in bullets)
                lines.append(r"\classicItemListEnd")
        lines.append(r"\classicListEnd")
        doc.append(NoEscape("\n".join(lines)))

    def _add_skills(self, doc: Document, data: ResumeDocument) -> None:
        lines = [r"\section{Technical Skills}", r"\begin{tabularx}{\textwidth}{@{}lX@{}}"]
        for label, joined in self.skill_rows(data):
            lines.append(rf"\textbf{{{label}:}}\ & {joined} \\")
        lines.append(r"\end{tabularx}")

        roster = self.endorsement_roster(data)
        if roster:
            lines.append(r"\section{Endorsements}")
            lines.append(r"\begin{itemize}[leftmargin=0.15in, itemsep=0pt]")
            lines.extend(rf"\item\small {line}" for line in roster)
            lines.append(r"\end{itemize}")
        doc.append(NoEscape("\n".join(lines)))
