"""Modern resume template.

Helvetica sans-serif with a coloured banner header and accent-coloured
section titles.  Compact 10pt body, tight margins.
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

__all__ = ["ModernResumeTemplate"]

# ---------------------------------------------------------------------------
# LaTeX preamble fragments
# ---------------------------------------------------------------------------

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("letterpaper,margin=0.5in,top=0.4in")),
    Package("titlesec"),
    Package("enumitem"),
    Package("xcolor"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
    Package("helvet"),
    Package("tabularx"),
]

_PREAMBLE_SETUP = r"""
\definecolor{accent}{HTML}{667EEA}
\definecolor{accentdark}{HTML}{764BA2}
\renewcommand{\familydefault}{\sfdefault}
\urlstyle{same}
\raggedbottom
\raggedright
\setlength{\tabcolsep}{0in}
\titleformat{\section}{\large\bfseries\color{accentdark}}{}{0em}{}[{\color{accent}\titlerule}]
\titlespacing{\section}{0pt}{8pt}{4pt}
\pdfgentounicode=1
"""

_CUSTOM_COMMANDS = r"""
\newcommand{\modernEntry}[2]{
  \item
    \begin{tabular*}{0.97\textwidth}{l@{\extracolsep{\fill}}r}
      \textbf{#1} & \textit{\small #2} \\
    \end{tabular*}\vspace{-4pt}
}
\newcommand{\modernItem}[1]{\item\small{#1}}
\newcommand{\modernListStart}{\begin{itemize}[leftmargin=0.15in, label={}]}
\newcommand{\modernListEnd}{\end{itemize}}
\newcommand{\modernItemListStart}{\begin{itemize}[leftmargin=0.2in, itemsep=0pt]}
\newcommand{\modernItemListEnd}{\end{itemize}\vspace{-4pt}}
"""


class ModernResumeTemplate(ResumeTemplate):
    """Sans-serif resume with a coloured header banner."""

    @property
    def name(self) -> str:
        return "Modern"

    @property
    def description(self) -> str:
        return "Colorful header with modern sans-serif styling"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, data: ResumeDocument) -> Document:
        doc = self.create_document(_PACKAGES, [_PREAMBLE_SETUP, _CUSTOM_COMMANDS])
        self._add_heading(doc, data)

        summary = data.get("summary", "")
        if summary:
            doc.append(NoEscape(rf"\section{{Summary}}" + "\n" + rf"\small {self.escape_latex(summary)}"))

        if self.skill_rows(data):
            self._add_skills(doc, data)

        experience = data.get("experience", [])
        if experience:
            self._add_experience(doc, experience)

        projects = data.get("projects", [])
        if projects:
            self._add_projects(doc, projects)

        return doc

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _add_heading(self, doc: Document, data: ResumeDocument) -> None:
        esc = self.escape_latex
        info = data.get("personal_info", {})
        name = esc(info.get("name", ""))
        title = esc(info.get("title", ""))
        contact = r" \textbar\ ".join(self.contact_parts(data))

        heading = r"\noindent\colorbox{accent}{\parbox{\dimexpr\textwidth-2\fboxsep}{\centering"
        heading += rf"\color{{white}}{{\LARGE\bfseries {name}}}"
        if title:
            heading += rf" \\[2pt] {{\large {title}}}"
        if contact:
            heading += rf" \\[2pt] {{\small {contact}}}"
        heading += r"\vspace{2pt}}}"
        doc.append(NoEscape(heading))

    def _add_skills(self, doc: Document, data: ResumeDocument) -> None:
        lines = [r"\section{Skills}", r"\begin{itemize}[leftmargin=0.15in, label={}]", r"\small{\item{"]
        rows = self.skill_rows(data)
        for index, (label, joined) in enumerate(rows):
            suffix = r" \\" if index < len(rows) - 1 else ""
            lines.append(rf"\textbf{{\color{{accentdark}}{label}}}{{: {joined}}}{suffix}")
        lines.append(r"}}")
        lines.append(r"\end{itemize}")

        roster = self.endorsement_roster(data)
        if roster:
            lines.append(r"{\footnotesize\textit{Endorsed:} " + "; ".join(roster) + "}")
        doc.append(NoEscape("\n".join(lines)))

    def _add_experience(self, doc: Document, entries: list[ResumeExperienceEntry]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Experience}", r"\modernListStart"]

        for entry in entries:
            lines.append(
                rf"\modernEntry{{{esc(entry.get('project_name', ''))}}}{{{esc(entry.get('duration', ''))}}}"
            )
            items = [esc(entry.get("description", ""))] if entry.get("description") else []
            items.extend(esc(a) for a in entry.get("achievements", []))
            techs = entry.get("technologies", [])
            if techs:
                items.append(rf"\textit{{Technologies: {esc(', '.join(techs))}}}")
            if items:
                lines.append(r"\modernItemListStart")
                lines.extend(rf"\modernItem{{{item}}}" for item in items)
                lines.append(r"\modernItemListEnd")

        lines.append(r"\modernListEnd")
        doc.append(NoEscape("\n".join(lines)))

    def _add_projects(self, doc: Document, entries: list[ResumeProjectEntry]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Projects}", r"\modernListStart"]

        for entry in entries:
            name = esc(entry.get("name", ""))
            techs = entry.get("technologies", [])
            tech_str = r" $|$ \emph{" + esc(", ".join(techs)) + "}" if techs else ""
            url = entry.get("url")
            link = self.href(url) if url else ""
            lines.append(rf"\modernEntry{{{name}{tech_str}}}{{{link}}}")

            items = [esc(entry.get("description", ""))] if entry.get("description") else []
            items.extend(esc(h) for h in entry.get("highlights", []))
            if items:
                lines.append(r"\modernItemListStart")
                lines.extend(rf"\modernItem{{{item}}}" for item in items)
                lines.append(r"\modernItemListEnd")

        lines.append(r"\modernListEnd")
        doc.append(NoEscape("\n".join(lines)))
