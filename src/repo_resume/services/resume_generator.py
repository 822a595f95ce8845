"""Resume rendering service.

Renders a :class:`ResumeDocument` with a pluggable LaTeX template. Files are
built in a temporary directory and only moved into the output directory once
every requested artifact exists, so a failed render leaves nothing behind.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from pylatex.errors import PyLaTeXError

from repo_resume.templates import ResumeStyle, get_template

if TYPE_CHECKING:
    from repo_resume.services.resume_data import ResumeDocument

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_STEM",
    "RenderError",
    "generate_resume_files",
    "generate_resume_tex",
]

DEFAULT_STEM = "resume"


class RenderError(RuntimeError):
    """Raised when a resume document cannot be rendered."""


def generate_resume_tex(
    document: ResumeDocument,
    style: str | ResumeStyle = ResumeStyle.MODERN,
) -> str:
    """Generate the LaTeX source for a resume.

    Args:
        document: The canonical resume document.
        style: Registered template identifier.

    Returns:
        The full ``.tex`` source as a string.

    Raises:
        ValueError: If *style* is not a registered template.
    """
    template = get_template(style)
    return template.build(document).dumps()


def generate_resume_files(
    document: ResumeDocument,
    output_dir: Path | str,
    style: str | ResumeStyle = ResumeStyle.MODERN,
    *,
    stem: str = DEFAULT_STEM,
    compiler: str = "pdflatex",
    tex_only: bool = False,
) -> dict[str, Path]:
    """Write ``<stem>.tex`` and, unless *tex_only*, ``<stem>.pdf`` into *output_dir*.

    Args:
        document: The canonical resume document.
        output_dir: Directory to write files into; created only on success.
        style: Registered template identifier.
        stem: File name without extension.
        compiler: LaTeX compiler to invoke.
        tex_only: Skip PDF compilation.

    Returns:
        ``{"tex": Path}`` plus ``"pdf"`` when a PDF was built.

    Raises:
        RenderError: If the template is unknown, compilation fails or the
            files cannot be written.
    """
    try:
        template = get_template(style)
    except ValueError as exc:
        raise RenderError(str(exc)) from exc

    doc = template.build(document)

    with tempfile.TemporaryDirectory(prefix="repo-resume-") as tmp:
        build_stem = Path(tmp) / stem
        try:
            if tex_only:
                doc.generate_tex(str(build_stem))
            else:
                # PyLaTeX appends .pdf/.tex automatically
                doc.generate_pdf(str(build_stem), clean_tex=False, compiler=compiler)
        except (PyLaTeXError, subprocess.CalledProcessError, OSError) as exc:
            logger.exception("Rendering %s resume failed", getattr(style, "value", style))
            raise RenderError(f"Failed to render resume with {compiler}: {exc}") from exc

        artifacts = {"tex": Path(f"{build_stem}.tex")}
        if not tex_only:
            artifacts["pdf"] = Path(f"{build_stem}.pdf")
        missing = [str(path) for path in artifacts.values() if not path.exists()]
        if missing:
            raise RenderError(f"Renderer did not produce: {', '.join(missing)}")

        target_dir = Path(output_dir)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            written: dict[str, Path] = {}
            for kind, path in artifacts.items():
                destination = target_dir / path.name
                shutil.move(str(path), destination)
                written[kind] = destination
        except OSError as exc:
            raise RenderError(f"Could not write resume to {target_dir}: {exc}") from exc

    logger.info("Wrote %s", ", ".join(str(p) for p in written.values()))
    return written
