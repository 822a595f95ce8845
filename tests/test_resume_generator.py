from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from pylatex import Document

from repo_resume.services.resume_data import ResumeDocument
from repo_resume.services.resume_generator import (
    RenderError,
    generate_resume_files,
    generate_resume_tex,
)
from repo_resume.templates import ResumeStyle

DOCUMENT: ResumeDocument = {
    "personal_info": {
        "name": "Ada Lovelace",
        "title": "Software Developer",
        "email": "ada@example.com",
        "github": "",
    },
    "summary": "Writes programs.",
    "skills": {"technical": ["Python"], "frameworks": [], "tools": ["Git"], "databases": []},
    "experience": [],
    "projects": [],
    "endorsements": {},
}


def test_generate_resume_tex_uses_style() -> None:
    modern = generate_resume_tex(DOCUMENT)
    classic = generate_resume_tex(DOCUMENT, ResumeStyle.CLASSIC)

    assert r"\colorbox{accent}" in modern
    assert r"\section{Professional Summary}" in classic


def test_generate_resume_tex_unknown_style() -> None:
    with pytest.raises(ValueError):
        generate_resume_tex(DOCUMENT, "fancy")


def test_tex_only_writes_source(tmp_path: Path) -> None:
    out_dir = tmp_path / "out" / "nested"

    files = generate_resume_files(DOCUMENT, out_dir, "minimal", tex_only=True)

    assert files == {"tex": out_dir / "resume.tex"}
    assert "Ada Lovelace" in files["tex"].read_text(encoding="utf-8")


def test_custom_stem(tmp_path: Path) -> None:
    files = generate_resume_files(DOCUMENT, tmp_path, stem="cv", tex_only=True)

    assert files["tex"].name == "cv.tex"


def test_pdf_build_moves_both_artifacts(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []

    def fake_generate_pdf(self, filepath, *, clean_tex=True, compiler=None, **kwargs):
        calls.append({"clean_tex": clean_tex, "compiler": compiler})
        Path(f"{filepath}.tex").write_text(self.dumps(), encoding="utf-8")
        Path(f"{filepath}.pdf").write_bytes(b"%PDF-1.5")

    monkeypatch.setattr(Document, "generate_pdf", fake_generate_pdf)

    files = generate_resume_files(DOCUMENT, tmp_path, "developer", compiler="lualatex")

    assert calls == [{"clean_tex": False, "compiler": "lualatex"}]
    assert files == {"tex": tmp_path / "resume.tex", "pdf": tmp_path / "resume.pdf"}
    assert files["pdf"].read_bytes() == b"%PDF-1.5"


def test_compile_failure_leaves_no_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_generate_pdf(self, filepath, **kwargs):
        Path(f"{filepath}.tex").write_text("partial", encoding="utf-8")
        raise subprocess.CalledProcessError(1, ["pdflatex"])

    monkeypatch.setattr(Document, "generate_pdf", failing_generate_pdf)
    out_dir = tmp_path / "out"

    with pytest.raises(RenderError, match="Failed to render"):
        generate_resume_files(DOCUMENT, out_dir)

    assert not out_dir.exists()


def test_missing_artifact_is_an_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def silent_generate_pdf(self, filepath, **kwargs):
        Path(f"{filepath}.tex").write_text("only tex", encoding="utf-8")

    monkeypatch.setattr(Document, "generate_pdf", silent_generate_pdf)
    out_dir = tmp_path / "out"

    with pytest.raises(RenderError, match="did not produce"):
        generate_resume_files(DOCUMENT, out_dir)

    assert not out_dir.exists()


def test_unknown_style_is_render_error(tmp_path: Path) -> None:
    with pytest.raises(RenderError, match="Unknown template"):
        generate_resume_files(DOCUMENT, tmp_path / "out", "fancy", tex_only=True)

    assert not (tmp_path / "out").exists()
