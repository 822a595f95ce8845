from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from repo_resume.config import ResumeConfig
from repo_resume.services.content_synthesizer import UserInput
from repo_resume.services.endorsements import EndorsementStore
from repo_resume.services.resume_generator import RenderError
from repo_resume.templates import get_template, list_templates
from repo_resume.workflows.resume_pipeline import (
    PipelineResult,
    ResumePipeline,
    ResumeRequest,
)

_COMMANDS = {"generate", "endorse", "endorsements"}


class ConsolePrompter:
    """Prompt on stdin/stdout. End of input counts as cancelling."""

    def choose_style(self, styles: list[str], default: str | None) -> str | None:
        print("\nSelect resume style:")
        for index, style in enumerate(styles, start=1):
            marker = " (last used)" if style == default else ""
            print(f"  {index}. {style:<10} {get_template(style).description}{marker}")
        try:
            answer = input("Style [number or name]: ").strip().lower()
        except EOFError:
            return None
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(styles):
            return styles[int(answer) - 1]
        if answer in styles:
            return answer
        print(f"Unknown style: {answer}")
        return None

    def ask(self, label: str, default: str = "") -> str | None:
        suffix = f" [{default}]" if default else ""
        try:
            answer = input(f"{label}{suffix}: ").strip()
        except EOFError:
            return None
        return answer or default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-resume",
        description="Generate a resume from a git repository's history and project files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate a resume (default command).")
    gen.add_argument("path", nargs="?", default=".", help="Project root (default: current directory).")
    gen.add_argument("--style", choices=list_templates(), help="Resume style.")
    gen.add_argument("--name", default="", help="Full name.")
    gen.add_argument("--email", default="", help="Email address.")
    gen.add_argument("--title", default="", help="Professional title.")
    gen.add_argument("--skills", default="", help='Extra skills, comma separated ("Go, Rust").')
    gen.add_argument("--github", metavar="HANDLE", help="Import a GitHub profile.")
    gen.add_argument("--no-ai", action="store_true", help="Skip text generation entirely.")
    gen.add_argument("--commits", type=int, help="Number of recent commits to analyze.")
    gen.add_argument("--output", type=Path, help="Output directory (default: project root).")
    gen.add_argument("--tex-only", action="store_true", help="Write the .tex file without compiling.")
    gen.add_argument("--yes", action="store_true", help="Do not prompt for optional fields.")
    gen.add_argument("-v", "--verbose", action="store_true", dest="verbose_sub", help=argparse.SUPPRESS)

    endorse = sub.add_parser("endorse", help="Record an endorsement for a skill.")
    endorse.add_argument("skill")
    endorse.add_argument("endorser")
    endorse.add_argument("--path", default=".", help="Project root (default: current directory).")

    listing = sub.add_parser("endorsements", help="List recorded endorsements.")
    listing.add_argument("--path", default=".", help="Project root (default: current directory).")
    return parser


def _normalize_argv(argv: Sequence[str]) -> list[str]:
    """Insert the default ``generate`` command when none was given."""
    args = list(argv)
    for index, arg in enumerate(args):
        if arg in ("-h", "--help"):
            return args
        if arg in ("-v", "--verbose"):
            continue
        if arg not in _COMMANDS:
            args.insert(index, "generate")
        return args
    args.append("generate")
    return args


def _report(result: PipelineResult) -> int:
    if not result.ok:
        print(f"\nAborted: {result.abort_reason}")
        return 1
    sources = ", ".join(f"{section}={source}" for section, source in result.sources.items())
    print(f"\nResume generated ({result.style}; {sources})")
    for kind, path in result.files.items():
        print(f"  {kind}: {path}")
    return 0


def run_generate(args: argparse.Namespace, config: ResumeConfig) -> int:
    if args.commits is not None:
        if args.commits <= 0:
            print("--commits must be a positive integer")
            return 1
        config.commit_limit = args.commits

    request = ResumeRequest(
        project_root=Path(args.path).resolve(),
        style=args.style,
        user=UserInput(name=args.name, email=args.email, title=args.title, skills=args.skills),
        github_handle=args.github,
        use_ai=not args.no_ai,
        output_dir=args.output,
        tex_only=args.tex_only,
        interactive=not args.yes,
    )
    pipeline = ResumePipeline(config, prompter=ConsolePrompter())
    print(f"Analyzing {request.project_root} ...")
    try:
        result = pipeline.run(request)
    except RenderError as exc:
        print(f"\nFailed to render resume: {exc}")
        return 1
    return _report(result)


def run_endorse(args: argparse.Namespace) -> int:
    store = EndorsementStore(Path(args.path))
    try:
        endorsers = store.endorse(args.skill, args.endorser)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"{args.skill}: {len(endorsers)} endorsement(s) ({', '.join(endorsers)})")
    return 0


def run_endorsements(args: argparse.Namespace) -> int:
    table = EndorsementStore(Path(args.path)).load()
    if not table:
        print("No endorsements recorded.")
        return 0
    for skill, endorsers in table.items():
        print(f"{skill} ⭐ ({len(endorsers)}): {', '.join(endorsers)}")
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and dispatch to the selected command.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = build_parser()
    args = parser.parse_args(_normalize_argv(sys.argv[1:] if argv is None else argv))

    verbose = args.verbose or getattr(args, "verbose_sub", False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "endorse":
        return run_endorse(args)
    if args.command == "endorsements":
        return run_endorsements(args)
    return run_generate(args, ResumeConfig.from_env())


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
