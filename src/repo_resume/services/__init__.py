"""Services"""

from repo_resume.services.commit_history import extract_commits, get_repository_snapshot
from repo_resume.services.content_synthesizer import ContentSynthesizer, UserInput
from repo_resume.services.endorsements import EndorsementStore
from repo_resume.services.resume_generator import (
    RenderError,
    generate_resume_files,
    generate_resume_tex,
)

__all__ = [
    "ContentSynthesizer",
    "EndorsementStore",
    "RenderError",
    "UserInput",
    "extract_commits",
    "generate_resume_files",
    "generate_resume_tex",
    "get_repository_snapshot",
]
