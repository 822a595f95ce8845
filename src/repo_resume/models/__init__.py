"""Data models and type definitions"""

from repo_resume.models.commits import CommitRecord, DateRange, RepositorySnapshot
from repo_resume.models.metadata import ManifestData, ProjectMetadata, ReadmeData

__all__ = [
    "CommitRecord",
    "DateRange",
    "ManifestData",
    "ProjectMetadata",
    "ReadmeData",
    "RepositorySnapshot",
]
