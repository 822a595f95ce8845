"""File walker for project directories.

Exclusion rules are data: callers pass a set of predicates and any entry for
which one predicate returns True is skipped (directories are not descended).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from repo_resume.constants.technology_constants import DEFAULT_EXCLUDED_DIRS

logger = logging.getLogger(__name__)

ExcludePredicate = Callable[[str, bool], bool]
"""Called with (relative POSIX path, is_directory); True excludes the entry."""


def exclude_names(names: Iterable[str]) -> ExcludePredicate:
    """Build a predicate excluding entries whose final path component is in ``names``."""
    frozen = frozenset(names)

    def _predicate(rel_path: str, is_dir: bool) -> bool:
        return rel_path.rsplit("/", 1)[-1] in frozen

    return _predicate


def exclude_suffixes(suffixes: Iterable[str]) -> ExcludePredicate:
    """Build a predicate excluding files that end with any of ``suffixes``."""
    lowered = tuple(s.lower() for s in suffixes)

    def _predicate(rel_path: str, is_dir: bool) -> bool:
        return not is_dir and rel_path.lower().endswith(lowered)

    return _predicate


def default_predicates() -> set[ExcludePredicate]:
    return {exclude_names(DEFAULT_EXCLUDED_DIRS)}


@dataclass
class WalkResult:
    """Result of walking a directory tree.

    Attributes:
        root: The walked directory.
        paths: Relative POSIX paths of the kept files, sorted.
    """

    root: Path
    paths: list[str] = field(default_factory=list)


class DirectoryWalker:
    """Walk a project directory and collect relative file paths."""

    @staticmethod
    def _excluded(rel_path: str, is_dir: bool, predicates: Iterable[ExcludePredicate]) -> bool:
        return any(predicate(rel_path, is_dir) for predicate in predicates)

    @staticmethod
    def walk(
        directory: Path | str,
        predicates: set[ExcludePredicate] | None = None,
    ) -> WalkResult:
        """Walk a directory and collect all files not excluded by ``predicates``.

        Args:
            directory: Path to the directory to walk.
            predicates: Exclusion predicates. If None, uses :func:`default_predicates`.

        Returns:
            WalkResult with paths sorted.

        Raises:
            ValueError: If directory doesn't exist or is not a directory.
        """
        root = Path(directory)
        if not root.exists() or not root.is_dir():
            raise ValueError(f"Invalid directory: {directory}")

        if predicates is None:
            predicates = default_predicates()

        result = WalkResult(root=root)

        def _on_error(exc: OSError) -> None:
            logger.debug("Skipping unreadable path during walk: %s", exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current = Path(dirpath)
            rel_dir = current.relative_to(root).as_posix()
            prefix = "" if rel_dir == "." else f"{rel_dir}/"

            # Prune in place so os.walk never descends into excluded directories
            dirnames[:] = sorted(
                d for d in dirnames if not DirectoryWalker._excluded(f"{prefix}{d}", True, predicates)
            )

            for name in sorted(filenames):
                rel_path = f"{prefix}{name}"
                if DirectoryWalker._excluded(rel_path, False, predicates):
                    continue
                result.paths.append(rel_path)

        result.paths.sort()
        return result
