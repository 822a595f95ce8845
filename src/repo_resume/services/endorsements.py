"""
Persisted skill endorsements.

The table lives in ``.resume-endorsements.json`` at the project root and maps
each skill string (exactly as typed) to an ordered list of endorser names.
Every write replaces the whole file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ENDORSEMENTS_FILENAME = ".resume-endorsements.json"


class EndorsementStore:
    """Read-mutate-write access to the endorsement table of one project."""

    def __init__(self, project_root: Path | str) -> None:
        self.path = Path(project_root) / ENDORSEMENTS_FILENAME

    def _read(self) -> dict:
        """Return the raw stored object, or an empty one when the file is missing.

        Raises:
            ValueError: The file is not valid JSON or does not hold a JSON object.
        """
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return raw

    def load(self) -> dict[str, list[str]]:
        """Return the stored table for display; an unreadable file is an empty table."""
        try:
            raw = self._read()
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable endorsements file %s: %s", self.path, exc)
            return {}

        table: dict[str, list[str]] = {}
        for skill, endorsers in raw.items():
            if not isinstance(endorsers, list):
                continue
            names: list[str] = []
            for endorser in endorsers:
                if isinstance(endorser, str) and endorser not in names:
                    names.append(endorser)
            table[str(skill)] = names
        return table

    def save(self, table: dict) -> None:
        """Overwrite the stored table with ``table``."""
        self.path.write_text(json.dumps(table, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    def endorse(self, skill: str, endorser: str) -> list[str]:
        """Add ``endorser`` to ``skill`` unless already present.

        Both values are compared case-sensitively; "React" and "react" are
        different skills. Entries for other skills are written back exactly
        as read.

        Returns:
            The endorser list for ``skill`` after the update.

        Raises:
            ValueError: If either argument is blank, or the stored file cannot
                be updated without losing what it holds.
        """
        if not skill or not skill.strip():
            raise ValueError("Skill must not be empty")
        if not endorser or not endorser.strip():
            raise ValueError("Endorser must not be empty")

        table = self._read()
        endorsers = table.setdefault(skill, [])
        if not isinstance(endorsers, list):
            raise ValueError(f"Stored endorsements for {skill!r} are not a list")
        if endorser not in endorsers:
            endorsers.append(endorser)
            self.save(table)
            logger.info("Recorded endorsement of %r by %r", skill, endorser)
        return [name for name in endorsers if isinstance(name, str)]


__all__ = ["ENDORSEMENTS_FILENAME", "EndorsementStore"]
