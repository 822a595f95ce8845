from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class UserPreferences:
    """Preferences remembered between runs."""

    def __init__(self, last_import_handle: str | None = None, last_style: str | None = None):
        self.last_import_handle = last_import_handle
        self.last_style = last_style

    def to_dict(self) -> dict:
        """Returns the preferences as a dictionary."""
        return {
            "last_import_handle": self.last_import_handle,
            "last_style": self.last_style,
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserPreferences:
        """Returns a UserPreferences object from a dictionary."""
        handle = data.get("last_import_handle")
        style = data.get("last_style")
        return cls(
            last_import_handle=handle if isinstance(handle, str) else None,
            last_style=style if isinstance(style, str) else None,
        )

    @classmethod
    def load(cls, path: Path | str) -> UserPreferences:
        """Read preferences from ``path``; missing or malformed files give defaults."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", path, exc)
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)

    def save(self, path: Path | str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
