"""JSON-file storage backend.

The whole store is one JSON object of string values, rewritten on every
change. A missing file reads as an empty store. There is no locking: two
processes writing the same file will overwrite each other.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage:
    """Key-value storage persisted to a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self._items: dict[str, str] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):  # ValueError covers bad JSON and bad UTF-8
            logger.warning("ignoring unreadable storage file %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring non-object storage file %s", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(self._items, f, indent=4)

    def get_item(self, key: str) -> str | None:
        """Get the value stored under key."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value and persist."""
        self._items[key] = str(value)
        self._save()

    def remove_item(self, key: str) -> None:
        """Remove a key if present and persist."""
        if self._items.pop(key, None) is not None:
            self._save()

    def clear(self) -> None:
        """Remove every key and persist."""
        self._items.clear()
        self._save()

    def keys(self) -> list[str]:
        """All stored keys."""
        return list(self._items)
