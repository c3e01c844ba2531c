from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from quiz_engine.errors import PersistenceReadFailure, PersistenceWriteFailure


class KeyValueStore(Protocol):
    """Minimal string key-value backend used for persisted progress."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore:
    """Dictionary-backed store, handy for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """
    Key-value store persisted as a single JSON object on disk.

    Every key maps to a string value. Writes rewrite the whole document through a
    temporary file in the same directory followed by an atomic replace, so a crash
    mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: Path):
        """Ensure the backing directory exists and record the JSON filepath."""
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PersistenceReadFailure(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceReadFailure(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceReadFailure(f"Value stored under {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except PersistenceReadFailure:
            # An unreadable document is replaced rather than blocking every future write.
            data = {}
        data[key] = value
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise PersistenceWriteFailure(f"Could not write {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceWriteFailure(f"Could not write {self.path}: {exc}") from exc
