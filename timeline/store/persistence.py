"""
Key/value persistence backends for the project store.

The store only needs get/set of text under a fixed key. Backends raise
PersistenceWarning on I/O failure; the store catches and logs it.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from timeline.lib.errors import PersistenceWarning

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, text: str) -> None: ...


class MemoryKeyValueStore:
    """In-process key/value store. Used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, text: str) -> None:
        self.data[key] = text


class JsonFileKeyValueStore:
    """
    Key/value store backed by a single JSON object file.

    Usage:
        kv = JsonFileKeyValueStore(Path("data/storage.json"))
        kv.set("key", "text")
        kv.get("key")
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceWarning(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceWarning(f"Corrupted storage file {self.path}: expected a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, text: str) -> None:
        try:
            data = self._read_all()
        except PersistenceWarning as e:
            # Unreadable file: overwrite it rather than lose this write too
            logger.warning(f"{e}; rewriting storage file")
            data = {}
        data[key] = text

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise PersistenceWarning(f"Failed to write {self.path}: {e}") from e
        logger.debug(f"Persisted key '{key}' to {self.path}")
