"""
Key-value stores for the session service.

- InMemoryKeyValueStore: For testing and development
- JsonFileKeyValueStore: Durable store keeping every key in one JSON file
"""

import json
from pathlib import Path
from typing import Optional

from .exceptions import CorruptedStoreError


class InMemoryKeyValueStore:
    """Key-value store held in a dict. Contents are lost with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """
    Key-value store persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary sibling and an
    atomic rename. There is no locking; one writer at a time is assumed.

    File I/O is blocking and the async session operations call it directly.
    The file is small and has a single local user, so the event loop is
    never held for long.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: File to keep the data in. Parent directories are created on first write.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptedStoreError(str(self._path), str(e)) from e

        if not isinstance(data, dict):
            raise CorruptedStoreError(str(self._path), "expected a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
