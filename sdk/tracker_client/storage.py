# sdk/tracker_client/storage.py
"""
Key-Value Storage Adapters

Async string storage addressed by key, the shape of a mobile app's local
storage. Every read and write is a suspension point so callers interleave
with network work the same way they would on a device.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from .errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Port for durable local storage."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    """Process-local store. Survives nothing; handy for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStore(KeyValueStore):
    """
    Store all keys in a single JSON object on disk.

    Writes go to a sibling temp file that replaces the original, so a crash
    mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: File to hold the data (defaults to $TRACKER_STORAGE_PATH
                or ./.tracker_storage.json)
        """
        self._path = Path(path or os.getenv("TRACKER_STORAGE_PATH", ".tracker_storage.json"))

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected contents in {self._path}")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    async def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    async def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    async def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
