"""
Key-value substrate - the opaque persistent store underneath the cache.

Implements the Repository pattern so the cache never knows where bytes live:
    - InMemoryKeyValueStore: process-local dict, used by tests and dev runs
    - JsonFileKeyValueStore: a single JSON document on disk

Both expose the same asynchronous get/set contract. Values must be
JSON-serializable.
"""

from __future__ import annotations

import asyncio
import copy
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Optional

from creal.core import get_logger

logger = get_logger(__name__, component="kv_store")


class KeyValueStore(ABC):
    """Abstract asynchronous key-value store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Replace the value stored under key."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; values are deep-copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileKeyValueStore(KeyValueStore):
    """All keys live in one JSON file; writes go through a temp file + rename."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = RLock()

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return payload if isinstance(payload, dict) else {}

    def _get_sync(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._read_all().get(key)

    def _read_for_write(self) -> Dict[str, Any]:
        """Like _read_all, but a corrupt document is replaced rather than fatal."""
        try:
            return self._read_all()
        except json.JSONDecodeError as e:
            logger.warning(
                "Overwriting corrupt store file",
                extra={"path": str(self.path), "error": str(e)},
            )
            return {}

    def _set_sync(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_for_write()
            data[key] = value
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)

    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set_sync, key, value)
