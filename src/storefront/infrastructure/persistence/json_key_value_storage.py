"""JSON-file-backed implementation of KeyValueStorage.

Each key lives in its own ``<key>.json`` file under one data directory.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from storefront.domain.repository.key_value_storage import KeyValueStorage


class JsonFileKeyValueStorage(KeyValueStorage):

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._lock = threading.Lock()
        self._directory.mkdir(parents=True, exist_ok=True)

    # --- KeyValueStorage interface --------------------------------------------

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        with self._lock:
            if not path.exists():
                return None
            return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp = path.with_suffix(".json.tmp")
        with self._lock:
            tmp.write_text(value, encoding="utf-8")
            # Readers see either the old blob or the new one, never half a write.
            os.replace(tmp, path)

    def remove(self, key: str) -> None:
        with self._lock:
            self._path_for(key).unlink(missing_ok=True)

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key {key!r}")
        return self._directory / f"{key}.json"
