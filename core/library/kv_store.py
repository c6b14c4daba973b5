# Path: core/library/kv_store.py
# Purpose: Persist string values under fixed keys in a single JSON file.
# Layer: core/library.
# Details: Writes go to a temporary file that atomically replaces the original.

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from core.errors import StorageError


class JsonKeyValueStore:
    """Minimal key-value store backed by one JSON object on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise StorageError(f"{self.path} does not contain a JSON object.")
        return payload

    def get(self, key: str) -> Optional[str]:
        """Return the stored string for ``key``; raises StorageError if the file is unreadable."""

        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, keeping other keys; an unreadable file is replaced."""

        try:
            payload = self._read_all()
        except StorageError:
            payload = {}
        payload[key] = value

        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}: {exc}") from exc
