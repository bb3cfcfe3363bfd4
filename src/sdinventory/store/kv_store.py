"""Process-durable string key-value storage backed by a JSON file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Optional

from sdinventory.errors import CheckpointError, InvalidArgumentError, InventoryError

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore:
    """
    Small key-value store persisted as one JSON object.

    Every write rewrites the whole file through a temporary file and
    os.replace, so readers never observe a partially written file.

    A file whose content is not a JSON object raises CheckpointError on read;
    delete() and reset() recover from it by discarding the file.
    """

    def __init__(self, path: str) -> None:
        if not isinstance(path, str) or not path.strip():
            raise InvalidArgumentError("path must be a non-empty string")
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise InvalidArgumentError("value must be a string", details={"key": key})
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        try:
            data = self._read()
        except CheckpointError as exc:
            logger.warning("Discarding unreadable store %s: %s", self._path, exc)
            self.reset()
            return
        if key in data:
            del data[key]
            self._write(data)

    def reset(self) -> None:
        """Remove the backing file, dropping every key."""
        try:
            os.remove(self._path)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise InventoryError(
                "Failed to remove key-value store",
                details={"path": self._path},
                cause=exc,
            ) from exc

    def _read(self) -> dict[str, str]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise InventoryError(
                "Failed to read key-value store",
                details={"path": self._path},
                cause=exc,
            ) from exc
        except ValueError as exc:
            raise CheckpointError(
                "Key-value store is not valid JSON",
                details={"path": self._path},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise CheckpointError("Key-value store is not a JSON object", details={"path": self._path})
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".kv-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise InventoryError(
                "Failed to write key-value store",
                details={"path": self._path},
                cause=exc,
            ) from exc
