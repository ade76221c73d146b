"""Durable key-value store backed by a JSON file."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from shoresquad.core.exceptions import StorageError
from shoresquad.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class FileStore(KeyValueStore):
    """Stores every key in a single JSON document on the local filesystem.

    The document is reread on every access, and each mutation applies only
    its own key to the current document before an atomic replace. Handles on
    the same path therefore see each other's writes and never drop each
    other's keys.
    """

    def __init__(self, path: Path | str, quota: Optional[int] = None):
        """
        Initializes the store.

        Args:
            path: Location of the JSON document. Parent directories are created on first write.
            quota: Maximum total characters (keys plus values), or None for unlimited.
        """
        self.path = Path(path).expanduser()
        self.quota = quota

    def _load(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}", component="file_store") from e
        try:
            raw = json.loads(text)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected a JSON object")
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def _flush(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}", component="file_store") from e

    def raw_get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def raw_set(self, key: str, serialized: str) -> bool:
        data = self._load()
        if self.quota is not None:
            data.pop(key, None)
            used = sum(self.entry_size(k, v) for k, v in data.items())
            if used + self.entry_size(key, serialized) > self.quota:
                logger.debug(f"Rejecting write to {key}: quota {self.quota} reached")
                return False
        data[key] = serialized
        self._flush(data)
        return True

    def raw_remove(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return True
        del data[key]
        self._flush(data)
        return True

    def keys(self) -> list[str]:
        return list(self._load())

    def size(self) -> int:
        """Total characters currently stored."""
        return sum(self.entry_size(k, v) for k, v in self._load().items())
