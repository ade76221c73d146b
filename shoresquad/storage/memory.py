"""In-memory key-value store."""

import logging
from typing import Optional

from shoresquad.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class MemoryStore(KeyValueStore):
    """Dict-backed store with an optional quota.

    Contents live only as long as the process. Useful as a fake in tests and
    for throwaway sessions.
    """

    def __init__(self, quota: Optional[int] = None) -> None:
        """Initialize store.

        Args:
            quota: Maximum total characters (keys plus values), or None for unlimited
        """
        self.quota = quota
        self._data: dict[str, str] = {}

    def raw_get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def raw_set(self, key: str, serialized: str) -> bool:
        if self.quota is not None:
            current = self._data.get(key)
            used = self.size() - (self.entry_size(key, current) if current is not None else 0)
            needed = self.entry_size(key, serialized)
            if used + needed > self.quota:
                logger.debug(f"Rejecting write to {key}: {used + needed} > quota {self.quota}")
                return False
        self._data[key] = serialized
        return True

    def raw_remove(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    def keys(self) -> list[str]:
        return list(self._data)

    def size(self) -> int:
        """Total characters currently stored."""
        return sum(self.entry_size(k, v) for k, v in self._data.items())

    def __len__(self) -> int:
        return len(self._data)
