"""Abstract key-value store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract base class for synchronous string key-value storage.

    Stores hold already-serialized strings. Implementations may raise
    ``StorageError`` or ``OSError`` when the underlying medium is unavailable.
    """

    @abstractmethod
    def raw_get(self, key: str) -> Optional[str]:
        """Retrieve the raw string stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string or None if not found
        """
        pass

    @abstractmethod
    def raw_set(self, key: str, serialized: str) -> bool:
        """Store a raw string under a key, replacing any previous value.

        Args:
            key: Storage key
            serialized: Serialized value

        Returns:
            True if written, False if the store rejected the write
        """
        pass

    @abstractmethod
    def raw_remove(self, key: str) -> bool:
        """Delete a key. Deleting a missing key succeeds.

        Args:
            key: Storage key

        Returns:
            True if the key is gone afterwards
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every key currently held by the store."""
        pass

    @staticmethod
    def entry_size(key: str, serialized: str) -> int:
        """Size of an entry as counted against a quota."""
        return len(key) + len(serialized)
