"""Expiring cache over a persistent key-value store.

Every value is wrapped with the time it was written. Readers choose how old
a value they accept by passing ``max_age_ms`` to :meth:`StorageManager.get`;
stale entries are deleted when read. Storage is best-effort: no operation
raises, failures are logged and reported as ``None``/``False``.
"""

import json
import logging
import time
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shoresquad.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Milliseconds since the Unix epoch from the system wall clock."""
    return int(time.time() * 1000)


class CacheEntry(BaseModel):
    """Stored envelope around a cached value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: Any
    written_at: int = Field(..., alias="timestamp")
    schema_version: str = Field(..., alias="version")

    def serialize(self) -> str:
        """Encode as ``{"value", "timestamp", "version"}`` JSON.

        Raises:
            TypeError: If the value is not JSON-serializable
            ValueError: If the value contains NaN or infinity, or is circular
        """
        return json.dumps(self.model_dump(by_alias=True), allow_nan=False, separators=(",", ":"))

    @classmethod
    def deserialize(cls, raw: str) -> "CacheEntry":
        """Decode a stored string.

        Raises:
            ValidationError: If the string is not a valid entry
        """
        return cls.model_validate_json(raw)


class LookupStatus(str, Enum):
    """Outcome of a cache lookup."""

    HIT = "hit"
    MISS = "miss"
    EXPIRED = "expired"
    CORRUPT = "corrupt"
    FAILED = "failed"


class CacheLookup(BaseModel):
    """Result of :meth:`StorageManager.lookup`."""

    status: LookupStatus
    value: Any = None
    written_at: int | None = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.HIT


class StorageManager:
    """Namespaced, optionally-expiring storage for JSON-serializable values."""

    def __init__(
        self,
        store: KeyValueStore,
        namespace_keys: Iterable[str] = (),
        clock: Clock = wall_clock_ms,
        schema_version: str = SCHEMA_VERSION,
    ) -> None:
        """Initialize manager.

        Args:
            store: Underlying key-value store
            namespace_keys: Fixed set of keys owned by this application, removed by ``clear``
            clock: Source of "now" in epoch milliseconds, used for both writes and expiry checks
            schema_version: Version tag written with every entry
        """
        self.store = store
        self.namespace_keys = tuple(namespace_keys)
        self.clock = clock
        self.schema_version = schema_version

    def set(self, key: str, value: Any) -> bool:
        """Store a value under a key, stamped with the current time.

        Args:
            key: Storage key
            value: JSON-serializable value

        Returns:
            True if stored, False if serialization or the write failed
        """
        entry = CacheEntry(value=value, written_at=self.clock(), schema_version=self.schema_version)
        try:
            serialized = entry.serialize()
        except (TypeError, ValueError) as e:
            logger.warning(f"Storage failed for {key}: value not serializable: {e}")
            self._discard(key)
            return False

        try:
            written = self.store.raw_set(key, serialized)
        except Exception as e:
            logger.warning(f"Storage failed for {key}: {e}")
            written = False
        else:
            if not written:
                logger.warning(f"Storage failed for {key}: write rejected by store")

        if not written:
            # A failed write must not leave an older value readable.
            self._discard(key)
        return written

    def lookup(self, key: str, max_age_ms: int | None = None) -> CacheLookup:
        """Read an entry and report how the read went.

        Args:
            key: Storage key
            max_age_ms: Maximum accepted age; None accepts any age

        Returns:
            Lookup result; ``value`` is only set on a hit
        """
        try:
            raw = self.store.raw_get(key)
        except Exception as e:
            logger.warning(f"Storage retrieval failed for {key}: {e}")
            return CacheLookup(status=LookupStatus.FAILED)

        if raw is None:
            return CacheLookup(status=LookupStatus.MISS)

        try:
            entry = CacheEntry.deserialize(raw)
        except ValidationError as e:
            logger.warning(f"Storage retrieval failed for {key}: corrupt entry: {e.error_count()} errors")
            return CacheLookup(status=LookupStatus.CORRUPT)

        if max_age_ms is not None and self.clock() - entry.written_at > max_age_ms:
            logger.debug(f"Evicting expired entry {key}")
            self._discard(key)
            return CacheLookup(status=LookupStatus.EXPIRED, written_at=entry.written_at)

        return CacheLookup(status=LookupStatus.HIT, value=entry.value, written_at=entry.written_at)

    def get(self, key: str, max_age_ms: int | None = None) -> Any:
        """Return the value for a key, or None if absent, unreadable or older than max_age_ms."""
        return self.lookup(key, max_age_ms).value

    def remove(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if removed (or already absent), False on store failure
        """
        try:
            removed = self.store.raw_remove(key)
        except Exception as e:
            logger.warning(f"Storage removal failed for {key}: {e}")
            return False
        if not removed:
            logger.warning(f"Storage removal failed for {key}")
        return removed

    def clear(self) -> bool:
        """Remove every application-owned key, leaving other keys in the store untouched.

        Returns:
            True if every namespaced key was removed
        """
        results = [self.remove(key) for key in self.namespace_keys]
        return all(results)

    def _discard(self, key: str) -> None:
        try:
            self.store.raw_remove(key)
        except Exception as e:
            logger.warning(f"Storage removal failed for {key}: {e}")
