"""Persistent key-value storage with read-side expiry."""

from shoresquad.storage.base import KeyValueStore
from shoresquad.storage.file_store import FileStore
from shoresquad.storage.manager import (
    SCHEMA_VERSION,
    CacheEntry,
    CacheLookup,
    LookupStatus,
    StorageManager,
    wall_clock_ms,
)
from shoresquad.storage.memory import MemoryStore

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "StorageManager",
    "CacheEntry",
    "CacheLookup",
    "LookupStatus",
    "SCHEMA_VERSION",
    "wall_clock_ms",
]
