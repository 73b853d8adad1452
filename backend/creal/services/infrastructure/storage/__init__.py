"""Storage layer - data persistence."""

from .kv_store import KeyValueStore, InMemoryKeyValueStore, JsonFileKeyValueStore
from .cache_store import CacheStore

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "CacheStore",
]
