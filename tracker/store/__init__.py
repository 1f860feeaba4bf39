from tracker.store.backends import KeyValueStore, MemoryKeyValueStore, SQLKeyValueStore
from tracker.store.collection import PersistedCollection, PersistedValue

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PersistedCollection",
    "PersistedValue",
    "SQLKeyValueStore",
]
