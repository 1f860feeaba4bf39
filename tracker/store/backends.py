"""Durable key/value string stores.

Every collection of the tracker lives under one string key. Backends only
move strings in and out; encoding is the job of ``tracker.store.collection``.
"""
import logging
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from tracker.models import StoreEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal interface the persistence adapters depend on."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryKeyValueStore:
    """Process-local store, used by tests and dry runs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SQLKeyValueStore:
    """Store backed by the ``storeentry`` table.

    Each ``set`` commits immediately so that a mutation is durable before
    control returns to the caller.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def get(self, key: str) -> str | None:
        with Session(self.engine) as session:
            entry = session.get(StoreEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            entry = session.get(StoreEntry, key)
            if entry is None:
                entry = StoreEntry(key=key, value=value)
            else:
                entry.value = value
                entry.updated_at = datetime.now(UTC)
            session.add(entry)
            session.commit()
        logger.debug(f"Stored {key} ({len(value)} chars)")

    def delete(self, key: str) -> None:
        with Session(self.engine) as session:
            entry = session.get(StoreEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()

    def keys(self) -> list[str]:
        with Session(self.engine) as session:
            return sorted(session.exec(select(StoreEntry.key)).all())
