"""Persistence adapters binding in-memory state to one store key.

An adapter loads its key once when constructed and writes the complete
value back on every change. Nothing else may write the same key while an
adapter for it is alive; whole-document imports go through the store and
are followed by a fresh load.
"""
import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter

from tracker.store.backends import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistedValue(Generic[T]):
    """A single JSON value kept under ``key``."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        value_type: Any,
        default: Callable[[], T],
    ):
        self.store = store
        self.key = key
        self._adapter = TypeAdapter(value_type)
        raw = store.get(key)
        if raw is None:
            self._value = default()
            self.save()
        else:
            self._value = self._adapter.validate_json(raw)

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self.save()

    def dumps(self) -> str:
        return self._adapter.dump_json(self._value, by_alias=True).decode()

    def save(self) -> None:
        self.store.set(self.key, self.dumps())


class PersistedCollection(PersistedValue[list[T]]):
    """An ordered sequence of records kept as one JSON array under ``key``.

    ``items`` is a read-only snapshot; callers mutate through ``replace`` or
    ``append`` so that every change is followed by a full re-serialization.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        item_type: type[T],
        default: Callable[[], list[T]] = list,
    ):
        super().__init__(store, key, list[item_type], default)
        logger.debug(f"Loaded {len(self._value)} records from {key}")

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __iter__(self):
        return iter(tuple(self._value))

    def append(self, item: T) -> None:
        self._value = [*self._value, item]
        self.save()

    def replace(self, items: Iterable[T]) -> None:
        self._value = list(items)
        self.save()
