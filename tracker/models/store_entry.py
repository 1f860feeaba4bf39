"""Key/value row backing the persistent store."""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class StoreEntry(SQLModel, table=True):
    """One named value of the durable key/value store.

    Each collection (``customers``, ``fields``, ``templates``, ...) is kept
    as a single JSON document under its key and rewritten whole on every
    change.

    Attributes:
        key: Store key.
        value: JSON text.
        updated_at: When the value was last written.
    """
    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
