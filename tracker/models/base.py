"""Shared base for persisted records.

Records are stored and exchanged with camelCase keys (``joinId``,
``createdAt``, ``isDefault``) while Python code uses snake_case attributes.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Return a fresh opaque record id."""
    return str(uuid4())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_store(self) -> dict:
        """Dump with the camelCase keys used in the store and export file."""
        return self.model_dump(mode="json", by_alias=True)
