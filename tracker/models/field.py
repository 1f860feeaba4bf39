"""Field definition model for the dynamic customer form.

A field definition describes one attribute captured for every customer.
Customers hold their value under the definition's ``name``; there is no
foreign key, so renaming a definition leaves earlier values under the old
name.
"""

from typing import Literal

from pydantic import Field

from tracker.models.base import CamelModel, new_id

FieldType = Literal["text", "number", "email", "tel", "select", "date"]


class FieldDefinition(CamelModel):
    """A user-configurable customer attribute.

    Attributes:
        id: Opaque identifier.
        name: Key under which customers store the value. Unique among
            definitions.
        type: Input kind. Only ``select`` uses ``options``.
        required: Whether the value must be given. Required fields also form
            the key for duplicate detection when customers are created.
        options: Choices for ``select`` fields, in display order.
    """
    id: str = Field(default_factory=new_id)
    name: str
    type: FieldType = "text"
    required: bool = False
    options: list[str] = Field(default_factory=list)


class FieldDefinitionCreate(CamelModel):
    name: str
    type: FieldType = "text"
    required: bool = False
    options: list[str] = Field(default_factory=list)


class FieldDefinitionUpdate(CamelModel):
    name: str | None = None
    type: FieldType | None = None
    required: bool | None = None
    options: list[str] | None = None


DEFAULT_FIELDS = (
    FieldDefinitionCreate(name="name", type="text", required=True),
    FieldDefinitionCreate(name="email", type="email", required=True),
    FieldDefinitionCreate(name="phone", type="text", required=True),
)
