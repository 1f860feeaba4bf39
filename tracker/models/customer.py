"""Customer model.

A customer carries a fixed set of workflow attributes (status, payment,
priority, amount, checklist) plus one value per field definition. The
dynamic values are kept in their own mapping so that a field definition can
never shadow a workflow attribute.
"""

import re
from datetime import UTC, date, datetime
from typing import Literal

from pydantic import Field, field_validator, model_validator

from tracker.models.base import CamelModel
from tracker.models.checklist import ChecklistItem

CustomerStatus = Literal["new", "in-progress", "completed"]
Priority = Literal["low", "normal", "high", "urgent"]
FieldValue = bool | float | str

# Attribute names (both spellings) a field definition may not use.
RESERVED_NAMES = frozenset({
    "id", "joinId", "join_id", "createdAt", "created_at", "entryDate",
    "entry_date", "dateAdded", "date_added", "status", "paid", "payment",
    "priority", "amount", "checklist", "checklistTitle", "checklist_title",
    "values",
})


def today() -> str:
    return date.today().isoformat()


def _fold_dynamic_values(model, data):
    """Move keys that are not customer attributes into ``values``.

    Records written by the browser version keep field values next to the
    fixed attributes; they are accepted here and stored separately. Reserved
    attribute names the model does not accept (``joinId`` on an update, for
    instance) are dropped rather than stored as field values.
    """
    if not isinstance(data, dict):
        return data
    known = set()
    for name, info in model.model_fields.items():
        known.add(name)
        if info.alias:
            known.add(info.alias)
    extras = {k: v for k, v in data.items() if k not in known}
    values = data.get("values")
    if not extras and not (isinstance(values, dict) and RESERVED_NAMES.intersection(values)):
        return data
    folded = {k: v for k, v in data.items() if k in known}
    merged = {
        **{k: v for k, v in extras.items() if v is not None},
        **(values if isinstance(values, dict) else {}),
    }
    kept = {k: v for k, v in merged.items() if k not in RESERVED_NAMES}
    if kept or "values" in data:
        folded["values"] = kept
    return folded


def _amount_to_text(value):
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class CustomerBase(CamelModel):
    entry_date: str = Field(default_factory=today)
    date_added: str = Field(default_factory=today)
    status: CustomerStatus = "new"
    paid: bool = False
    priority: Priority = "normal"
    amount: str = ""
    checklist: list[ChecklistItem] = Field(default_factory=list)
    checklist_title: str = ""
    values: dict[str, FieldValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def fold_values(cls, data):
        return _fold_dynamic_values(cls, data)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        return _amount_to_text(value)


class Customer(CustomerBase):
    """A tracked customer.

    Attributes:
        id: Opaque identifier assigned at creation.
        join_id: Human-readable sequential number (``CUS-01``, ``CUS-02``...).
        created_at: Creation timestamp; never changes.
        entry_date: Date the data was entered (ISO date).
        date_added: Date the customer was added (ISO date).
        status: Workflow stage.
        paid: Whether the amount has been paid.
        priority: Urgency of the job.
        amount: Decimal amount kept as text; see ``parse_amount``.
        checklist: Per-customer checklist, replaced as a whole on change.
        checklist_title: Heading shown above the checklist.
        values: Dynamic field values keyed by field definition name.
    """
    id: str
    join_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def join_number(self) -> int | None:
        """Leading digits of the segment after the first dash, or None."""
        parts = self.join_id.split("-")
        if len(parts) < 2:
            return None
        match = re.match(r"\s*(\d+)", parts[1])
        return int(match.group(1)) if match else None


class CustomerCreate(CustomerBase):
    """Input for creating a customer; identity fields are assigned."""


class CustomerUpdate(CamelModel):
    """Partial customer update. Only explicitly set keys are applied."""
    entry_date: str | None = None
    date_added: str | None = None
    status: CustomerStatus | None = None
    paid: bool | None = None
    priority: Priority | None = None
    amount: str | None = None
    checklist: list[ChecklistItem] | None = None
    checklist_title: str | None = None
    values: dict[str, FieldValue] | None = None

    @model_validator(mode="before")
    @classmethod
    def fold_values(cls, data):
        return _fold_dynamic_values(cls, data)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        return _amount_to_text(value)

    def changes(self) -> dict:
        """Keys the caller actually supplied, without explicit nulls."""
        return {
            key: value
            for key, value in self.model_dump(include=self.model_fields_set).items()
            if value is not None
        }
