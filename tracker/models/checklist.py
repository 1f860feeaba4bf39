"""Checklist models shared by customers, the entry form and saved templates."""

import secrets

from pydantic import Field

from tracker.models.base import CamelModel


def new_item_id() -> str:
    """Short random token; only needs to be unique within one checklist."""
    return secrets.token_hex(6)


class ChecklistItem(CamelModel):
    """A completable line of a checklist.

    Attributes:
        id: Random token identifying the item within its checklist.
        text: Display text.
        completed: Whether the item has been checked off.
    """
    id: str = Field(default_factory=new_item_id)
    text: str
    completed: bool = False


class ChecklistTemplate(CamelModel):
    """A reusable list of item texts, identified by its position only."""
    title: str
    items: list[str] = Field(default_factory=list)

    def instantiate(self) -> list[ChecklistItem]:
        """Fresh, uncompleted items for every text in the template."""
        return [ChecklistItem(text=text) for text in self.items]
