"""Entry-form session state and print preferences.

These are the auxiliary store keys: the checklist being assembled for the
next customer, its title, and the print settings. They are persisted like
the record collections but are not part of the exported data.
"""
import logging

from tracker.models import ChecklistItem, ChecklistTemplate
from tracker.services.fields import FieldRegistry
from tracker.services.templates import ChecklistTemplateRegistry
from tracker.store import KeyValueStore, PersistedValue

logger = logging.getLogger(__name__)

CURRENT_CHECKLIST_KEY = "currentChecklist"
CURRENT_CHECKLIST_TITLE_KEY = "currentChecklistTitle"
DEFAULT_PRINT_FIELDS_KEY = "defaultPrintFields"
SHOW_JOIN_ID_KEY = "showJoinId"

# Print-only pseudo fields that can be selected next to field definitions.
WORKFLOW_PRINT_FIELDS = ("status", "payment", "priority", "amount")


class EntrySession:
    """The checklist attached to the next customer created from the form.

    When it starts out empty and saved checklists exist, the first saved
    checklist is loaded. ``reset`` goes back to that state after a
    customer has been submitted.
    """

    def __init__(self, store: KeyValueStore, saved: ChecklistTemplateRegistry):
        self.saved = saved
        self._checklist = PersistedValue(store, CURRENT_CHECKLIST_KEY, list[ChecklistItem], list)
        self._title = PersistedValue(store, CURRENT_CHECKLIST_TITLE_KEY, str, str)
        if not self._checklist.value and len(saved):
            self.use_template(0)

    @property
    def checklist(self) -> list[ChecklistItem]:
        return list(self._checklist.value)

    @property
    def title(self) -> str:
        return self._title.value

    def set_title(self, title: str) -> None:
        self._title.set(title)

    def add_item(self, text: str) -> ChecklistItem | None:
        text = text.strip()
        if not text:
            return None
        item = ChecklistItem(text=text)
        self._checklist.set([*self._checklist.value, item])
        return item

    def toggle_item(self, item_id: str) -> None:
        self._checklist.set([
            item.model_copy(update={"completed": not item.completed}) if item.id == item_id else item
            for item in self._checklist.value
        ])

    def remove_item(self, item_id: str) -> None:
        self._checklist.set([item for item in self._checklist.value if item.id != item_id])

    def use_template(self, index: int) -> bool:
        template = self.saved.get(index)
        if template is None:
            return False
        self._title.set(template.title)
        self._checklist.set(template.instantiate())
        return True

    def reset(self) -> None:
        if not self.use_template(0):
            self._title.set("")
            self._checklist.set([])

    def save_as_template(self) -> ChecklistTemplate | None:
        """Store the current checklist texts as a reusable template.

        An empty checklist is not saved. Without a title the template is
        named after its position.
        """
        if not self._checklist.value:
            return None
        template = ChecklistTemplate(
            title=self.title or f"Checklist Template {len(self.saved) + 1}",
            items=[item.text for item in self._checklist.value],
        )
        return self.saved.append(template)


class PrintPreferences:
    """Which fields a printed customer shows, and whether its joinId does."""

    def __init__(self, store: KeyValueStore, fields: FieldRegistry):
        self.fields = fields
        self._print_fields = PersistedValue(
            store, DEFAULT_PRINT_FIELDS_KEY, list[str] | None, lambda: None
        )
        self._show_join_id = PersistedValue(store, SHOW_JOIN_ID_KEY, bool, lambda: False)

    @property
    def print_fields(self) -> list[str]:
        """Saved selection, or every field definition when none was saved."""
        saved = self._print_fields.value
        return list(saved) if saved is not None else self.fields.names()

    @property
    def show_join_id(self) -> bool:
        return self._show_join_id.value

    def available_fields(self) -> list[str]:
        return [*self.fields.names(), *WORKFLOW_PRINT_FIELDS]

    def save(self, print_fields: list[str] | None = None, show_join_id: bool | None = None) -> None:
        if print_fields is not None:
            self._print_fields.set(list(print_fields))
        if show_join_id is not None:
            self._show_join_id.set(show_join_id)
        logger.info("Saved print preferences")
