"""Wires every registry to one key/value store."""
import logging

from fastapi import Request

from tracker.models import Customer, CustomerCreate
from tracker.services import transfer
from tracker.services.customers import CustomerManager
from tracker.services.fields import FieldRegistry
from tracker.services.session import EntrySession, PrintPreferences
from tracker.services.templates import ChecklistTemplateRegistry, PrintTemplateRegistry
from tracker.store import KeyValueStore

logger = logging.getLogger(__name__)


class Workspace:
    """
    All tracker state loaded from a single store.

    Each registry loads its keys on construction and writes them back on
    every change. ``load`` rebuilds the registries from the store, which
    is how an import takes effect.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.load()

    def load(self) -> None:
        self.fields = FieldRegistry(self.store)
        self.customers = CustomerManager(self.store, self.fields)
        self.templates = PrintTemplateRegistry(self.store)
        self.checklists = ChecklistTemplateRegistry(self.store)
        self.entry = EntrySession(self.store, self.checklists)
        self.preferences = PrintPreferences(self.store, self.fields)
        logger.info(
            f"Loaded {len(self.customers.customers)} customers, "
            f"{len(self.fields.fields)} fields, {len(self.templates.templates)} templates"
        )

    def submit_entry(self, data: CustomerCreate) -> Customer:
        """Create a customer carrying the entry checklist, then reset the entry form."""
        data = data.model_copy(update={
            "checklist": self.entry.checklist,
            "checklist_title": self.entry.title,
        })
        customer = self.customers.create(data)
        self.entry.reset()
        return customer

    def export_payload(self) -> dict:
        return transfer.build_export(
            self.customers.customers, self.fields.fields, self.templates.templates
        )

    def import_data(self, raw: str | bytes, max_bytes: int | None = None) -> dict:
        counts = transfer.import_data(self.store, raw, max_bytes)
        self.load()
        return counts


def get_workspace(request: Request) -> Workspace:
    """Dependency returning the application's workspace."""
    return request.app.state.workspace
