from tracker.models.checklist import ChecklistItem, ChecklistTemplate
from tracker.models.customer import Customer, CustomerCreate, CustomerUpdate
from tracker.models.field import FieldDefinition, FieldDefinitionCreate, FieldDefinitionUpdate
from tracker.models.store_entry import StoreEntry
from tracker.models.template import PrintTemplate, PrintTemplateCreate, PrintTemplateUpdate

__all__ = [
    "ChecklistItem",
    "ChecklistTemplate",
    "Customer",
    "CustomerCreate",
    "CustomerUpdate",
    "FieldDefinition",
    "FieldDefinitionCreate",
    "FieldDefinitionUpdate",
    "PrintTemplate",
    "PrintTemplateCreate",
    "PrintTemplateUpdate",
    "StoreEntry",
]
