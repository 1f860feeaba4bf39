"""Print template model.

Print templates supply the header and footer of a customer's printed
document. Exactly one template is the default: it cannot be renamed or
deleted. The default is marked with an explicit flag rather than by its
position in the collection.
"""

from pydantic import Field

from tracker.models.base import CamelModel, new_id


class PrintTemplate(CamelModel):
    """Header/footer pair used when printing a customer.

    Attributes:
        id: Opaque identifier.
        name: Display name. Fixed for the default template.
        header: Text above the customer details; newlines are preserved.
        footer: Text below the customer details; newlines are preserved.
        is_default: True for the protected default template.
    """
    id: str = Field(default_factory=new_id)
    name: str
    header: str = ""
    footer: str = ""
    is_default: bool = False


class PrintTemplateCreate(CamelModel):
    name: str
    header: str = ""
    footer: str = ""


class PrintTemplateUpdate(CamelModel):
    name: str | None = None
    header: str | None = None
    footer: str | None = None


DEFAULT_TEMPLATE_HEADER = "Company Name\nAddress Line 1\nAddress Line 2\nPhone: **123-456-7890**"
DEFAULT_TEMPLATE_FOOTER = "Thank you for your business!"
