"""Customer lifecycle: creation, partial updates, deletion and listing.

Create is the only operation that validates: it refuses a customer whose
required field values all match an existing customer. Update and delete
against an unknown id do nothing and report that through their return
value, never by raising.
"""
import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, computed_field

from tracker.core.config import settings
from tracker.core.exceptions import DuplicateRecordError
from tracker.models import ChecklistItem, Customer, CustomerCreate, CustomerUpdate
from tracker.models.customer import CustomerStatus
from tracker.services.fields import FieldRegistry
from tracker.store import KeyValueStore, PersistedCollection

logger = logging.getLogger(__name__)

CUSTOMERS_KEY = "customers"


def next_join_id(customers: Iterable[Customer], prefix: str = "CUS") -> str:
    """
    Next sequential joinId.

    Takes the largest numeric suffix among current customers and adds one,
    so the number is derived from what exists now, not from a counter.
    Suffixes are padded to two digits and widen past 99.
    """
    numbers = (c.join_number for c in customers)
    highest = max((n for n in numbers if n is not None), default=0)
    return f"{prefix}-{highest + 1:02d}"


def find_duplicate(
    customers: Iterable[Customer], values: dict, required: list[str]
) -> Customer | None:
    """Return the first customer whose every required value equals ``values``."""
    if not required:
        return None
    for customer in customers:
        if all(customer.values.get(name) == values.get(name) for name in required):
            return customer
    return None


def parse_amount(amount: str | None) -> float:
    """Amount text as a number; blank or unparseable text counts as 0."""
    if not amount:
        return 0.0
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_amount(amount: float) -> str:
    """Indian currency notation: crores (C), lakhs (L) and thousands (K)."""
    if amount >= 10_000_000:
        return f"₹{amount / 10_000_000:.2f}C"
    if amount >= 100_000:
        return f"₹{amount / 100_000:.2f}L"
    if amount >= 1_000:
        return f"₹{amount / 1_000:.2f}K"
    return f"₹{amount:.2f}"


class AmountSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int
    total: float
    paid: float

    @computed_field
    @property
    def unpaid(self) -> float:
        return self.total - self.paid

    @computed_field
    @property
    def total_display(self) -> str:
        return format_amount(self.total)

    @computed_field
    @property
    def paid_display(self) -> str:
        return format_amount(self.paid)


def summarize(customers: Iterable[Customer]) -> AmountSummary:
    """Total and paid-only sums of the customers' amounts."""
    count = 0
    total = paid = 0.0
    for customer in customers:
        amount = parse_amount(customer.amount)
        count += 1
        total += amount
        if customer.paid:
            paid += amount
    return AmountSummary(count=count, total=total, paid=paid)


def filter_customers(
    customers: Iterable[Customer],
    status: CustomerStatus | None = None,
    active: bool = False,
    search: str | None = None,
) -> list[Customer]:
    """
    Select customers for a list view.

    ``active`` lists new and in-progress customers together. ``search``
    matches case-insensitively against the name, phone and joinId.
    """
    result = []
    needle = search.strip().lower() if search else ""
    for customer in customers:
        if active and customer.status not in ("new", "in-progress"):
            continue
        if status and not active and customer.status != status:
            continue
        if needle:
            haystacks = [
                str(customer.values.get("name", "")),
                str(customer.values.get("phone", "")),
                customer.join_id,
            ]
            if not any(needle in h.lower() for h in haystacks):
                continue
        result.append(customer)
    return result


class CustomerManager:
    """Owns the ``customers`` collection."""

    def __init__(self, store: KeyValueStore, fields: FieldRegistry, prefix: str | None = None):
        self.fields = fields
        self.prefix = prefix or settings.join_id_prefix
        self._customers = PersistedCollection(store, CUSTOMERS_KEY, Customer)

    @property
    def customers(self) -> tuple[Customer, ...]:
        return self._customers.items

    def get(self, customer_id: str) -> Customer | None:
        return next((c for c in self._customers if c.id == customer_id), None)

    def create(self, data: CustomerCreate) -> Customer:
        """
        Add a customer.

        Raises:
            DuplicateRecordError: Another customer has the same value for
                every required field. Nothing is written in that case.
        """
        required = self.fields.required_names()
        duplicate = find_duplicate(self._customers, data.values, required)
        if duplicate is not None:
            logger.warning(f"Rejected duplicate of customer {duplicate.join_id}")
            raise DuplicateRecordError(duplicate.join_id, required)

        customer = Customer(
            **data.model_dump(),
            id=str(uuid4()),
            join_id=next_join_id(self._customers, self.prefix),
            created_at=datetime.now(UTC),
        )
        self._customers.append(customer)
        logger.info(f"Created customer {customer.join_id}")
        return customer

    def update(self, customer_id: str, data: CustomerUpdate) -> Customer | None:
        """
        Merge the supplied keys into a customer.

        Dynamic ``values`` are merged key by key; every other attribute is
        replaced. An unknown id is a silent no-op and returns None.
        """
        current = self.get(customer_id)
        if current is None:
            logger.debug(f"Customer {customer_id} not found, update ignored")
            return None

        changes = data.changes()
        if "values" in changes:
            changes["values"] = {**current.values, **changes["values"]}
        updated = Customer.model_validate({**current.model_dump(), **changes})

        self._customers.replace(updated if c.id == customer_id else c for c in self._customers)
        if changes:
            logger.info(f"Updated customer {updated.join_id}: {sorted(changes)}")
        return updated

    def delete(self, customer_id: str) -> bool:
        customer = self.get(customer_id)
        if customer is None:
            logger.debug(f"Customer {customer_id} not found, delete ignored")
            return False
        self._customers.replace(c for c in self._customers if c.id != customer_id)
        logger.info(f"Deleted customer {customer.join_id}")
        return True

    def select(
        self,
        status: CustomerStatus | None = None,
        active: bool = False,
        search: str | None = None,
    ) -> list[Customer]:
        return filter_customers(self._customers, status=status, active=active, search=search)

    # Workflow helpers

    def set_status(self, customer_id: str, status: CustomerStatus) -> Customer | None:
        return self.update(customer_id, CustomerUpdate(status=status))

    def toggle_paid(self, customer_id: str) -> Customer | None:
        customer = self.get(customer_id)
        if customer is None:
            return None
        return self.update(customer_id, CustomerUpdate(paid=not customer.paid))

    # Checklist editing; each call replaces the whole checklist

    def add_checklist_item(self, customer_id: str, text: str) -> Customer | None:
        customer = self.get(customer_id)
        if customer is None or not text.strip():
            return customer
        checklist = [*customer.checklist, ChecklistItem(text=text.strip())]
        return self.update(customer_id, CustomerUpdate(checklist=checklist))

    def toggle_checklist_item(self, customer_id: str, item_id: str) -> Customer | None:
        customer = self.get(customer_id)
        if customer is None:
            return None
        checklist = [
            item.model_copy(update={"completed": not item.completed}) if item.id == item_id else item
            for item in customer.checklist
        ]
        return self.update(customer_id, CustomerUpdate(checklist=checklist))

    def delete_checklist_item(self, customer_id: str, item_id: str) -> Customer | None:
        customer = self.get(customer_id)
        if customer is None:
            return None
        checklist = [item for item in customer.checklist if item.id != item_id]
        return self.update(customer_id, CustomerUpdate(checklist=checklist))

    def set_checklist_title(self, customer_id: str, title: str) -> Customer | None:
        return self.update(customer_id, CustomerUpdate(checklist_title=title))
