"""Customer routes: CRUD, workflow stage, payment and per-customer checklists."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tracker.core.exceptions import DuplicateRecordError
from tracker.models import CustomerCreate, CustomerUpdate
from tracker.models.customer import CustomerStatus
from tracker.services.customers import summarize
from tracker.services.workspace import Workspace, get_workspace

router = APIRouter(prefix="/customers", tags=["customers"])


class StatusChange(BaseModel):
    status: CustomerStatus


class ChecklistItemText(BaseModel):
    text: str


class ChecklistTitle(BaseModel):
    title: str


def get_customer_or_404(workspace: Workspace, customer_id: str):
    customer = workspace.customers.get(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("")
async def list_customers(
    status: CustomerStatus | None = None,
    active: bool = False,
    search: str | None = None,
    workspace: Workspace = Depends(get_workspace),
):
    """
    List customers for one of the workflow views.

    ``status`` restricts to a single stage, ``active`` lists new and
    in-progress customers together, and ``search`` matches name, phone or
    joinId. The amount summary covers exactly the listed customers.
    """
    customers = workspace.customers.select(status=status, active=active, search=search)
    return {"customers": customers, "summary": summarize(customers)}


@router.get("/summary")
async def customer_summary(
    status: CustomerStatus | None = None,
    active: bool = False,
    search: str | None = None,
    workspace: Workspace = Depends(get_workspace),
):
    """Total and paid amounts of the selected customers."""
    customers = workspace.customers.select(status=status, active=active, search=search)
    return summarize(customers)


@router.get("/{customer_id}")
async def customer_detail(customer_id: str, workspace: Workspace = Depends(get_workspace)):
    """Return a single customer."""
    return get_customer_or_404(workspace, customer_id)


@router.post("", status_code=201)
async def create_customer(data: CustomerCreate, workspace: Workspace = Depends(get_workspace)):
    """
    Create a customer.

    The id, joinId and creation time are assigned here. Returns 409 when a
    customer with the same values for every required field already exists.
    """
    try:
        return workspace.customers.create(data)
    except DuplicateRecordError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/{customer_id}")
async def update_customer(
    customer_id: str, data: CustomerUpdate, workspace: Workspace = Depends(get_workspace)
):
    """
    Merge the given attributes into a customer.

    Updating an unknown customer changes nothing and is reported with
    ``updated: false`` rather than an error.
    """
    customer = workspace.customers.update(customer_id, data)
    return {"updated": customer is not None, "customer": customer}


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a customer; unknown ids are ignored."""
    return {"deleted": workspace.customers.delete(customer_id)}


@router.post("/{customer_id}/status")
async def change_status(
    customer_id: str, data: StatusChange, workspace: Workspace = Depends(get_workspace)
):
    """Move a customer to another workflow stage."""
    get_customer_or_404(workspace, customer_id)
    return workspace.customers.set_status(customer_id, data.status)


@router.post("/{customer_id}/toggle-paid")
async def toggle_paid(customer_id: str, workspace: Workspace = Depends(get_workspace)):
    """Flip the paid flag."""
    get_customer_or_404(workspace, customer_id)
    return workspace.customers.toggle_paid(customer_id)


@router.post("/{customer_id}/checklist")
async def add_checklist_item(
    customer_id: str, data: ChecklistItemText, workspace: Workspace = Depends(get_workspace)
):
    """Append an item to the customer's checklist. Blank text is ignored."""
    get_customer_or_404(workspace, customer_id)
    return workspace.customers.add_checklist_item(customer_id, data.text)


@router.post("/{customer_id}/checklist/{item_id}/toggle")
async def toggle_checklist_item(
    customer_id: str, item_id: str, workspace: Workspace = Depends(get_workspace)
):
    """Check or uncheck a checklist item."""
    customer = get_customer_or_404(workspace, customer_id)
    if not any(item.id == item_id for item in customer.checklist):
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return workspace.customers.toggle_checklist_item(customer_id, item_id)


@router.delete("/{customer_id}/checklist/{item_id}")
async def delete_checklist_item(
    customer_id: str, item_id: str, workspace: Workspace = Depends(get_workspace)
):
    """Remove a checklist item."""
    get_customer_or_404(workspace, customer_id)
    return workspace.customers.delete_checklist_item(customer_id, item_id)


@router.put("/{customer_id}/checklist/title")
async def set_checklist_title(
    customer_id: str, data: ChecklistTitle, workspace: Workspace = Depends(get_workspace)
):
    """Rename the customer's checklist."""
    get_customer_or_404(workspace, customer_id)
    return workspace.customers.set_checklist_title(customer_id, data.title)
