"""Saved checklist routes and the entry-form checklist."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tracker.core.exceptions import DuplicateRecordError
from tracker.models import CustomerCreate
from tracker.services.workspace import Workspace, get_workspace

router = APIRouter(tags=["checklists"])


class ItemText(BaseModel):
    text: str


class Title(BaseModel):
    title: str


def entry_state(workspace: Workspace) -> dict:
    checklist = workspace.entry.checklist
    return {
        "title": workspace.entry.title,
        "checklist": checklist,
        "completed_count": sum(1 for item in checklist if item.completed),
        "total_count": len(checklist),
    }


@router.get("/checklists")
async def list_saved_checklists(workspace: Workspace = Depends(get_workspace)):
    """Saved checklist templates, addressed by their position."""
    return [
        {"index": index, **template.to_store()}
        for index, template in enumerate(workspace.checklists.checklists)
    ]


@router.post("/checklists", status_code=201)
async def save_current_checklist(workspace: Workspace = Depends(get_workspace)):
    """Save the entry checklist as a reusable template (400 when it is empty)."""
    template = workspace.entry.save_as_template()
    if template is None:
        raise HTTPException(status_code=400, detail="Add checklist items before saving a template")
    return template


@router.delete("/checklists/{index}")
async def delete_saved_checklist(index: int, workspace: Workspace = Depends(get_workspace)):
    """Remove a saved checklist template; out-of-range positions are ignored."""
    return {"deleted": workspace.checklists.remove(index)}


@router.post("/checklists/{index}/use")
async def use_saved_checklist(index: int, workspace: Workspace = Depends(get_workspace)):
    """Replace the entry checklist with fresh items from a saved template."""
    if not workspace.entry.use_template(index):
        raise HTTPException(status_code=404, detail="Checklist template not found")
    return entry_state(workspace)


@router.get("/entry")
async def get_entry(workspace: Workspace = Depends(get_workspace)):
    """The checklist that will be attached to the next customer."""
    return entry_state(workspace)


@router.post("/entry/items")
async def add_entry_item(data: ItemText, workspace: Workspace = Depends(get_workspace)):
    """Add an item to the entry checklist. Blank text is ignored."""
    workspace.entry.add_item(data.text)
    return entry_state(workspace)


@router.post("/entry/items/{item_id}/toggle")
async def toggle_entry_item(item_id: str, workspace: Workspace = Depends(get_workspace)):
    """Check or uncheck an entry checklist item."""
    workspace.entry.toggle_item(item_id)
    return entry_state(workspace)


@router.delete("/entry/items/{item_id}")
async def delete_entry_item(item_id: str, workspace: Workspace = Depends(get_workspace)):
    """Remove an entry checklist item."""
    workspace.entry.remove_item(item_id)
    return entry_state(workspace)


@router.put("/entry/title")
async def set_entry_title(data: Title, workspace: Workspace = Depends(get_workspace)):
    """Set the entry checklist title."""
    workspace.entry.set_title(data.title)
    return entry_state(workspace)


@router.post("/entry/submit", status_code=201)
async def submit_entry(data: CustomerCreate, workspace: Workspace = Depends(get_workspace)):
    """
    Create a customer from the entry form.

    The entry checklist and its title are attached to the new customer and
    the form then starts over from the first saved checklist. On a
    duplicate (409) the entry checklist is kept.
    """
    try:
        return workspace.submit_entry(data)
    except DuplicateRecordError as e:
        raise HTTPException(status_code=409, detail=str(e))
