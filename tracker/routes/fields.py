"""Field definition routes."""
from fastapi import APIRouter, Depends, HTTPException

from tracker.core.exceptions import FieldDefinitionError
from tracker.models import FieldDefinitionCreate, FieldDefinitionUpdate
from tracker.services.workspace import Workspace, get_workspace

router = APIRouter(prefix="/fields", tags=["fields"])


@router.get("")
async def list_fields(workspace: Workspace = Depends(get_workspace)):
    """Field definitions in display order."""
    return workspace.fields.fields


@router.post("", status_code=201)
async def create_field(data: FieldDefinitionCreate, workspace: Workspace = Depends(get_workspace)):
    """Add a field definition. Returns 400 for reserved or duplicate names."""
    try:
        return workspace.fields.create(data)
    except FieldDefinitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{field_id}")
async def update_field(
    field_id: str, data: FieldDefinitionUpdate, workspace: Workspace = Depends(get_workspace)
):
    """
    Edit a field definition.

    Renaming does not move values already stored on customers under the old
    name. Unknown ids are reported with ``updated: false``.
    """
    try:
        field = workspace.fields.update(field_id, data)
    except FieldDefinitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"updated": field is not None, "field": field}


@router.delete("/{field_id}")
async def delete_field(field_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a field definition; customer values are kept."""
    return {"deleted": workspace.fields.delete(field_id)}
