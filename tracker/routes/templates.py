"""Print template routes."""
from fastapi import APIRouter, Depends, HTTPException

from tracker.models import PrintTemplateCreate, PrintTemplateUpdate
from tracker.services.workspace import Workspace, get_workspace

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("")
async def list_templates(workspace: Workspace = Depends(get_workspace)):
    """Print templates; the default one has ``isDefault`` set."""
    return workspace.templates.templates


@router.post("", status_code=201)
async def create_template(data: PrintTemplateCreate, workspace: Workspace = Depends(get_workspace)):
    """Add a print template."""
    if not data.name.strip():
        raise HTTPException(status_code=400, detail="Template name is required")
    return workspace.templates.create(data)


@router.patch("/{template_id}")
async def update_template(
    template_id: str, data: PrintTemplateUpdate, workspace: Workspace = Depends(get_workspace)
):
    """
    Edit a print template.

    The default template keeps its name whatever is sent; the response then
    carries a message explaining why.
    """
    if data.name is not None and not data.name.strip():
        raise HTTPException(status_code=400, detail="Template name is required")

    template = workspace.templates.update(template_id, data)
    response = {"updated": template is not None, "template": template}
    if template is not None and data.name is not None and template.name != data.name:
        response["message"] = "Default template name cannot be changed."
    return response


@router.delete("/{template_id}")
async def delete_template(template_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a print template. The default template cannot be deleted (400)."""
    if workspace.templates.is_protected(template_id):
        raise HTTPException(status_code=400, detail="The default template cannot be deleted.")
    return {"deleted": workspace.templates.delete(template_id)}
