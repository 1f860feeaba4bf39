"""Print preference routes."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tracker.services.workspace import Workspace, get_workspace

router = APIRouter(prefix="/preferences", tags=["preferences"])


class PreferencesUpdate(BaseModel):
    print_fields: list[str] | None = None
    show_join_id: bool | None = None


def preferences_state(workspace: Workspace) -> dict:
    preferences = workspace.preferences
    return {
        "print_fields": preferences.print_fields,
        "show_join_id": preferences.show_join_id,
        "available_fields": preferences.available_fields(),
    }


@router.get("")
async def get_preferences(workspace: Workspace = Depends(get_workspace)):
    """Default print field selection and joinId visibility."""
    return preferences_state(workspace)


@router.put("")
async def save_preferences(data: PreferencesUpdate, workspace: Workspace = Depends(get_workspace)):
    """Save print preferences. Unknown field names are rejected with 400."""
    if data.print_fields is not None:
        unknown = set(data.print_fields) - set(workspace.preferences.available_fields())
        if unknown:
            raise HTTPException(
                status_code=400, detail=f"Unknown print fields: {', '.join(sorted(unknown))}"
            )
    workspace.preferences.save(data.print_fields, data.show_join_id)
    return preferences_state(workspace)
