"""Export, import and storage usage routes."""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from tracker.core.config import settings
from tracker.core.exceptions import ImportTooLargeError, ImportValidationError
from tracker.services import transfer
from tracker.services.workspace import Workspace, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
async def export_data(workspace: Workspace = Depends(get_workspace)):
    """Download customers, fields and templates as one pretty-printed JSON file."""
    body = transfer.export_json(workspace.export_payload())
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


@router.post("/import")
async def import_data(
    file: UploadFile = File(...),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Replace all customers, fields and templates with an exported file.

    Files that are not JSON or lack one of the collections are rejected
    with 400, files over the storage quota with 413. Nothing is changed in
    either case. Accepted data is not checked for duplicates.
    """
    raw = await file.read()
    try:
        counts = workspace.import_data(raw)
    except ImportTooLargeError as e:
        logger.warning(f"Import of {file.filename} rejected: {e}")
        raise HTTPException(status_code=413, detail=str(e))
    except ImportValidationError as e:
        logger.warning(f"Import of {file.filename} rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return {"imported": counts}


@router.get("/usage")
async def usage(workspace: Workspace = Depends(get_workspace)):
    """Bytes used by the stored collections against the storage quota."""
    return transfer.storage_usage(workspace.export_payload())
