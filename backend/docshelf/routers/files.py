"""
Files Router - Serves raw document bytes to renderers.
"""
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..api.exceptions import NotFound
from .dependencies import get_document_repository, get_viewer_dispatcher

router = APIRouter()


@router.get("/files/{name}")
async def get_file(name: str):
    """Get a catalogued file with its media type (images, media, PDFs)."""
    document = get_document_repository().get(name, action="view")

    local_path = Path(document.location)
    if not local_path.exists():
        raise NotFound("view", f"File for '{document.name}' is missing")

    return FileResponse(
        local_path,
        media_type=get_viewer_dispatcher().mime_type_for(document.extension)
    )
