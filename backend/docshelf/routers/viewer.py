"""
Viewer Router - Selection and the dedicated PDF viewer route.
"""
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse

from ..api.dto import NavigationStateDTO
from ..api.exceptions import NotFound, NotViewable
from ..api.mappers import NavigationMapper
from ..domain.value_objects import FileKind
from ..services.navigation import Transition
from ..services.viewer_dispatcher import PDF_VIEWER_ROUTE
from .dependencies import get_document_repository, get_navigation, get_viewer_dispatcher

router = APIRouter()


@router.get("/viewer", response_model=NavigationStateDTO)
async def get_viewer_state():
    """Current navigation state (browsing, or viewing one document)."""
    navigation = get_navigation()
    return NavigationMapper.to_dto(Transition(state=navigation.state), get_viewer_dispatcher())


@router.post("/viewer/select/{name}", response_model=NavigationStateDTO)
async def select_document(name: str):
    """
    Select a document for viewing.

    For PDFs the response carries navigate_to, the one-time route to the
    dedicated viewer.
    """
    document = get_document_repository().get(name)
    transition = get_navigation().select(document)
    return NavigationMapper.to_dto(transition, get_viewer_dispatcher())


@router.post("/viewer/close", response_model=NavigationStateDTO)
async def close_viewer():
    transition = get_navigation().close()
    return NavigationMapper.to_dto(transition, get_viewer_dispatcher())


@router.get(PDF_VIEWER_ROUTE)
async def pdf_viewer(uri: Optional[str] = None):
    """
    Dedicated full-screen PDF viewer.

    uri is the document location, percent-encoded as a single query
    parameter; it arrives here already decoded.
    """
    if not uri:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"title": "Nothing to show", "message": "No document selected.", "action": "view"}
        )

    repository = get_document_repository()
    document = repository.find_by_location(uri)
    if document.kind is not FileKind.PDF:
        raise NotViewable("view", f"'{document.name}' is not a PDF")

    path = Path(document.location)
    if not path.exists():
        raise NotFound("view", f"File for '{document.name}' is missing")

    return FileResponse(
        path,
        media_type=get_viewer_dispatcher().mime_type_for(document.extension),
        headers={"Content-Disposition": "inline"}
    )


@router.post(f"{PDF_VIEWER_ROUTE}/leave", response_model=NavigationStateDTO)
async def leave_pdf_viewer():
    """Leave the dedicated viewer; always lands on the catalogue list."""
    transition = get_navigation().leave_route()
    return NavigationMapper.to_dto(transition, get_viewer_dispatcher())
