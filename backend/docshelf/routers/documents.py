"""
Documents Router - Handles catalogue operations.

This router is responsible for:
- Listing and refreshing the catalogue
- Importing files (upload or local path)
- Deleting, exporting and sharing documents
- Reporting how a document would be presented

Architecture:
- Router handles HTTP request/response only
- Catalogue mutations are delegated to the repository
- Business exceptions become user notices in the gateway

Example Usage:
    GET /documents - List the catalogue
    POST /documents/upload - Import an uploaded file
    DELETE /documents/{name} - Delete a document
    POST /documents/{name}/export - Save a copy outside the app
"""
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Response, UploadFile, status

from ..api.dto import (
    CatalogueDTO,
    DocumentDTO,
    ExportRequestDTO,
    ExportResponseDTO,
    ImportRequestDTO,
    NavigationStateDTO,
    PresentationDTO,
)
from ..api.exceptions import CopyFailed, NoSourceSelected, NotFound
from ..api.mappers import DocumentMapper, NavigationMapper, PresentationMapper
from ..core.logging_config import get_logger
from ..domain.entities import Document
from ..services.picker import FilePickerInterface, LocalPathPicker, UploadFilePicker
from .dependencies import (
    get_document_repository,
    get_navigation,
    get_operation_guard,
    get_viewer_dispatcher,
)

logger = get_logger(__name__)

router = APIRouter()


async def import_from_picker(picker: FilePickerInterface) -> Optional[Document]:
    """
    Run a pick and import the result.

    Returns:
        The imported document, or None when the pick was cancelled
    """
    repository = get_document_repository()
    try:
        try:
            picked = await picker.pick()
        except OSError as e:
            raise CopyFailed("import", str(e)) from e

        try:
            return await repository.import_document(
                picked.location if picked else None,
                picked.name if picked else None
            )
        except NoSourceSelected:
            # Deliberate cancellation, not an error
            logger.debug("Import cancelled, nothing selected")
            return None
    finally:
        await picker.release()


@router.get("/documents", response_model=CatalogueDTO)
async def get_documents():
    """
    Get the catalogue.

    Returns the in-memory catalogue in insertion order; storage is not re-read
    (use POST /documents/refresh for that).
    """
    repository = get_document_repository()
    dispatcher = get_viewer_dispatcher()
    documents = repository.list()
    return CatalogueDTO(
        documents=DocumentMapper.to_dto_list(documents, dispatcher),
        count=len(documents)
    )


@router.post("/documents/refresh", response_model=CatalogueDTO)
async def refresh_documents():
    """
    Rebuild the catalogue from the managed directory.

    If the viewed document disappeared from disk the viewer closes.
    """
    repository = get_document_repository()
    dispatcher = get_viewer_dispatcher()
    navigation = get_navigation()
    async with get_operation_guard().hold("refresh"):
        documents = await repository.initialize()

    selected = navigation.selected
    if selected is not None and selected not in documents:
        logger.info(f"Viewed document '{selected.name}' is gone after refresh")
        navigation.document_deleted(selected)

    return CatalogueDTO(
        documents=DocumentMapper.to_dto_list(documents, dispatcher),
        count=len(documents)
    )


@router.post("/documents/upload", response_model=DocumentDTO, status_code=status.HTTP_201_CREATED)
async def upload_document(file: Optional[UploadFile] = File(None)):
    """
    Import an uploaded file.

    Status Codes:
        201: Imported; the body carries the (possibly renamed) document
        204: No file was chosen
        409: Another import is still running
        500: The file could not be copied
    """
    async with get_operation_guard().hold("import"):
        document = await import_from_picker(UploadFilePicker(file))
    if document is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return DocumentMapper.to_dto(document, get_viewer_dispatcher())


@router.post("/documents/import", response_model=DocumentDTO, status_code=status.HTTP_201_CREATED)
async def import_local_document(request: ImportRequestDTO):
    """Import a file that already exists on this machine."""
    async with get_operation_guard().hold("import"):
        document = await import_from_picker(LocalPathPicker(request.source, request.name))
    if document is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return DocumentMapper.to_dto(document, get_viewer_dispatcher())


@router.delete("/documents/{name}", response_model=NavigationStateDTO)
async def delete_document(name: str):
    """
    Delete a document and its file.

    If the deleted document is the one being viewed the viewer closes; the
    body carries the resulting navigation state.
    """
    repository = get_document_repository()
    navigation = get_navigation()

    async with get_operation_guard().hold("delete"):
        document = repository.get(name, action="delete")
        try:
            await repository.delete(document)
        except NotFound:
            # The entry was pruned; it cannot stay selected either
            navigation.document_deleted(document)
            raise

    transition = navigation.document_deleted(document)
    return NavigationMapper.to_dto(transition, get_viewer_dispatcher())


@router.post("/documents/{name}/export", response_model=ExportResponseDTO)
async def export_document(name: str, request: Optional[ExportRequestDTO] = None):
    """
    Save a copy of a document outside the app (the download action).
    The original stays in the catalogue untouched.
    """
    repository = get_document_repository()
    destination = Path(request.destination) if request and request.destination else None

    async with get_operation_guard().hold("export"):
        document = repository.get(name, action="export")
        location = await repository.export(document, destination)

    return ExportResponseDTO(
        name=Path(location).name,
        location=str(location),
        message=f"File saved to: {location}"
    )


@router.post("/documents/{name}/share")
async def share_document(name: str):
    """Hand a document to another application."""
    repository = get_document_repository()
    async with get_operation_guard().hold("share"):
        document = repository.get(name, action="share")
        await repository.share(document)
    return {"message": f"'{document.name}' shared"}


@router.get("/documents/{name}/presentation", response_model=PresentationDTO)
async def get_presentation(name: str):
    """How the viewer would present a document, without selecting it."""
    document = get_document_repository().get(name)
    presentation = get_viewer_dispatcher().select(document)
    return PresentationMapper.to_dto(presentation, document)
