"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from pydantic import BaseModel
from typing import List, Optional


class DocumentDTO(BaseModel):
    """Catalogue row: the document plus what the list view shows for it."""
    name: str
    location: str
    extension: Optional[str] = None
    kind: str
    label: str
    icon: Optional[str] = None
    thumbnail_url: Optional[str] = None
    file_url: str


class CatalogueDTO(BaseModel):
    documents: List[DocumentDTO]
    count: int


class PresentationDTO(BaseModel):
    """Viewer dispatcher decision for one document."""
    mode: str
    kind: str
    name: str
    label: str
    mime_type: str
    file_url: str
    media_variant: Optional[str] = None
    zoomable: bool = False
    notice: Optional[str] = None
    guidance: Optional[str] = None
    external_handoff: bool = False
    route: Optional[str] = None


class NavigationStateDTO(BaseModel):
    state: str
    document: Optional[DocumentDTO] = None
    on_route: bool = False
    presentation: Optional[PresentationDTO] = None
    navigate_to: Optional[str] = None


class ImportRequestDTO(BaseModel):
    """Import a file that already exists on this machine."""
    source: Optional[str] = None
    name: Optional[str] = None


class ExportRequestDTO(BaseModel):
    destination: Optional[str] = None


class ExportResponseDTO(BaseModel):
    name: str
    location: str
    message: str


class NoticeDTO(BaseModel):
    """User-facing, dismissible error notice."""
    title: str
    message: str
    action: str


class ErrorResponseDTO(BaseModel):
    """Body of every business error response."""
    notice: NoticeDTO
    status_code: int
    path: str
    request_id: Optional[str] = None
