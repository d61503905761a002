"""
Repository interfaces - Define contracts for document access.
Business logic and routers depend on this interface, not concrete implementations.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

from ..domain.entities import Document
from ..domain.value_objects import Location


class IDocumentRepository(ABC):
    """
    Interface for the local document repository.
    The repository owns the catalogue; callers only see snapshots.
    """

    @abstractmethod
    async def initialize(self) -> Tuple[Document, ...]:
        """Ensure the managed directory exists and rebuild the catalogue from it."""
        pass

    @abstractmethod
    async def import_document(self, source_location: Optional[str], suggested_name: Optional[str] = None) -> Document:
        """Copy an external file into the managed directory under a unique name."""
        pass

    @abstractmethod
    def list(self) -> Tuple[Document, ...]:
        """Current catalogue snapshot (no storage access)."""
        pass

    @abstractmethod
    def get(self, name: str, action: str = "open") -> Document:
        """Get a catalogued document by name; action names the caller's operation in errors."""
        pass

    @abstractmethod
    def find_by_location(self, location: str) -> Document:
        """Get a catalogued document by its storage location."""
        pass

    @abstractmethod
    async def delete(self, document: Document) -> None:
        """Delete a document and its file."""
        pass

    @abstractmethod
    async def export(self, document: Document, destination_directory: Optional[Path] = None) -> Location:
        """Copy a document out of the managed directory, keeping the original."""
        pass

    @abstractmethod
    async def share(self, document: Document, mime_type: Optional[str] = None) -> None:
        """Hand a document to the share collaborator."""
        pass
