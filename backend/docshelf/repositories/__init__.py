"""
Repository layer - Owns the document catalogue.
Follows Repository Pattern for clean separation of storage access from callers.
"""
from .document_repository import DocumentRepository
from .interfaces import IDocumentRepository

__all__ = [
    "DocumentRepository",
    "IDocumentRepository"
]
