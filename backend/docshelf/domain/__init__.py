"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import Catalogue, Document
from .file_types import classify_extension, label_for, mime_type_for, split_name
from .value_objects import FileKind, Location, PresentationMode

__all__ = [
    "Catalogue",
    "Document",
    "FileKind",
    "Location",
    "PresentationMode",
    "classify_extension",
    "label_for",
    "mime_type_for",
    "split_name"
]
