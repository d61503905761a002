"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

# Opaque storage handle of a catalogued document (absolute path string)
Location = NewType("Location", str)


class FileKind(str, Enum):
    """Classification bucket derived from a filename extension."""
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    PDF = "pdf"
    TEXT = "text"
    OFFICE_DOCUMENT = "office_document"
    ARCHIVE = "archive"
    UNKNOWN = "unknown"


class PresentationMode(str, Enum):
    """How a selected document is rendered or routed."""
    INLINE_FULL_SCREEN_IMAGE = "inline_full_screen_image"
    INLINE_MEDIA = "inline_media"
    INLINE_TEXT = "inline_text"
    ROUTE_TO_PDF_VIEWER = "route_to_pdf_viewer"
    UNSUPPORTED = "unsupported"
