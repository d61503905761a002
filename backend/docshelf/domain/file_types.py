"""
File type table.

Single source of truth for extension -> kind -> label, plus the MIME types
used when a file is handed to another application. Classification is by
filename extension only; file contents are never inspected.
"""
from typing import Dict, Optional, Tuple

from .value_objects import FileKind

# Extension groups, in the order they are checked by the list view
_KIND_EXTENSIONS: Dict[FileKind, Tuple[str, ...]] = {
    FileKind.IMAGE: ("jpg", "jpeg", "png", "webp", "gif", "bmp"),
    FileKind.PDF: ("pdf",),
    FileKind.OFFICE_DOCUMENT: ("doc", "docx", "xls", "xlsx"),
    FileKind.VIDEO: ("mp4", "mov", "avi", "mkv", "webm"),
    FileKind.AUDIO: ("mp3", "wav", "aac", "flac", "ogg"),
    FileKind.TEXT: ("txt", "md", "rtf"),
    FileKind.ARCHIVE: ("zip", "rar", "7z"),
}

EXTENSION_KINDS: Dict[str, FileKind] = {
    extension: kind
    for kind, extensions in _KIND_EXTENSIONS.items()
    for extension in extensions
}

KIND_LABELS: Dict[FileKind, str] = {
    FileKind.IMAGE: "Image",
    FileKind.PDF: "PDF",
    FileKind.VIDEO: "Video",
    FileKind.AUDIO: "Audio",
    FileKind.TEXT: "Text",
    FileKind.ARCHIVE: "Archive",
}

# Office documents are labelled by application
OFFICE_LABELS: Dict[str, str] = {
    "doc": "Word",
    "docx": "Word",
    "xls": "Excel",
    "xlsx": "Excel",
}

# Thumbnail glyphs for kinds that are not previewed from the file itself
KIND_ICONS: Dict[FileKind, str] = {
    FileKind.PDF: "📄",
    FileKind.VIDEO: "🎬",
    FileKind.AUDIO: "🎵",
    FileKind.TEXT: "📄",
    FileKind.ARCHIVE: "📦",
    FileKind.UNKNOWN: "📁",
}

OFFICE_ICONS: Dict[str, str] = {
    "doc": "📝",
    "docx": "📝",
    "xls": "📊",
    "xlsx": "📊",
}

MIME_TYPES: Dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    "webm": "video/webm",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "ogg": "audio/ogg",
    "txt": "text/plain",
    "md": "text/markdown",
    "rtf": "application/rtf",
    "zip": "application/zip",
    "rar": "application/vnd.rar",
    "7z": "application/x-7z-compressed",
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# Label for unknown files that have no extension at all
NO_EXTENSION_LABEL = "FILE"


def split_name(name: str) -> Tuple[str, Optional[str]]:
    """
    Split a filename into base and extension.

    The extension is the text after the last dot and is None when the name
    has no dot at all ("README" -> ("README", None)).
    """
    base, dot, extension = name.rpartition(".")
    if not dot:
        return name, None
    return base, extension


def classify_extension(extension: Optional[str]) -> FileKind:
    """Classify a bare extension (case-insensitive)."""
    if not extension:
        return FileKind.UNKNOWN
    return EXTENSION_KINDS.get(extension.lower(), FileKind.UNKNOWN)


def label_for(extension: Optional[str]) -> str:
    """Human-readable type label; unknown types report the raw extension."""
    normalized = extension.lower() if extension else None
    kind = classify_extension(normalized)
    if kind is FileKind.OFFICE_DOCUMENT:
        return OFFICE_LABELS[normalized]
    if kind is FileKind.UNKNOWN:
        return extension.upper() if extension else NO_EXTENSION_LABEL
    return KIND_LABELS[kind]


def icon_for(extension: Optional[str]) -> Optional[str]:
    """Thumbnail glyph, or None when the file itself serves as thumbnail."""
    normalized = extension.lower() if extension else None
    kind = classify_extension(normalized)
    if kind is FileKind.IMAGE:
        return None
    if kind is FileKind.OFFICE_DOCUMENT:
        return OFFICE_ICONS[normalized]
    return KIND_ICONS[kind]


def mime_type_for(extension: Optional[str]) -> str:
    """IANA media type for an extension, falling back to generic binary."""
    if not extension:
        return DEFAULT_MIME_TYPE
    return MIME_TYPES.get(extension.lower(), DEFAULT_MIME_TYPE)
