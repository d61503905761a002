"""
Viewer Dispatcher - decides how a document is presented.

Pure mapping from a document's extension to a file kind and from the kind
to a presentation mode. No I/O and no state, so it can be used anywhere a
document is shown (list rows, the inline viewer, the dedicated PDF route).
"""
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import quote

from ..domain.entities import Document
from ..domain.file_types import classify_extension, icon_for, label_for, mime_type_for
from ..domain.value_objects import FileKind, PresentationMode

PDF_VIEWER_ROUTE = "/viewer/pdf"

TEXT_NOTICE = "Text file detected. To view its contents, open it in a text editor."
PDF_NOTICE = "Opening PDF..."
OFFICE_NOTICE = "Local Office files cannot be opened directly."
OFFICE_GUIDANCE = "Upload the file to the cloud and open it through a public link, or convert it to PDF."
ARCHIVE_GUIDANCE = "Use an extraction app to unpack its contents."
UNKNOWN_NOTICE = "This type of file cannot be previewed."


@dataclass(frozen=True)
class Presentation:
    """Instruction for rendering (or routing) one document."""
    mode: PresentationMode
    kind: FileKind
    name: str
    label: str
    mime_type: str
    media_variant: Optional[str] = None
    zoomable: bool = False
    notice: Optional[str] = None
    guidance: Optional[str] = None
    external_handoff: bool = False
    route: Optional[str] = None


class ViewerDispatcher:
    """
    Classifies documents and selects their presentation mode.
    """

    MODES: Dict[FileKind, PresentationMode] = {
        FileKind.IMAGE: PresentationMode.INLINE_FULL_SCREEN_IMAGE,
        FileKind.VIDEO: PresentationMode.INLINE_MEDIA,
        FileKind.AUDIO: PresentationMode.INLINE_MEDIA,
        FileKind.TEXT: PresentationMode.INLINE_TEXT,
        FileKind.PDF: PresentationMode.ROUTE_TO_PDF_VIEWER,
        FileKind.OFFICE_DOCUMENT: PresentationMode.UNSUPPORTED,
        FileKind.ARCHIVE: PresentationMode.UNSUPPORTED,
        FileKind.UNKNOWN: PresentationMode.UNSUPPORTED,
    }

    def classify(self, document: Document) -> FileKind:
        return classify_extension(document.extension)

    def label(self, document: Document) -> str:
        return label_for(document.extension)

    def icon(self, document: Document) -> Optional[str]:
        """Thumbnail glyph, None when the image itself is the thumbnail."""
        return icon_for(document.extension)

    def mime_type_for(self, extension: Optional[str]) -> str:
        return mime_type_for(extension)

    def pdf_route(self, document: Document) -> str:
        """Route to the dedicated PDF viewer; the location is the single encoded parameter."""
        return f"{PDF_VIEWER_ROUTE}?uri={quote(document.location, safe='')}"

    def select(self, document: Document) -> Presentation:
        """
        Map a document to its presentation.

        PDFs always route to the dedicated viewer and are never rendered inline.
        """
        kind = self.classify(document)
        mode = self.MODES[kind]
        common = dict(
            mode=mode,
            kind=kind,
            name=document.name,
            label=self.label(document),
            mime_type=self.mime_type_for(document.extension),
        )

        if mode is PresentationMode.INLINE_FULL_SCREEN_IMAGE:
            return Presentation(**common, zoomable=True)
        if mode is PresentationMode.INLINE_MEDIA:
            variant = "audio" if kind is FileKind.AUDIO else "video"
            return Presentation(**common, media_variant=variant)
        if mode is PresentationMode.INLINE_TEXT:
            return Presentation(**common, notice=TEXT_NOTICE)
        if mode is PresentationMode.ROUTE_TO_PDF_VIEWER:
            return Presentation(**common, notice=PDF_NOTICE, route=self.pdf_route(document))

        if kind is FileKind.OFFICE_DOCUMENT:
            return Presentation(
                **common,
                notice=OFFICE_NOTICE,
                guidance=OFFICE_GUIDANCE,
                external_handoff=True
            )
        if kind is FileKind.ARCHIVE:
            return Presentation(
                **common,
                notice=f"Compressed file: {document.name}",
                guidance=ARCHIVE_GUIDANCE
            )
        return Presentation(**common, notice=UNKNOWN_NOTICE, guidance=f"Extension: {common['label']}")
