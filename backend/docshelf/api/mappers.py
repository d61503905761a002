"""
Mappers between domain objects and DTOs.
Separates domain layer from API layer.
"""
from typing import Iterable, List, Optional
from urllib.parse import quote

from ..domain.entities import Document
from ..services.navigation import Transition, Viewing
from ..services.viewer_dispatcher import Presentation, ViewerDispatcher
from .dto import DocumentDTO, NavigationStateDTO, PresentationDTO


def file_url(document: Document) -> str:
    return f"/files/{quote(document.name, safe='')}"


class DocumentMapper:
    """Maps between Document entity and DocumentDTO."""

    @staticmethod
    def to_dto(document: Document, dispatcher: ViewerDispatcher) -> DocumentDTO:
        """Convert domain entity to DTO."""
        icon = dispatcher.icon(document)
        url = file_url(document)
        return DocumentDTO(
            name=document.name,
            location=str(document.location),
            extension=document.extension,
            kind=dispatcher.classify(document).value,
            label=dispatcher.label(document),
            icon=icon,
            # Images are their own thumbnail
            thumbnail_url=url if icon is None else None,
            file_url=url
        )

    @staticmethod
    def to_dto_list(documents: Iterable[Document], dispatcher: ViewerDispatcher) -> List[DocumentDTO]:
        """Convert list of entities to DTOs."""
        return [DocumentMapper.to_dto(doc, dispatcher) for doc in documents]


class PresentationMapper:

    @staticmethod
    def to_dto(presentation: Presentation, document: Document) -> PresentationDTO:
        return PresentationDTO(
            mode=presentation.mode.value,
            kind=presentation.kind.value,
            name=presentation.name,
            label=presentation.label,
            mime_type=presentation.mime_type,
            file_url=file_url(document),
            media_variant=presentation.media_variant,
            zoomable=presentation.zoomable,
            notice=presentation.notice,
            guidance=presentation.guidance,
            external_handoff=presentation.external_handoff,
            route=presentation.route
        )


class NavigationMapper:

    @staticmethod
    def to_dto(transition: Transition, dispatcher: ViewerDispatcher) -> NavigationStateDTO:
        state = transition.state
        if not isinstance(state, Viewing):
            return NavigationStateDTO(state="browsing")

        presentation: Optional[PresentationDTO] = None
        if transition.presentation is not None:
            presentation = PresentationMapper.to_dto(transition.presentation, state.document)

        return NavigationStateDTO(
            state="viewing",
            document=DocumentMapper.to_dto(state.document, dispatcher),
            on_route=state.on_route,
            presentation=presentation,
            navigate_to=transition.navigate_to
        )
