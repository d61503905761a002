"""
Navigation state machine for the catalogue screen.

Browsing: no selection, catalogue list visible.
Viewing(document): one document selected.

Selecting a PDF also emits a one-time navigation to the dedicated viewer
route. That route is a leaf: leaving it goes back to Browsing, not to
Viewing(document).
"""
from dataclasses import dataclass
from typing import Optional, Union

from .viewer_dispatcher import Presentation, ViewerDispatcher
from ..core.logging_config import get_logger
from ..domain.entities import Document
from ..domain.value_objects import PresentationMode

logger = get_logger(__name__)


@dataclass(frozen=True)
class Browsing:
    pass


@dataclass(frozen=True)
class Viewing:
    document: Document
    on_route: bool = False


NavigationState = Union[Browsing, Viewing]


@dataclass(frozen=True)
class Transition:
    """Result of a navigation event."""
    state: NavigationState
    presentation: Optional[Presentation] = None
    navigate_to: Optional[str] = None


class NavigationStateMachine:
    """
    Tracks the current selection. Holds a reference to the selected document,
    never ownership; the repository still owns it.
    """

    def __init__(self, dispatcher: ViewerDispatcher):
        self._dispatcher = dispatcher
        self._state: NavigationState = Browsing()

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def selected(self) -> Optional[Document]:
        if isinstance(self._state, Viewing):
            return self._state.document
        return None

    def select(self, document: Document) -> Transition:
        """Enter Viewing(document); selecting while viewing replaces the document."""
        presentation = self._dispatcher.select(document)
        on_route = presentation.mode is PresentationMode.ROUTE_TO_PDF_VIEWER
        self._state = Viewing(document=document, on_route=on_route)
        logger.debug(f"Viewing '{document.name}' ({presentation.mode.value})")
        return Transition(
            state=self._state,
            presentation=presentation,
            navigate_to=presentation.route if on_route else None
        )

    def close(self) -> Transition:
        self._state = Browsing()
        return Transition(state=self._state)

    def document_deleted(self, document: Document) -> Transition:
        """Deleting the viewed document returns to Browsing; any other delete is ignored."""
        if isinstance(self._state, Viewing) and self._state.document == document:
            logger.debug(f"Viewed document '{document.name}' deleted, back to browsing")
            self._state = Browsing()
        return Transition(state=self._state)

    def leave_route(self) -> Transition:
        """Leave the dedicated PDF route."""
        if isinstance(self._state, Viewing) and self._state.on_route:
            self._state = Browsing()
        return Transition(state=self._state)
