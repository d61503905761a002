"""
Domain entities - Core business objects.
These represent the business concepts, not storage details.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .file_types import classify_extension, split_name
from .value_objects import FileKind, Location


@dataclass(frozen=True)
class Document:
    """
    Document entity - a file held in the managed directory.
    Identity is the name; the location is owned by this entity alone.
    """
    name: str
    location: Location

    @property
    def extension(self) -> Optional[str]:
        """Lower-case extension, recomputed from the name."""
        _, extension = split_name(self.name)
        return extension.lower() if extension is not None else None

    @property
    def kind(self) -> FileKind:
        """File kind, recomputed from the extension."""
        return classify_extension(self.extension)


class Catalogue:
    """
    Ordered collection of documents mirroring the managed directory.

    Order is insertion/enumeration order. Only the repository mutates it;
    everyone else gets tuple snapshots.
    """

    def __init__(self, documents: Optional[List[Document]] = None):
        self._documents: List[Document] = list(documents or [])

    def snapshot(self) -> Tuple[Document, ...]:
        """Read-only view of the current documents."""
        return tuple(self._documents)

    def find(self, name: str) -> Optional[Document]:
        """Find a document by name."""
        for document in self._documents:
            if document.name == name:
                return document
        return None

    def names(self) -> List[str]:
        return [document.name for document in self._documents]

    def append(self, document: Document) -> None:
        if self.find(document.name) is not None:
            raise ValueError(f"Document '{document.name}' is already catalogued")
        self._documents.append(document)

    def remove(self, document: Document) -> bool:
        """Remove a document; False if it was not catalogued."""
        try:
            self._documents.remove(document)
        except ValueError:
            return False
        return True

    def replace_all(self, documents: List[Document]) -> None:
        self._documents = list(documents)

    def __contains__(self, document: object) -> bool:
        return document in self._documents

    def __iter__(self) -> Iterator[Document]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._documents)
