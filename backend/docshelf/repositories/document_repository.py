"""
Document Repository - Local document repository over a storage volume.

Owns the catalogue of documents in the managed directory and performs every
mutation on it: import (copy-in with collision-safe naming), deletion,
export and share hand-off. The in-memory catalogue is patched only after a
storage operation has completed, so it never disagrees with the managed
directory for longer than one operation.
"""
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Tuple

from .interfaces import IDocumentRepository
from ..api.exceptions import (
    CopyFailed,
    DocShelfError,
    NoSourceSelected,
    NotFound,
    ShareFailed,
    ShareUnavailable,
    StorageUnavailable,
)
from ..core.config import DEFAULT_IMPORT_NAME, MAX_NAME_ATTEMPTS
from ..core.logging_config import get_logger
from ..domain.entities import Catalogue, Document
from ..domain.file_types import mime_type_for, split_name
from ..domain.value_objects import Location
from ..services.share import ShareServiceInterface
from ..services.storage import StorageVolumeInterface

logger = get_logger(__name__)


def format_name(base: str, extension: Optional[str], suffix: Optional[object] = None) -> str:
    """
    Build a candidate filename.

    >>> format_name("a", "txt", 2)
    'a (2).txt'
    >>> format_name("README", None, 1)
    'README (1)'
    """
    stem = f"{base} ({suffix})" if suffix is not None else base
    return f"{stem}.{extension}" if extension is not None else stem


def _clean(name: str) -> str:
    """Drop control characters (NUL included) and surrounding whitespace."""
    return "".join(ch for ch in name if ch.isprintable()).strip()


def derive_name(suggested_name: Optional[str], source_location: str) -> Tuple[str, Optional[str]]:
    """
    Work out the (base, extension) an import should be stored under.

    Only the final path component of the suggested name is used. Without a
    suggestion the last segment of the source location is taken, minus any
    query string. Control characters are dropped. An empty base falls back
    to DEFAULT_IMPORT_NAME.
    """
    name = ""
    if suggested_name:
        name = _clean(suggested_name.replace("\\", "/").rsplit("/", 1)[-1])
    if not name:
        name = _clean(str(source_location).replace("\\", "/").rsplit("/", 1)[-1].split("?")[0])
    # "." and ".." would address directories, not files
    if not name.strip("."):
        name = DEFAULT_IMPORT_NAME

    base, extension = split_name(name)
    return base or DEFAULT_IMPORT_NAME, extension


class DocumentRepository(IDocumentRepository):
    """
    Repository for documents held in the managed directory.
    Depends only on a storage volume and a share service (dependency injection).
    """

    def __init__(
        self,
        storage: StorageVolumeInterface,
        managed_dir: Path,
        share_service: ShareServiceInterface,
        export_dir: Path,
        max_name_attempts: int = MAX_NAME_ATTEMPTS
    ):
        """
        Initialize repository.

        Args:
            storage: Storage volume used for every file operation
            managed_dir: The app-private directory the catalogue mirrors
            share_service: Share collaborator for hand-offs
            export_dir: Default public save location for exports
            max_name_attempts: Numeric suffixes tried before a timestamp suffix is used
        """
        self._storage = storage
        self._managed_dir = Path(managed_dir)
        self._share_service = share_service
        self._export_dir = Path(export_dir)
        self._max_name_attempts = max_name_attempts
        self._catalogue = Catalogue()

    @property
    def managed_dir(self) -> Path:
        return self._managed_dir

    async def initialize(self) -> Tuple[Document, ...]:
        try:
            await self._storage.make_directory(self._managed_dir)
            names = await self._storage.list_entries(self._managed_dir)
        except OSError as e:
            logger.error(f"Managed directory {self._managed_dir} unavailable: {e}")
            raise StorageUnavailable("load", str(e)) from e

        self._catalogue.replace_all([
            Document(name=name, location=Location(str(self._managed_dir / name)))
            for name in names
        ])
        logger.info(f"Catalogue loaded: {len(self._catalogue)} document(s) in {self._managed_dir}")
        return self._catalogue.snapshot()

    async def import_document(self, source_location: Optional[str], suggested_name: Optional[str] = None) -> Document:
        """
        Copy an external file into the managed directory.

        Args:
            source_location: Readable path of the picked file; empty means the pick was cancelled
            suggested_name: Name the picker reported for the file

        Returns:
            The newly catalogued document

        Raises:
            NoSourceSelected: If there is no source (cancelled pick)
            CopyFailed: If the file could not be copied; nothing is catalogued
        """
        if source_location is None or not str(source_location).strip():
            raise NoSourceSelected("import")

        source = Path(source_location)
        base, extension = derive_name(suggested_name, str(source_location))

        try:
            if not await self._storage.exists(source):
                raise CopyFailed("import", f"Source {source} does not exist")
            await self._storage.make_directory(self._managed_dir)
            destination = await self._copy_unique(source, self._managed_dir, base, extension)
        except DocShelfError:
            raise
        except (OSError, ValueError) as e:
            logger.error(f"Import of {source} failed: {e}")
            raise CopyFailed("import", str(e)) from e

        document = Document(name=destination.name, location=Location(str(destination)))

        # A file removed behind our back may have left its entry behind under the same name
        stale = self._catalogue.find(document.name)
        if stale is not None:
            logger.warning(f"Dropping stale catalogue entry for '{stale.name}'")
            self._catalogue.remove(stale)

        self._catalogue.append(document)
        logger.info(f"Imported '{document.name}' from {source}")
        return document

    def list(self) -> Tuple[Document, ...]:
        return self._catalogue.snapshot()

    def get(self, name: str, action: str = "open") -> Document:
        document = self._catalogue.find(name)
        if document is None:
            raise NotFound(action, f"No document named '{name}'")
        return document

    def find_by_location(self, location: str) -> Document:
        for document in self._catalogue:
            if document.location == location:
                return document
        raise NotFound("open", f"No document at '{location}'")

    async def delete(self, document: Document) -> None:
        """
        Delete a document and its file.

        Raises:
            NotFound: If the document is not catalogued or its file is already gone
            StorageUnavailable: If the file exists but could not be removed
        """
        if document not in self._catalogue:
            raise NotFound("delete", f"'{document.name}' is not catalogued")

        try:
            await self._storage.delete(Path(document.location))
        except FileNotFoundError as e:
            # File vanished externally; the entry is stale either way
            self._catalogue.remove(document)
            logger.warning(f"File for '{document.name}' was already gone; entry pruned")
            raise NotFound("delete", str(e)) from e
        except OSError as e:
            logger.error(f"Could not delete '{document.name}': {e}")
            raise StorageUnavailable("delete", str(e)) from e

        self._catalogue.remove(document)
        logger.info(f"Deleted '{document.name}'")

    async def export(self, document: Document, destination_directory: Optional[Path] = None) -> Location:
        """
        Copy a document to a directory outside the managed area.

        Existing files in the destination are never overwritten; the copy takes
        the next free "name (n).ext" instead.

        Returns:
            Location of the exported copy
        """
        if document not in self._catalogue:
            raise NotFound("export", f"'{document.name}' is not catalogued")

        destination_dir = Path(destination_directory) if destination_directory else self._export_dir
        source = Path(document.location)
        base, extension = split_name(document.name)

        try:
            if not await self._storage.exists(source):
                raise CopyFailed("export", f"Source {source} does not exist")
            await self._storage.make_directory(destination_dir)
            destination = await self._copy_unique(source, destination_dir, base, extension)
        except DocShelfError:
            raise
        except (OSError, ValueError) as e:
            logger.error(f"Export of '{document.name}' failed: {e}")
            raise CopyFailed("export", str(e)) from e

        logger.info(f"Exported '{document.name}' to {destination}")
        return Location(str(destination))

    async def share(self, document: Document, mime_type: Optional[str] = None) -> None:
        if document not in self._catalogue:
            raise NotFound("share", f"'{document.name}' is not catalogued")

        if not await self._share_service.is_available():
            raise ShareUnavailable("share")

        try:
            await self._share_service.share(document.location, mime_type or mime_type_for(document.extension))
        except (OSError, RuntimeError) as e:
            logger.error(f"Sharing '{document.name}' failed: {e}")
            raise ShareFailed("share", str(e)) from e

    def _candidate_names(self, base: str, extension: Optional[str]) -> Iterator[str]:
        """
        Candidate names in order: "base.ext", "base (1).ext", "base (2).ext", ...

        After max_name_attempts numeric suffixes a timestamp suffix is tried,
        then random suffixes until one is free.
        """
        yield format_name(base, extension)
        for attempt in range(1, self._max_name_attempts):
            yield format_name(base, extension, attempt)

        logger.warning(f"Name search for '{base}' exhausted {self._max_name_attempts} attempts")
        yield format_name(base, extension, datetime.now().strftime("%Y%m%d%H%M%S%f"))
        while True:
            yield format_name(base, extension, uuid.uuid4().hex[:12])

    async def _copy_unique(self, source: Path, directory: Path, base: str, extension: Optional[str]) -> Path:
        """Copy source into directory under the first free candidate name."""
        for candidate in self._candidate_names(base, extension):
            destination = directory / candidate
            if await self._storage.exists(destination):
                continue
            try:
                await self._storage.copy(source, destination)
            except FileExistsError:
                # Claimed by a concurrent copy between the check and the create
                logger.debug(f"'{candidate}' was taken concurrently, trying the next name")
                continue
            return destination
        raise AssertionError("unreachable: candidate names are unbounded")
