"""
File pickers - where imported files come from.

A picker yields the picked file's name and a readable location, or None when
the user cancelled. Pickers that stage data (uploads) clean up in release().
"""
import asyncio
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from ..core.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PickedFile:
    name: Optional[str]
    location: str


class FilePickerInterface(ABC):

    @abstractmethod
    async def pick(self) -> Optional[PickedFile]:
        """Return the picked file, or None if the pick was cancelled."""
        pass

    async def release(self) -> None:
        """Free anything pick() staged."""
        pass


class UploadFilePicker(FilePickerInterface):
    """
    Picker over a multipart upload. The upload is staged to a temporary file
    so the repository can copy it like any other source.
    """

    def __init__(self, upload: Optional[UploadFile]):
        self._upload = upload
        self._staged: Optional[Path] = None

    async def pick(self) -> Optional[PickedFile]:
        if self._upload is None or not self._upload.filename:
            return None

        def _stage() -> Path:
            with tempfile.NamedTemporaryFile(prefix="docshelf-", delete=False) as buffer:
                shutil.copyfileobj(self._upload.file, buffer)
                return Path(buffer.name)

        loop = asyncio.get_running_loop()
        self._staged = await loop.run_in_executor(None, _stage)
        logger.debug(f"Staged upload '{self._upload.filename}' at {self._staged}")
        return PickedFile(name=self._upload.filename, location=str(self._staged))

    async def release(self) -> None:
        if self._staged is not None:
            self._staged.unlink(missing_ok=True)
            self._staged = None


class LocalPathPicker(FilePickerInterface):
    """Picker for a file that already exists on this machine."""

    def __init__(self, source: Optional[str], name: Optional[str] = None):
        self._source = source
        self._name = name

    async def pick(self) -> Optional[PickedFile]:
        if not self._source or not self._source.strip():
            return None
        return PickedFile(name=self._name, location=self._source)
