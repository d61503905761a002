"""
Abstract base class for storage volumes.
All storage implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List


class StorageVolumeInterface(ABC):
    """
    Abstract interface for storage volume operations.
    The repository depends on this contract only, so volumes can be swapped
    without changing business logic.
    """

    @abstractmethod
    async def exists(self, path: Path) -> bool:
        """
        Check whether a file or directory exists.

        Args:
            path: Path to check

        Returns:
            True if something exists at the path, False otherwise
        """
        pass

    @abstractmethod
    async def make_directory(self, path: Path) -> None:
        """
        Create a directory (and missing parents).
        Succeeds silently if the directory already exists.
        """
        pass

    @abstractmethod
    async def list_entries(self, directory: Path) -> List[str]:
        """
        List the names of the regular files directly inside a directory.

        Args:
            directory: Directory to enumerate

        Returns:
            File names (not paths), sorted by name
        """
        pass

    @abstractmethod
    async def copy(self, source: Path, destination: Path) -> None:
        """
        Copy a file.

        The destination is created exclusively: if it already exists the copy
        fails with FileExistsError and nothing is overwritten. If the copy fails
        after the destination was created, the volume removes it; a destination
        it did not create is never touched.

        Args:
            source: File to copy
            destination: Path of the new file
        """
        pass

    @abstractmethod
    async def delete(self, path: Path) -> None:
        """
        Delete a file.

        Raises:
            FileNotFoundError: If there is no file at the path
        """
        pass
