"""
Abstract base class for share services.
"""
from abc import ABC, abstractmethod
from typing import Optional


class ShareServiceInterface(ABC):
    """
    Hands a file to other applications.
    """

    @abstractmethod
    async def is_available(self) -> bool:
        """Whether the platform offers a share mechanism at all."""
        pass

    @abstractmethod
    async def share(self, location: str, mime_type: Optional[str] = None) -> None:
        """
        Hand a file to the share target.

        Args:
            location: Path of the file to share
            mime_type: Optional media type hint for the receiving application

        Raises:
            RuntimeError: If the hand-off fails
        """
        pass
