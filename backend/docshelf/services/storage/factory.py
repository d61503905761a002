"""
Storage Volume Factory.
Implements Factory Pattern for plug-and-play storage support.
"""
import os
from typing import Optional

from .base import StorageVolumeInterface
from .local_storage import LocalStorageVolume
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class StorageVolumeFactory:
    """
    Factory for creating storage volumes.
    """

    @staticmethod
    def create(storage_type: Optional[str] = None) -> StorageVolumeInterface:
        """
        Create a storage volume instance.

        Args:
            storage_type: Type of storage ('local', or None for auto-detect)

        Returns:
            StorageVolumeInterface instance
        """
        # Auto-detect storage type from environment if not specified
        if storage_type is None:
            storage_type = os.getenv("STORAGE_TYPE", "local")

        storage_type = storage_type.lower()

        if storage_type == "local":
            logger.debug("Creating local storage volume")
            return LocalStorageVolume()
        raise ValueError(
            f"Unsupported storage type: {storage_type}. "
            f"Supported types: 'local'"
        )
