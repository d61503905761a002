"""
Storage volume abstraction layer.
The repository talks to a volume, never to the filesystem directly.
"""
from .base import StorageVolumeInterface
from .local_storage import LocalStorageVolume
from .factory import StorageVolumeFactory

__all__ = [
    "StorageVolumeInterface",
    "LocalStorageVolume",
    "StorageVolumeFactory"
]
