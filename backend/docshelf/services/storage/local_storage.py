"""
Local filesystem storage volume implementing StorageVolumeInterface.
Blocking filesystem calls run in the default executor.
"""
import asyncio
import shutil
from pathlib import Path
from typing import List

from .base import StorageVolumeInterface
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class LocalStorageVolume(StorageVolumeInterface):
    """
    Local filesystem storage volume.
    Paths are used as given; the repository decides which directories it touches.
    """

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def exists(self, path: Path) -> bool:
        """Check if a path exists on the local filesystem."""
        return await self._run(Path(path).exists)

    async def make_directory(self, path: Path) -> None:
        """Create a directory, including parents."""
        def _mkdir():
            Path(path).mkdir(parents=True, exist_ok=True)

        await self._run(_mkdir)

    async def list_entries(self, directory: Path) -> List[str]:
        """List regular files directly inside a directory."""
        def _list():
            return sorted(entry.name for entry in Path(directory).iterdir() if entry.is_file())

        return await self._run(_list)

    async def copy(self, source: Path, destination: Path) -> None:
        """
        Copy a file without ever overwriting the destination.

        A partial destination is removed only if this call created it.
        """
        def _copy():
            with open(source, "rb") as src:
                # "x" mode: fail with FileExistsError instead of overwriting
                with open(destination, "xb") as dst:
                    try:
                        shutil.copyfileobj(src, dst)
                    except BaseException:
                        dst.close()
                        Path(destination).unlink(missing_ok=True)
                        raise

        await self._run(_copy)
        logger.debug(f"Copied {source} -> {destination}")

    async def delete(self, path: Path) -> None:
        """Delete a file from the local filesystem."""
        await self._run(Path(path).unlink)
