"""
Share services backed by the host platform.
"""
import asyncio
import os
import shlex
import shutil
from typing import List, Optional

from .base import ShareServiceInterface
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class CommandShareService(ShareServiceInterface):
    """
    Shares a file by launching an external command with the file path
    appended (e.g. "xdg-open" or "open -a Mail").

    The MIME type is exported to the command as DOCSHELF_MIME_TYPE.
    """

    def __init__(self, command: str):
        self._argv: List[str] = shlex.split(command)

    async def is_available(self) -> bool:
        if not self._argv:
            return False
        return shutil.which(self._argv[0]) is not None

    async def share(self, location: str, mime_type: Optional[str] = None) -> None:
        env = dict(os.environ)
        if mime_type:
            env["DOCSHELF_MIME_TYPE"] = mime_type

        process = await asyncio.create_subprocess_exec(
            *self._argv, location,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env
        )
        _, stderr = await process.communicate()

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            logger.error(f"Share command exited with {process.returncode}: {message}")
            raise RuntimeError(f"Share command failed with exit code {process.returncode}")

        logger.info(f"Shared {location} via {self._argv[0]}")


class UnavailableShareService(ShareServiceInterface):
    """Used when no share command is configured."""

    async def is_available(self) -> bool:
        return False

    async def share(self, location: str, mime_type: Optional[str] = None) -> None:
        raise RuntimeError("No share mechanism configured")
