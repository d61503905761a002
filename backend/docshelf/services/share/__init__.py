"""
Share hand-off to other applications.
"""
from typing import Optional

from .base import ShareServiceInterface
from .command_share import CommandShareService, UnavailableShareService


def create_share_service(command: Optional[str] = None) -> ShareServiceInterface:
    """Create the share service for a configured command (empty = unavailable)."""
    if command is None:
        from ...core.config import SHARE_COMMAND
        command = SHARE_COMMAND
    if command and command.strip():
        return CommandShareService(command)
    return UnavailableShareService()


__all__ = [
    "ShareServiceInterface",
    "CommandShareService",
    "UnavailableShareService",
    "create_share_service"
]
