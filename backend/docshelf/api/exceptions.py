"""
Custom exceptions for the repository and viewer layers.
Separates business exceptions from HTTP exceptions.

Every exception names the action that failed in user terms so it can be
shown as a dismissible notice without leaking technical details.
"""
from typing import Dict, Optional

from fastapi import HTTPException, status


class DocShelfError(Exception):
    """Base class for all DocShelf business errors."""

    title = "Something went wrong"
    default_message = "The action could not be completed."

    def __init__(self, action: str, detail: Optional[str] = None):
        self.action = action
        self.detail = detail
        super().__init__(detail or f"{type(self).__name__} during {action}")

    def notice(self) -> Dict[str, str]:
        """User-facing notice; never contains the technical detail."""
        return {
            "title": self.title,
            "message": self.default_message,
            "action": self.action,
        }


class StorageUnavailable(DocShelfError):
    """Raised when the managed directory cannot be read or created."""
    title = "Documents unavailable"

    @property
    def default_message(self) -> str:
        if self.action == "delete":
            return "The document could not be deleted."
        return "Your documents folder could not be opened."


class NoSourceSelected(DocShelfError):
    """Raised when the picker was cancelled; a no-op, never shown to the user."""
    title = "Nothing selected"
    default_message = "No file was selected."


class CopyFailed(DocShelfError):
    """Raised when copying a file into or out of the repository fails."""
    title = "Copy failed"

    @property
    def default_message(self) -> str:
        if self.action == "export":
            return "The file could not be saved."
        return "The file could not be added."


class NotFound(DocShelfError):
    """Raised when a document (or its file) no longer exists."""
    title = "Document not found"
    default_message = "This document no longer exists."


class ShareUnavailable(DocShelfError):
    """Raised when the platform offers no share mechanism."""
    title = "Sharing unavailable"
    default_message = "Sharing is not available on this device."


class ShareFailed(DocShelfError):
    """Raised when the share hand-off itself fails."""
    title = "Share failed"
    default_message = "The file could not be shared."


class NotViewable(DocShelfError):
    """Raised when a document is opened in a viewer that cannot render its kind."""
    title = "Cannot open document"
    default_message = "This document cannot be shown in this viewer."


class OperationInProgress(DocShelfError):
    """Raised when the same mutating operation is triggered while one is outstanding."""
    title = "Please wait"
    default_message = "This action is already in progress."


_STATUS_CODES = {
    StorageUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    NoSourceSelected: status.HTTP_204_NO_CONTENT,
    CopyFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
    NotFound: status.HTTP_404_NOT_FOUND,
    ShareUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    ShareFailed: status.HTTP_502_BAD_GATEWAY,
    OperationInProgress: status.HTTP_409_CONFLICT,
    NotViewable: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
}


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, DocShelfError):
        status_code = _STATUS_CODES.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return HTTPException(status_code=status_code, detail=e.notice())
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "title": DocShelfError.title,
            "message": DocShelfError.default_message,
            "action": "unknown",
        }
    )
