"""
Shared dependencies for routers.
Provides repository and service initialization.

This module manages service lifecycle and dependency injection: one
repository, one dispatcher and one navigation state per process.
"""
from pathlib import Path
from typing import Optional

from ..api.exceptions import StorageUnavailable
from ..core import config
from ..core.logging_config import get_logger
from ..repositories import DocumentRepository
from ..services.navigation import NavigationStateMachine
from ..services.operation_guard import OperationGuard
from ..services.share import ShareServiceInterface, create_share_service
from ..services.storage import StorageVolumeFactory, StorageVolumeInterface
from ..services.viewer_dispatcher import ViewerDispatcher

logger = get_logger(__name__)

# Global services (will be initialized on startup)
# These are shared across all request handlers
document_repository: Optional[DocumentRepository] = None
viewer_dispatcher: Optional[ViewerDispatcher] = None
navigation: Optional[NavigationStateMachine] = None
operation_guard: Optional[OperationGuard] = None

# Error raised while loading the catalogue at startup, if any
startup_error: Optional[StorageUnavailable] = None


async def initialize_services(
    managed_dir: Optional[Path] = None,
    export_dir: Optional[Path] = None,
    storage: Optional[StorageVolumeInterface] = None,
    share_service: Optional[ShareServiceInterface] = None,
    max_name_attempts: Optional[int] = None
) -> None:
    """
    Initialize all services and load the catalogue.

    Arguments override the values from configuration (used by tests and
    embedding applications). A storage failure is logged and remembered; the
    service keeps running with an empty catalogue.
    """
    global document_repository, viewer_dispatcher, navigation, operation_guard, startup_error

    logger.info("Initializing services...")

    storage = storage or StorageVolumeFactory.create(config.STORAGE_TYPE)
    share_service = share_service or create_share_service(config.SHARE_COMMAND)
    managed_dir = Path(managed_dir) if managed_dir else config.MANAGED_DIR
    export_dir = Path(export_dir) if export_dir else config.EXPORT_DIR

    logger.info(f"  → Managed directory: {managed_dir}")
    logger.info(f"  → Export directory: {export_dir}")
    logger.info(f"  → Share available: {await share_service.is_available()}")

    document_repository = DocumentRepository(
        storage=storage,
        managed_dir=managed_dir,
        share_service=share_service,
        export_dir=export_dir,
        max_name_attempts=max_name_attempts or config.MAX_NAME_ATTEMPTS
    )
    viewer_dispatcher = ViewerDispatcher()
    navigation = NavigationStateMachine(viewer_dispatcher)
    operation_guard = OperationGuard()

    try:
        await document_repository.initialize()
        startup_error = None
    except StorageUnavailable as e:
        # Shown as an empty catalogue; the error stays visible through /health
        logger.error(f"  ⚠️  Catalogue could not be loaded: {e}")
        startup_error = e

    logger.info("✅ All services initialized successfully")


def get_document_repository() -> DocumentRepository:
    """Get document repository (dependency injection)."""
    if document_repository is None:
        raise RuntimeError("Document repository not initialized")
    return document_repository


def get_viewer_dispatcher() -> ViewerDispatcher:
    """Get viewer dispatcher (dependency injection)."""
    if viewer_dispatcher is None:
        raise RuntimeError("Viewer dispatcher not initialized")
    return viewer_dispatcher


def get_navigation() -> NavigationStateMachine:
    """Get navigation state machine (dependency injection)."""
    if navigation is None:
        raise RuntimeError("Navigation not initialized")
    return navigation


def get_operation_guard() -> OperationGuard:
    """Get operation guard (dependency injection)."""
    if operation_guard is None:
        raise RuntimeError("Operation guard not initialized")
    return operation_guard
