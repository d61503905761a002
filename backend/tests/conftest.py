import asyncio
import os
from typing import List, Optional, Tuple

import pytest

# Must be set before docshelf.core.config / logging_config are imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["LOG_TO_FILE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient

from docshelf.repositories import DocumentRepository
from docshelf.services.share import ShareServiceInterface
from docshelf.services.storage import LocalStorageVolume


class RecordingShareService(ShareServiceInterface):
    """Share service that records hand-offs instead of launching anything."""

    def __init__(self, available: bool = True, fail: bool = False):
        self.available = available
        self.fail = fail
        self.shared: List[Tuple[str, Optional[str]]] = []

    async def is_available(self) -> bool:
        return self.available

    async def share(self, location: str, mime_type: Optional[str] = None) -> None:
        if self.fail:
            raise RuntimeError("share target refused the file")
        self.shared.append((location, mime_type))


@pytest.fixture
def managed_dir(tmp_path):
    return tmp_path / "docs"


@pytest.fixture
def export_dir(tmp_path):
    return tmp_path / "exports"


@pytest.fixture
def source_dir(tmp_path):
    directory = tmp_path / "picked"
    directory.mkdir()
    return directory


@pytest.fixture
def make_source(source_dir):
    """Create a file outside the managed directory to import from."""
    def _make(name: str, content: bytes = b"content") -> str:
        path = source_dir / name
        path.write_bytes(content)
        return str(path)
    return _make


@pytest.fixture
def share_service():
    return RecordingShareService()


@pytest.fixture
def repository(managed_dir, export_dir, share_service):
    return DocumentRepository(
        storage=LocalStorageVolume(),
        managed_dir=managed_dir,
        share_service=share_service,
        export_dir=export_dir
    )


@pytest.fixture
def client(managed_dir, export_dir, share_service):
    """TestClient over the real app, with services pointed at tmp directories."""
    from docshelf.main import app
    from docshelf.routers import dependencies

    asyncio.run(dependencies.initialize_services(
        managed_dir=managed_dir,
        export_dir=export_dir,
        storage=LocalStorageVolume(),
        share_service=share_service
    ))
    # Not used as a context manager so the startup event does not
    # re-initialize services from the environment
    return TestClient(app)
