import re
from pathlib import Path

import pytest

from docshelf.api.exceptions import (
    CopyFailed,
    NoSourceSelected,
    NotFound,
    ShareFailed,
    ShareUnavailable,
    StorageUnavailable,
)
from docshelf.domain.entities import Document
from docshelf.domain.value_objects import Location
from docshelf.repositories import DocumentRepository
from docshelf.repositories.document_repository import derive_name, format_name
from docshelf.services.storage import LocalStorageVolume


class FlakyStorage(LocalStorageVolume):
    """Local volume whose first copies fail with the given errors."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.attempted = []

    async def copy(self, source, destination):
        self.attempted.append(Path(destination).name)
        if self.errors:
            raise self.errors.pop(0)
        await super().copy(source, destination)


def test_format_name():
    assert format_name("a", "txt") == "a.txt"
    assert format_name("a", "txt", 2) == "a (2).txt"
    assert format_name("README", None, 1) == "README (1)"
    assert format_name("archive.tar", "gz", 1) == "archive.tar (1).gz"


def test_derive_name_prefers_suggestion_last_component():
    assert derive_name("../../etc/report.pdf", "/tmp/x") == ("report", "pdf")
    assert derive_name("dir\\photo.JPG", "/tmp/x") == ("photo", "JPG")


def test_derive_name_falls_back_to_source():
    assert derive_name(None, "/data/picked/notes.md") == ("notes", "md")
    assert derive_name("", "/data/picked/notes.md?token=abc") == ("notes", "md")


def test_derive_name_defaults():
    assert derive_name(None, "/data/picked/") == ("file", None)
    assert derive_name("..", "/data/picked/") == ("file", None)
    assert derive_name(".hidden", "/x") == ("file", "hidden")
    assert derive_name("README", "/x") == ("README", None)
    assert derive_name("a\x00b.txt", "/x") == ("ab", "txt")
    assert derive_name("\x00\x1f", "/data/picked/notes.md") == ("notes", "md")


@pytest.mark.asyncio
async def test_initialize_lists_files_only(repository, managed_dir):
    managed_dir.mkdir(parents=True)
    (managed_dir / "b.txt").write_bytes(b"b")
    (managed_dir / "a.pdf").write_bytes(b"a")
    (managed_dir / "nested").mkdir()

    documents = await repository.initialize()

    assert [d.name for d in documents] == ["a.pdf", "b.txt"]
    assert documents[0].location == str(managed_dir / "a.pdf")
    assert repository.list() == documents


@pytest.mark.asyncio
async def test_initialize_creates_missing_directory(repository, managed_dir):
    documents = await repository.initialize()
    assert documents == ()
    assert managed_dir.is_dir()


@pytest.mark.asyncio
async def test_initialize_storage_unavailable(tmp_path, export_dir, share_service):
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    repository = DocumentRepository(
        storage=LocalStorageVolume(),
        managed_dir=blocker,
        share_service=share_service,
        export_dir=export_dir
    )

    with pytest.raises(StorageUnavailable) as exc_info:
        await repository.initialize()

    assert exc_info.value.action == "load"
    assert repository.list() == ()


@pytest.mark.asyncio
async def test_import_collision_naming(repository, make_source, managed_dir):
    await repository.initialize()
    source = make_source("a.txt", b"hello")

    first = await repository.import_document(source)
    second = await repository.import_document(source)
    third = await repository.import_document(source)

    assert [first.name, second.name, third.name] == ["a.txt", "a (1).txt", "a (2).txt"]
    assert [d.name for d in repository.list()] == ["a.txt", "a (1).txt", "a (2).txt"]
    for document in repository.list():
        assert Path(document.location).read_bytes() == b"hello"
        assert Path(document.location).parent == managed_dir


@pytest.mark.asyncio
async def test_import_without_extension(repository, make_source):
    await repository.initialize()
    source = make_source("README")

    first = await repository.import_document(source)
    second = await repository.import_document(source)

    assert first.name == "README"
    assert second.name == "README (1)"
    assert second.extension is None


@pytest.mark.asyncio
async def test_import_uses_suggested_name(repository, make_source):
    await repository.initialize()
    source = make_source("upload-tmp-123")

    document = await repository.import_document(source, "Holiday.JPG")

    assert document.name == "Holiday.JPG"
    assert document.extension == "jpg"


@pytest.mark.asyncio
async def test_import_does_not_overwrite_unlisted_file(repository, make_source, managed_dir):
    await repository.initialize()
    # Appeared on disk after the catalogue was loaded
    (managed_dir / "a.txt").write_bytes(b"original")

    document = await repository.import_document(make_source("a.txt", b"new"))

    assert document.name == "a (1).txt"
    assert (managed_dir / "a.txt").read_bytes() == b"original"


@pytest.mark.asyncio
async def test_import_cancelled(repository):
    await repository.initialize()

    with pytest.raises(NoSourceSelected):
        await repository.import_document(None)
    with pytest.raises(NoSourceSelected):
        await repository.import_document("   ")

    assert repository.list() == ()


@pytest.mark.asyncio
async def test_import_missing_source(repository, source_dir):
    await repository.initialize()

    with pytest.raises(CopyFailed) as exc_info:
        await repository.import_document(str(source_dir / "gone.txt"))

    assert exc_info.value.action == "import"
    assert exc_info.value.notice()["message"] == "The file could not be added."
    assert repository.list() == ()


@pytest.mark.asyncio
async def test_import_failure_catalogues_nothing(managed_dir, export_dir, share_service, make_source):
    storage = FlakyStorage(OSError("disk full"))
    repository = DocumentRepository(storage, managed_dir, share_service, export_dir)
    await repository.initialize()

    with pytest.raises(CopyFailed):
        await repository.import_document(make_source("a.txt"))

    assert repository.list() == ()
    assert list(managed_dir.iterdir()) == []


class RacingStorage(LocalStorageVolume):
    """Another writer claims the name, then this volume's own copy fails."""

    async def copy(self, source, destination):
        Path(destination).write_bytes(b"someone else")
        raise PermissionError("source not readable")


@pytest.mark.asyncio
async def test_failed_copy_leaves_other_writers_file(managed_dir, export_dir, share_service, make_source):
    repository = DocumentRepository(RacingStorage(), managed_dir, share_service, export_dir)
    await repository.initialize()

    with pytest.raises(CopyFailed):
        await repository.import_document(make_source("a.txt"), "a.txt")

    assert (managed_dir / "a.txt").read_bytes() == b"someone else"
    assert repository.list() == ()


@pytest.mark.asyncio
async def test_import_strips_control_characters(repository, make_source, managed_dir):
    await repository.initialize()

    document = await repository.import_document(make_source("upload-tmp"), "a\x00b\x07.txt")

    assert document.name == "ab.txt"
    assert (managed_dir / "ab.txt").exists()


@pytest.mark.asyncio
async def test_export_invalid_destination_is_copy_failure(repository, make_source):
    await repository.initialize()
    document = await repository.import_document(make_source("a.txt"))

    with pytest.raises(CopyFailed) as exc_info:
        await repository.export(document, Path("/tmp/bad\x00dir"))

    assert exc_info.value.action == "export"


@pytest.mark.asyncio
async def test_import_retries_when_name_taken_concurrently(managed_dir, export_dir, share_service, make_source):
    storage = FlakyStorage(FileExistsError("a.txt"))
    repository = DocumentRepository(storage, managed_dir, share_service, export_dir)
    await repository.initialize()

    document = await repository.import_document(make_source("a.txt"))

    assert storage.attempted == ["a.txt", "a (1).txt"]
    assert document.name == "a (1).txt"


@pytest.mark.asyncio
async def test_name_search_falls_back_after_cap(managed_dir, export_dir, share_service, make_source):
    repository = DocumentRepository(
        LocalStorageVolume(), managed_dir, share_service, export_dir, max_name_attempts=2
    )
    await repository.initialize()
    source = make_source("a.txt")

    await repository.import_document(source)
    await repository.import_document(source)
    fallback = await repository.import_document(source)

    assert re.fullmatch(r"a \(\d{20}\)\.txt", fallback.name)
    assert len(repository.list()) == 3


@pytest.mark.asyncio
async def test_get_and_find_by_location(repository, make_source):
    await repository.initialize()
    document = await repository.import_document(make_source("x.pdf"))

    assert repository.get("x.pdf") == document
    assert repository.find_by_location(document.location) == document
    with pytest.raises(NotFound) as exc_info:
        repository.get("y.pdf", action="view")
    assert exc_info.value.action == "view"
    with pytest.raises(NotFound):
        repository.find_by_location("/nowhere/y.pdf")


@pytest.mark.asyncio
async def test_delete_removes_file_and_entry(repository, make_source):
    await repository.initialize()
    keep = await repository.import_document(make_source("keep.txt"))
    document = await repository.import_document(make_source("b.txt"))

    await repository.delete(document)

    assert not Path(document.location).exists()
    assert repository.list() == (keep,)


@pytest.mark.asyncio
async def test_delete_twice_raises_not_found(repository, make_source):
    await repository.initialize()
    document = await repository.import_document(make_source("b.txt"))
    await repository.delete(document)

    with pytest.raises(NotFound) as exc_info:
        await repository.delete(document)

    assert exc_info.value.action == "delete"
    assert repository.list() == ()


@pytest.mark.asyncio
async def test_delete_prunes_entry_when_file_vanished(repository, make_source):
    await repository.initialize()
    document = await repository.import_document(make_source("b.txt"))
    Path(document.location).unlink()

    with pytest.raises(NotFound):
        await repository.delete(document)

    assert repository.list() == ()


@pytest.mark.asyncio
async def test_reimport_after_external_removal_replaces_stale_entry(repository, make_source):
    await repository.initialize()
    source = make_source("b.txt")
    document = await repository.import_document(source)
    Path(document.location).unlink()

    again = await repository.import_document(source)

    assert again.name == "b.txt"
    assert [d.name for d in repository.list()] == ["b.txt"]


@pytest.mark.asyncio
async def test_delete_uncatalogued_document(repository, managed_dir):
    await repository.initialize()
    stranger = Document(name="s.txt", location=Location(str(managed_dir / "s.txt")))

    with pytest.raises(NotFound):
        await repository.delete(stranger)


@pytest.mark.asyncio
async def test_export_is_non_destructive(repository, make_source, export_dir):
    await repository.initialize()
    document = await repository.import_document(make_source("report.pdf", b"%PDF-1.4"))

    location = await repository.export(document)

    assert Path(location) == export_dir / "report.pdf"
    assert Path(location).read_bytes() == b"%PDF-1.4"
    assert Path(document.location).exists()
    assert repository.list() == (document,)


@pytest.mark.asyncio
async def test_export_never_overwrites(repository, make_source, tmp_path):
    await repository.initialize()
    document = await repository.import_document(make_source("report.pdf", b"new"))
    destination = tmp_path / "elsewhere"
    destination.mkdir()
    (destination / "report.pdf").write_bytes(b"old")

    location = await repository.export(document, destination)

    assert Path(location).name == "report (1).pdf"
    assert (destination / "report.pdf").read_bytes() == b"old"


@pytest.mark.asyncio
async def test_export_missing_file(repository, make_source):
    await repository.initialize()
    document = await repository.import_document(make_source("report.pdf"))
    Path(document.location).unlink()

    with pytest.raises(CopyFailed) as exc_info:
        await repository.export(document)

    assert exc_info.value.notice()["message"] == "The file could not be saved."


@pytest.mark.asyncio
async def test_share_passes_mime_type(repository, make_source, share_service):
    await repository.initialize()
    document = await repository.import_document(make_source("report.PDF"))

    await repository.share(document)
    await repository.share(document, mime_type="text/plain")

    assert share_service.shared == [
        (document.location, "application/pdf"),
        (document.location, "text/plain"),
    ]


@pytest.mark.asyncio
async def test_share_unknown_type_uses_generic_mime(repository, make_source, share_service):
    await repository.initialize()
    document = await repository.import_document(make_source("data.xyz"))

    await repository.share(document)

    assert share_service.shared == [(document.location, "application/octet-stream")]


@pytest.mark.asyncio
async def test_share_unavailable(repository, make_source, share_service):
    await repository.initialize()
    document = await repository.import_document(make_source("a.txt"))
    share_service.available = False

    with pytest.raises(ShareUnavailable):
        await repository.share(document)
    assert share_service.shared == []


@pytest.mark.asyncio
async def test_share_failure(repository, make_source, share_service):
    await repository.initialize()
    document = await repository.import_document(make_source("a.txt"))
    share_service.fail = True

    with pytest.raises(ShareFailed) as exc_info:
        await repository.share(document)

    assert exc_info.value.action == "share"
