from urllib.parse import parse_qs, urlparse

import pytest

from docshelf.domain.entities import Catalogue, Document
from docshelf.domain.file_types import label_for, mime_type_for, split_name
from docshelf.domain.value_objects import FileKind, Location, PresentationMode
from docshelf.services.viewer_dispatcher import (
    OFFICE_NOTICE,
    PDF_VIEWER_ROUTE,
    TEXT_NOTICE,
    UNKNOWN_NOTICE,
    ViewerDispatcher,
)


def doc(name: str, directory: str = "/data/docs") -> Document:
    return Document(name=name, location=Location(f"{directory}/{name}"))


@pytest.fixture
def dispatcher():
    return ViewerDispatcher()


@pytest.mark.parametrize("name,kind", [
    ("photo.jpg", FileKind.IMAGE),
    ("photo.JPG", FileKind.IMAGE),
    ("scan.webp", FileKind.IMAGE),
    ("clip.mov", FileKind.VIDEO),
    ("song.flac", FileKind.AUDIO),
    ("notes.md", FileKind.TEXT),
    ("manual.pdf", FileKind.PDF),
    ("budget.xlsx", FileKind.OFFICE_DOCUMENT),
    ("backup.7z", FileKind.ARCHIVE),
    ("data.xyz", FileKind.UNKNOWN),
    ("README", FileKind.UNKNOWN),
])
def test_classify(dispatcher, name, kind):
    assert dispatcher.classify(doc(name)) is kind
    assert doc(name).kind is kind


def test_classification_is_case_insensitive(dispatcher):
    for name in ("a.jpg", "a.JPG", "a.Jpg"):
        presentation = dispatcher.select(doc(name))
        assert presentation.kind is FileKind.IMAGE
        assert presentation.mode is PresentationMode.INLINE_FULL_SCREEN_IMAGE


def test_labels(dispatcher):
    assert dispatcher.label(doc("a.docx")) == "Word"
    assert dispatcher.label(doc("a.XLS")) == "Excel"
    assert dispatcher.label(doc("a.png")) == "Image"
    assert dispatcher.label(doc("a.xyz")) == "XYZ"
    assert dispatcher.label(doc("README")) == "FILE"
    assert label_for("Xyz") == "XYZ"


def test_icons(dispatcher):
    assert dispatcher.icon(doc("a.png")) is None
    assert dispatcher.icon(doc("a.pdf")) == "📄"
    assert dispatcher.icon(doc("a.doc")) == "📝"
    assert dispatcher.icon(doc("a.xyz")) == "📁"


def test_mime_types(dispatcher):
    assert dispatcher.mime_type_for("pdf") == "application/pdf"
    assert dispatcher.mime_type_for("JPG") == "image/jpeg"
    assert mime_type_for("docx") == "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    assert mime_type_for("xyz") == "application/octet-stream"
    assert mime_type_for(None) == "application/octet-stream"


def test_image_is_zoomable(dispatcher):
    presentation = dispatcher.select(doc("a.gif"))
    assert presentation.zoomable
    assert presentation.notice is None


def test_media_variants(dispatcher):
    video = dispatcher.select(doc("a.mp4"))
    audio = dispatcher.select(doc("a.mp3"))
    assert video.mode is audio.mode is PresentationMode.INLINE_MEDIA
    assert video.media_variant == "video"
    assert audio.media_variant == "audio"
    assert audio.mime_type == "audio/mpeg"


def test_text_shows_notice_only(dispatcher):
    presentation = dispatcher.select(doc("notes.txt"))
    assert presentation.mode is PresentationMode.INLINE_TEXT
    assert presentation.notice == TEXT_NOTICE
    assert presentation.name == "notes.txt"


def test_pdf_always_routes(dispatcher):
    document = doc("my report.pdf", "/data/my docs")
    presentation = dispatcher.select(document)

    assert presentation.mode is PresentationMode.ROUTE_TO_PDF_VIEWER
    assert presentation.media_variant is None
    parsed = urlparse(presentation.route)
    assert parsed.path == PDF_VIEWER_ROUTE
    assert parse_qs(parsed.query) == {"uri": [document.location]}
    assert " " not in presentation.route


def test_office_offers_external_handoff(dispatcher):
    presentation = dispatcher.select(doc("letter.doc"))
    assert presentation.mode is PresentationMode.UNSUPPORTED
    assert presentation.notice == OFFICE_NOTICE
    assert presentation.guidance
    assert presentation.external_handoff


def test_archive_notice_names_file(dispatcher):
    presentation = dispatcher.select(doc("backup.zip"))
    assert presentation.mode is PresentationMode.UNSUPPORTED
    assert presentation.notice == "Compressed file: backup.zip"
    assert not presentation.external_handoff


def test_unknown_reports_extension(dispatcher):
    presentation = dispatcher.select(doc("data.xyz"))
    assert presentation.mode is PresentationMode.UNSUPPORTED
    assert presentation.notice == UNKNOWN_NOTICE
    assert presentation.guidance == "Extension: XYZ"
    assert presentation.label == "XYZ"


def test_split_name():
    assert split_name("a.tar.gz") == ("a.tar", "gz")
    assert split_name("README") == ("README", None)
    assert split_name("a.") == ("a", "")


def test_catalogue_snapshot_is_detached():
    catalogue = Catalogue([doc("a.txt")])
    snapshot = catalogue.snapshot()
    catalogue.append(doc("b.txt"))

    assert [d.name for d in snapshot] == ["a.txt"]
    assert catalogue.names() == ["a.txt", "b.txt"]
    with pytest.raises(ValueError):
        catalogue.append(doc("a.txt"))
    assert catalogue.remove(doc("a.txt"))
    assert not catalogue.remove(doc("a.txt"))
