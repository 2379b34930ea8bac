from pathlib import Path

import pytest

from fileconvertzz.services.file_kinds import classify
from fileconvertzz.types_job_types import FileKind, SelectableFile


@pytest.mark.parametrize(
    "media_type,kind",
    [
        ("image/png", FileKind.IMAGE),
        ("image/jpeg", FileKind.IMAGE),
        ("image/svg+xml", FileKind.IMAGE),
        ("application/pdf", FileKind.PDF),
        ("", FileKind.UNSUPPORTED),
        ("text/plain", FileKind.UNSUPPORTED),
        ("application/pdf; charset=binary", FileKind.UNSUPPORTED),
        ("IMAGE/PNG", FileKind.UNSUPPORTED),
    ],
)
def test_classify_by_declared_media_type(media_type, kind):
    assert classify(SelectableFile("f", media_type)) is kind


def test_mislabelled_file_follows_its_label():
    f = SelectableFile.from_bytes("fake.pdf", b"\x89PNG not really", "application/pdf")
    assert classify(f) is FileKind.PDF


def test_classify_is_idempotent():
    f = SelectableFile("a.png", "image/png", 10)
    assert classify(f) is classify(f)


def test_file_requires_a_name():
    with pytest.raises(ValueError):
        SelectableFile("", "image/png")


def test_file_size_cannot_be_negative():
    with pytest.raises(ValueError):
        SelectableFile("a.png", "image/png", -1)


def test_from_path_guesses_media_type(tmp_path: Path):
    p = tmp_path / "report.pdf"
    p.write_bytes(b"%PDF-1.4")
    f = SelectableFile.from_path(p)
    assert f.name == "report.pdf"
    assert f.media_type == "application/pdf"
    assert f.size_bytes == 8
    assert f.read() == b"%PDF-1.4"


def test_from_path_unknown_extension(tmp_path: Path):
    p = tmp_path / "notes.zzz"
    p.write_bytes(b"")
    assert classify(SelectableFile.from_path(p)) is FileKind.UNSUPPORTED
