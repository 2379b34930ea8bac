from pathlib import Path

from PyPDF2 import PdfReader
from typer.testing import CliRunner

from conftest import image_bytes, pdf_bytes
from fileconvertzz.cli import app

runner = CliRunner()


def invoke(tmp_path: Path, *args: str):
    return runner.invoke(app, [*args, "--config", str(tmp_path / "missing.yaml")])


def test_to_png(tmp_path: Path, write_file):
    src = write_file("photo.jpg", image_bytes(fmt="JPEG"))
    out = tmp_path / "out"
    result = invoke(tmp_path, "to-png", str(src), "-o", str(out))
    assert result.exit_code == 0, result.output
    assert (out / "photo.png").exists()
    assert str(out / "photo.png") in result.output


def test_images_to_pdf(tmp_path: Path, write_file):
    a = write_file("a.png", image_bytes())
    b = write_file("b.jpg", image_bytes(fmt="JPEG"))
    out = tmp_path / "out"
    result = invoke(tmp_path, "images-to-pdf", str(a), str(b), "-o", str(out))
    assert result.exit_code == 0, result.output
    assert len(PdfReader(str(out / "converted.pdf")).pages) == 2


def test_merge(tmp_path: Path, write_file):
    a = write_file("a.pdf", pdf_bytes(1))
    b = write_file("b.pdf", pdf_bytes(2))
    out = tmp_path / "out"
    result = invoke(tmp_path, "merge", str(a), str(b), "-o", str(out))
    assert result.exit_code == 0, result.output
    assert len(PdfReader(str(out / "merged.pdf")).pages) == 3


def test_merge_needs_two_pdfs(tmp_path: Path, write_file):
    a = write_file("a.pdf", pdf_bytes(1))
    result = invoke(tmp_path, "merge", str(a), "-o", str(tmp_path / "out"))
    assert result.exit_code == 1
    assert "need at least two PDFs" in result.output


def test_pdf_to_jpeg(tmp_path: Path, write_file):
    src = write_file("deck.pdf", pdf_bytes(2))
    out = tmp_path / "out"
    result = invoke(tmp_path, "pdf-to-jpeg", str(src), "-o", str(out))
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == ["deck-page-1.jpg", "deck-page-2.jpg"]


def test_exclude(tmp_path: Path, write_file):
    src = write_file("deck.pdf", pdf_bytes(4))
    out = tmp_path / "out"
    result = invoke(tmp_path, "exclude", str(src), "--pages", "2-3", "-o", str(out))
    assert result.exit_code == 0, result.output
    assert len(PdfReader(str(out / "deck-split.pdf")).pages) == 2


def test_exclude_all_pages_fails(tmp_path: Path, write_file):
    src = write_file("deck.pdf", pdf_bytes(2))
    out = tmp_path / "out"
    result = invoke(tmp_path, "exclude", str(src), "--pages", "1,2", "-o", str(out))
    assert result.exit_code == 1
    assert "cannot exclude all pages" in result.output
    assert not out.exists() or list(out.iterdir()) == []


def test_bad_settings_exit_with_error(tmp_path: Path, write_file):
    src = write_file("photo.jpg", image_bytes(fmt="JPEG"))
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("jpeg_quality: 0\n", encoding="utf-8")
    out = tmp_path / "out"
    result = runner.invoke(app, ["to-png", str(src), "-o", str(out), "--config", str(cfg)])
    assert result.exit_code == 1
    assert "Error: jpeg_quality must be between 1 and 100" in result.output
    assert not out.exists() or list(out.iterdir()) == []
