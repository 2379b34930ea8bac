from __future__ import annotations
import io
from pathlib import Path

import pytest
from PIL import Image


def image_bytes(size=(40, 30), mode="RGB", color=(200, 30, 30), fmt="PNG") -> bytes:
    out = io.BytesIO()
    Image.new(mode, size, color).save(out, format=fmt)
    return out.getvalue()


def pdf_bytes(pages: int, size=(100, 80)) -> bytes:
    """A PDF with ``pages`` blank-ish pages of ``size`` points each."""
    images = [Image.new("RGB", size, (10 * i % 255, 120, 200)) for i in range(pages)]
    out = io.BytesIO()
    images[0].save(out, "PDF", resolution=72.0, save_all=True, append_images=images[1:])
    return out.getvalue()


@pytest.fixture
def write_file(tmp_path: Path):
    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / "in" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write
