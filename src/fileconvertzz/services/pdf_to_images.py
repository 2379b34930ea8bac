from __future__ import annotations
import io
from typing import Callable, Iterator

import fitz  # PyMuPDF
from PIL import Image


def render_pages(
    data: bytes,
    scale: float = 2.0,
    jpeg_quality: int = 92,
    progress_cb: Callable[[int, int], None] | None = None,
) -> Iterator[tuple[int, bytes]]:
    """
    Rasterise every page of a PDF and yield ``(page_number, jpeg_bytes)``.

    Page numbers are 1-based and pages are rendered strictly in document
    order at ``scale`` (1.0 = 72 dpi).
    """
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        total = doc.page_count
        mat = fitz.Matrix(scale, scale)
        for i in range(total):
            page = doc.load_page(i)
            pix = page.get_pixmap(matrix=mat, alpha=False)
            img = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

            out = io.BytesIO()
            img.save(out, format="JPEG", quality=jpeg_quality)
            img.close()

            if progress_cb:
                progress_cb(i + 1, total)
            yield i + 1, out.getvalue()
    finally:
        doc.close()
