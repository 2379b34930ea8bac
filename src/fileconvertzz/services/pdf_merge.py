from __future__ import annotations
import io
from typing import Callable, Sequence
from PyPDF2 import PdfReader, PdfWriter

from fileconvertzz.types_job_types import SelectableFile


def merge_pdfs(inputs: Sequence[SelectableFile],
               status_cb: Callable[[str], None] | None = None,
               progress_cb: Callable[[int, int], None] | None = None) -> bytes:
    """
    Merge PDFs into one document, every page of every input in order.
    progress_cb(done, total) is called for each appended PDF.
    An unreadable or encrypted input aborts the whole merge.
    """
    writer = PdfWriter()
    total = len(inputs)
    for done, f in enumerate(inputs, start=1):
        if status_cb:
            status_cb(f"Merging: {f.name}")
        reader = PdfReader(io.BytesIO(f.read()))
        for page in reader.pages:
            writer.add_page(page)
        if progress_cb:
            progress_cb(done, total)

    out = io.BytesIO()
    writer.write(out)
    return out.getvalue()
