from __future__ import annotations
import io
from typing import Callable, Collection
from PyPDF2 import PdfReader, PdfWriter

from fileconvertzz.services.page_ranges import parse_exclusions


def _copy_pages(reader: PdfReader, excluded: Collection[int]) -> bytes:
    writer = PdfWriter()
    for index, page in enumerate(reader.pages):
        if index not in excluded:
            writer.add_page(page)

    out = io.BytesIO()
    writer.write(out)
    return out.getvalue()


def exclude_pages(data: bytes, spec: str,
                  status_cb: Callable[[str], None] | None = None) -> bytes:
    """Drop the pages named by an exclusion spec like ``"1, 4-6"``.

    Remaining pages keep their order. Raises ValidationError before any page
    is copied when the spec is malformed or names every page.
    """
    reader = PdfReader(io.BytesIO(data))
    total = len(reader.pages)
    excluded = parse_exclusions(spec, total)
    if status_cb:
        status_cb(f"Excluding {len(excluded)} of {total} page(s)")
    return _copy_pages(reader, excluded)
