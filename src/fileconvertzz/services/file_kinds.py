from __future__ import annotations

from fileconvertzz.types_job_types import FileKind, SelectableFile

PDF_MEDIA_TYPE = "application/pdf"


def classify(file: SelectableFile) -> FileKind:
    """Classify by declared media type only; content is never sniffed."""
    media_type = file.media_type or ""
    if media_type.startswith("image/"):
        return FileKind.IMAGE
    if media_type == PDF_MEDIA_TYPE:
        return FileKind.PDF
    return FileKind.UNSUPPORTED
