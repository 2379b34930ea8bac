from __future__ import annotations
from typing import Any, Iterable, Mapping, Sequence

from fileconvertzz.errors import SelectionError
from fileconvertzz.services.file_kinds import classify
from fileconvertzz.types_job_types import (
    ConversionJob,
    FileKind,
    ImageFormat,
    Operation,
    SelectableFile,
)


def _of_kind(files: Iterable[SelectableFile], kind: FileKind) -> tuple[SelectableFile, ...]:
    return tuple(f for f in files if classify(f) is kind)


def resolve(
    operation: Operation,
    queue: Sequence[SelectableFile],
    selection: Iterable[int],
    parameters: Mapping[str, Any] | None = None,
) -> ConversionJob:
    """
    Validate a request against a queue snapshot and build the job for it.

    Inputs keep queue order. Merge takes every PDF in the queue, the other
    operations take only the selected files. Nothing is read or mutated.
    """
    operation = Operation(operation)
    params = dict(parameters or {})

    indices = sorted(set(selection))
    if not indices:
        raise SelectionError("nothing selected")
    if indices[0] < 0 or indices[-1] >= len(queue):
        raise SelectionError("stale selection")
    selected = [queue[i] for i in indices]

    if operation is Operation.CONVERT_IMAGE_FORMAT:
        try:
            params["target"] = ImageFormat(params.get("target"))
        except ValueError:
            raise ValueError(f"unknown target format: {params.get('target')!r}") from None
        inputs = _of_kind(selected, FileKind.IMAGE)
        if not inputs:
            raise SelectionError("no images selected")

    elif operation is Operation.IMAGES_TO_PDF:
        inputs = _of_kind(selected, FileKind.IMAGE)
        if not inputs:
            raise SelectionError("no images selected")

    elif operation in (Operation.PDF_TO_IMAGES, Operation.EXCLUDE_PAGES):
        inputs = _of_kind(selected, FileKind.PDF)
        if len(inputs) != 1:
            raise SelectionError("select exactly one PDF")
        if operation is Operation.EXCLUDE_PAGES:
            params["exclude"] = str(params.get("exclude") or "")

    elif operation is Operation.MERGE_PDFS:
        inputs = _of_kind(queue, FileKind.PDF)
        if len(inputs) < 2:
            raise SelectionError("need at least two PDFs")

    else:  # pragma: no cover
        raise ValueError(f"unsupported operation: {operation}")

    return ConversionJob(operation=operation, input_files=inputs, parameters=params)
