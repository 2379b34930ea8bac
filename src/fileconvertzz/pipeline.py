from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Sequence

from .config import Settings
from .errors import ConversionError, ConvertzzError
from .logging_setup import get_logger
from .types_job_types import (
    ConversionJob,
    ImageFormat,
    Operation,
    OutputFile,
    RenderSettings,
    SelectableFile,
)
from .services import file_names
from .services.image_convert import convert_image
from .services.image_to_pdf import images_to_pdf
from .services.output_writer import save_outputs
from .services.pdf_merge import merge_pdfs
from .services.pdf_pages import exclude_pages
from .services.pdf_to_images import render_pages
from .services.resolver import resolve

PDF = "application/pdf"
JPEG = "image/jpeg"


def _convert_image_format(job, render, status_cb, progress_cb) -> list[OutputFile]:
    target: ImageFormat = job.parameters["target"]
    outputs: list[OutputFile] = []
    total = len(job.input_files)
    for idx, f in enumerate(job.input_files, start=1):
        if status_cb:
            status_cb(f"Converting ({idx}/{total}): {f.name} → {target.value.upper()}")
        data = convert_image(f.read(), target, render.jpeg_quality)
        outputs.append(OutputFile(file_names.converted_image_name(f.name, target), target.media_type, data))
        if progress_cb:
            progress_cb(idx, total)
    return outputs


def _images_to_pdf(job, render, status_cb, progress_cb) -> list[OutputFile]:
    if status_cb:
        status_cb(f"Packing {len(job.input_files)} image(s) into a PDF")
    data = images_to_pdf(f.read() for f in job.input_files)
    return [OutputFile(file_names.IMAGES_TO_PDF_NAME, PDF, data)]


def _pdf_to_images(job, render, status_cb, progress_cb) -> list[OutputFile]:
    (source,) = job.input_files
    if status_cb:
        status_cb(f"Rendering pages of {source.name}")
    return [
        OutputFile(file_names.page_image_name(source.name, page), JPEG, data)
        for page, data in render_pages(
            source.read(),
            scale=render.raster_scale,
            jpeg_quality=render.jpeg_quality,
            progress_cb=progress_cb,
        )
    ]


def _merge_pdfs(job, render, status_cb, progress_cb) -> list[OutputFile]:
    data = merge_pdfs(job.input_files, status_cb=status_cb, progress_cb=progress_cb)
    return [OutputFile(file_names.MERGED_PDF_NAME, PDF, data)]


def _exclude_pages(job, render, status_cb, progress_cb) -> list[OutputFile]:
    (source,) = job.input_files
    data = exclude_pages(source.read(), job.parameters.get("exclude", ""), status_cb=status_cb)
    return [OutputFile(file_names.split_pdf_name(source.name), PDF, data)]


HANDLERS = {
    Operation.CONVERT_IMAGE_FORMAT: _convert_image_format,
    Operation.IMAGES_TO_PDF: _images_to_pdf,
    Operation.PDF_TO_IMAGES: _pdf_to_images,
    Operation.MERGE_PDFS: _merge_pdfs,
    Operation.EXCLUDE_PAGES: _exclude_pages,
}


def run_job(
    job: ConversionJob,
    settings: Settings | None = None,
    status_cb: Callable[[str], None] | None = None,
    progress_cb: Callable[[int, int], None] | None = None,
) -> list[OutputFile]:
    """Dispatch a resolved job and return its outputs, all held in memory.

    Validation errors pass through untouched; any other failure from the
    image/PDF libraries is raised as ConversionError.
    """
    settings = settings or Settings()
    logger = get_logger(logfile=settings.log_file, level=settings.log_level)
    render: RenderSettings = settings.as_render()

    names = ", ".join(f.name for f in job.input_files)
    logger.info("Running %s on %d file(s): %s", job.operation.value, len(job.input_files), names)

    try:
        outputs = HANDLERS[job.operation](job, render, status_cb, progress_cb)
    except ConvertzzError as exc:
        logger.warning("%s rejected: %s", job.operation.value, exc)
        raise
    except Exception as exc:
        logger.error("%s failed: %s", job.operation.value, exc)
        raise ConversionError(str(exc)) from exc

    for out in outputs:
        logger.debug("Produced %s (%d bytes)", out.name, len(out.data))
    return outputs


def run_action(
    operation: Operation,
    queue: Sequence[SelectableFile],
    selection: Iterable[int],
    out_dir: Path,
    settings: Settings | None = None,
    parameters: Mapping[str, Any] | None = None,
    status_cb: Callable[[str], None] | None = None,
    progress_cb: Callable[[int, int], None] | None = None,
) -> dict:
    """
    Resolve, run and save one request end to end.

    Callers must not run two actions at once against the same queue: the
    queue and selection passed in are snapshots and are never modified.
    """
    settings = settings or Settings()
    logger = get_logger(logfile=settings.log_file, level=settings.log_level)

    job = resolve(operation, queue, selection, parameters)
    outputs = run_job(job, settings, status_cb=status_cb, progress_cb=progress_cb)

    if status_cb:
        status_cb(f"Saving {len(outputs)} file(s) to {out_dir}")
    try:
        written = save_outputs(outputs, Path(out_dir))
    except OSError as exc:
        logger.error("Saving outputs failed: %s", exc)
        raise ConversionError(f"Could not save output files: {exc}") from exc

    report = {
        "operation": job.operation.value,
        "inputs": [f.name for f in job.input_files],
        "output_dir": str(out_dir),
        "outputs": [str(p) for p in written],
    }

    logger.info("Conversion complete: %s", report)
    return report
