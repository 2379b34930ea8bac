from __future__ import annotations
from pathlib import Path
from typing import List, Optional

import typer

from .config import Settings
from .errors import ConvertzzError
from .pipeline import run_action
from .types_job_types import ImageFormat, Operation, SelectableFile

app = typer.Typer(help="Convert images and PDFs: re-encode, pack, rasterise, merge, drop pages.")

DEFAULT_CONFIG = Path("config.yaml")

FilesArg = typer.Argument(..., exists=True, dir_okay=False, readable=True)
OutDirOpt = typer.Option(None, "--output-dir", "-o", file_okay=False, help="Destination folder.")
ConfigOpt = typer.Option(DEFAULT_CONFIG, "--config", help="YAML settings file.")


def _run(
    operation: Operation,
    files: List[Path],
    output_dir: Optional[Path],
    config: Path,
    parameters: dict | None = None,
) -> None:
    """Queue every given file, select all of them and run the operation."""
    settings = Settings.from_file(config)
    queue = [SelectableFile.from_path(p) for p in files]
    out_dir = output_dir or settings.output_dir

    try:
        report = run_action(
            operation,
            queue,
            range(len(queue)),
            out_dir,
            settings=settings,
            parameters=parameters,
            status_cb=lambda msg: typer.echo(msg, err=True),
        )
    except ConvertzzError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for path in report["outputs"]:
        typer.echo(path)


@app.command("to-png")
def to_png(files: List[Path] = FilesArg, output_dir: Optional[Path] = OutDirOpt, config: Path = ConfigOpt):
    """Convert images to PNG."""
    _run(Operation.CONVERT_IMAGE_FORMAT, files, output_dir, config, {"target": ImageFormat.PNG})


@app.command("to-jpeg")
def to_jpeg(files: List[Path] = FilesArg, output_dir: Optional[Path] = OutDirOpt, config: Path = ConfigOpt):
    """Convert images to JPEG."""
    _run(Operation.CONVERT_IMAGE_FORMAT, files, output_dir, config, {"target": ImageFormat.JPEG})


@app.command("images-to-pdf")
def images_to_pdf(files: List[Path] = FilesArg, output_dir: Optional[Path] = OutDirOpt, config: Path = ConfigOpt):
    """Pack images into converted.pdf, one page per image."""
    _run(Operation.IMAGES_TO_PDF, files, output_dir, config)


@app.command("pdf-to-jpeg")
def pdf_to_jpeg(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    output_dir: Optional[Path] = OutDirOpt,
    config: Path = ConfigOpt,
):
    """Render every page of a PDF to <name>-page-<N>.jpg."""
    _run(Operation.PDF_TO_IMAGES, [file], output_dir, config)


@app.command()
def merge(files: List[Path] = FilesArg, output_dir: Optional[Path] = OutDirOpt, config: Path = ConfigOpt):
    """Merge PDFs, in the given order, into merged.pdf."""
    _run(Operation.MERGE_PDFS, files, output_dir, config)


@app.command()
def exclude(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    pages: str = typer.Option(..., "--pages", "-p", help='Pages or ranges to drop, e.g. "1, 4-6".'),
    output_dir: Optional[Path] = OutDirOpt,
    config: Path = ConfigOpt,
):
    """Write <name>-split.pdf without the given pages."""
    _run(Operation.EXCLUDE_PAGES, [file], output_dir, config, {"exclude": pages})


if __name__ == "__main__":
    app()
