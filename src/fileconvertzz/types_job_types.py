from __future__ import annotations
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping


class FileKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"


class Operation(str, Enum):
    CONVERT_IMAGE_FORMAT = "convert_image_format"
    IMAGES_TO_PDF = "images_to_pdf"
    PDF_TO_IMAGES = "pdf_to_images"
    MERGE_PDFS = "merge_pdfs"
    EXCLUDE_PAGES = "exclude_pages"


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def media_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return ".png" if self is ImageFormat.PNG else ".jpg"


def _no_content() -> bytes:
    return b""


@dataclass(frozen=True)
class SelectableFile:
    """One queued file. ``content`` is a loader so bytes are read lazily."""

    name: str
    media_type: str = ""
    size_bytes: int = 0
    content: Callable[[], bytes] = field(default=_no_content, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("file name must not be empty")
        if self.size_bytes < 0:
            raise ValueError("file size must be non-negative")

    def read(self) -> bytes:
        return self.content()

    @classmethod
    def from_path(cls, path: Path) -> "SelectableFile":
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            media_type=media_type or "",
            size_bytes=path.stat().st_size,
            content=path.read_bytes,
        )

    @classmethod
    def from_bytes(cls, name: str, data: bytes, media_type: str = "") -> "SelectableFile":
        return cls(name=name, media_type=media_type, size_bytes=len(data), content=lambda: data)


@dataclass(frozen=True)
class ConversionJob:
    operation: Operation
    input_files: tuple[SelectableFile, ...]
    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OutputFile:
    name: str
    media_type: str
    data: bytes = field(repr=False)


@dataclass
class RenderSettings:
    jpeg_quality: int
    raster_scale: float
