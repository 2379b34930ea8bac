from __future__ import annotations
import re

from fileconvertzz.types_job_types import ImageFormat

IMAGES_TO_PDF_NAME = "converted.pdf"
MERGED_PDF_NAME = "merged.pdf"


def strip_extension(filename: str) -> str:
    # Remove the last ".ext" only: "scan.v2.png" -> "scan.v2"
    return re.sub(r"\.[^/.]+$", "", filename)


def pdf_stem(filename: str) -> str:
    if filename.lower().endswith(".pdf"):
        return filename[:-4]
    return filename


def converted_image_name(filename: str, target: ImageFormat) -> str:
    return strip_extension(filename) + target.extension


def page_image_name(filename: str, page_number: int) -> str:
    return f"{pdf_stem(filename)}-page-{page_number}.jpg"


def split_pdf_name(filename: str) -> str:
    return f"{pdf_stem(filename)}-split.pdf"
