from __future__ import annotations
import io
from PIL import Image

from fileconvertzz.types_job_types import ImageFormat

# Modes the PNG encoder writes as-is
PNG_MODES = {"1", "L", "LA", "I", "P", "RGB", "RGBA"}


def convert_image(data: bytes, target: ImageFormat, jpeg_quality: int = 92) -> bytes:
    """
    Re-encode image bytes as PNG or JPEG.

    - PNG keeps transparency; exotic modes (CMYK, YCbCr, ...) become RGBA.
    - JPEG has no alpha channel, so the image is converted to RGB and
      encoded at ``jpeg_quality``.
    """
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        out = io.BytesIO()

        if target is ImageFormat.JPEG:
            mode, fmt, options = "RGB", "JPEG", {"quality": jpeg_quality}
            needs_convert = img.mode != "RGB"
        else:
            mode, fmt, options = "RGBA", "PNG", {}
            needs_convert = img.mode not in PNG_MODES

        if needs_convert:
            converted = img.convert(mode)
            try:
                converted.save(out, format=fmt, **options)
            finally:
                converted.close()
        else:
            img.save(out, format=fmt, **options)

    return out.getvalue()
