from __future__ import annotations
import io
from typing import Iterable
from PIL import Image

# 72 dpi makes one image pixel one PDF point, so each page matches its image
PAGE_DPI = 72.0


def _flatten(img: Image.Image) -> Image.Image:
    """Return an RGB copy with any transparency composited onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        canvas = Image.new("RGB", rgba.size, (255, 255, 255))
        canvas.paste(rgba, mask=rgba.getchannel("A"))
        return canvas
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def images_to_pdf(images: Iterable[bytes]) -> bytes:
    """
    Build one PDF with a page per image, in the given order.

    Every page is exactly the size of its image; images are not scaled,
    margined or centred on a fixed paper size.
    """
    pages: list[Image.Image] = []
    try:
        for data in images:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                page = _flatten(img)
                # _flatten may hand back the opened image itself
                pages.append(page.copy() if page is img else page)

        if not pages:
            raise ValueError("No images to convert")

        out = io.BytesIO()
        first, rest = pages[0], pages[1:]
        first.save(out, "PDF", resolution=PAGE_DPI, save_all=True, append_images=rest)
        return out.getvalue()
    finally:
        for page in pages:
            page.close()
