from __future__ import annotations

from fileconvertzz.errors import ValidationError


def _parse_int(text: str) -> int:
    # ASCII digits only, no sign
    text = text.strip()
    if not text.isascii() or not text.isdigit():
        raise ValueError(text)
    return int(text)


def parse_exclusions(spec: str, total_pages: int) -> frozenset[int]:
    """
    Parse a page exclusion spec like ``"1, 4-6"`` into zero-based indices.

    - Tokens are comma separated; blanks are ignored.
    - ``a-b`` is an inclusive range in either order (``6-4`` == ``4-6``).
    - Page numbers outside ``1..total_pages`` are dropped silently.
    - Excluding every page is an error: the result would be an empty document.
    """
    pages: set[int] = set()

    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue

        if "-" in token:
            start_s, _, end_s = token.partition("-")
            try:
                start, end = _parse_int(start_s), _parse_int(end_s)
            except ValueError:
                raise ValidationError("malformed range") from None
            if start > end:
                start, end = end, start
            numbers = range(max(start, 1), min(end, total_pages) + 1)
        else:
            try:
                numbers = [_parse_int(token)]
            except ValueError:
                raise ValidationError("malformed page number") from None

        pages.update(n - 1 for n in numbers if 1 <= n <= total_pages)

    if len(pages) == total_pages:
        raise ValidationError("cannot exclude all pages")

    return frozenset(pages)
