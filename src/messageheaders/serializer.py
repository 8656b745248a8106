"""Render stored headers back into a raw header block."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from messageheaders.exceptions import HeaderEncodingError, HeaderLineBreakError
from messageheaders.folding import CRLF, fold_header_line
from messageheaders.name import Header


def check_no_line_breaks(*fields: str) -> None:
    """Raise ``HeaderLineBreakError`` if any field contains CR or LF."""

    for text in fields:
        if "\r" in text or "\n" in text:
            raise HeaderLineBreakError(f"Line break in header field {text!r}")


def render_header_line(header: Header) -> str:
    """Render ``Name: Value`` with its CRLF terminator, unfolded."""

    check_no_line_breaks(str(header.name), header.value)
    return f"{header.name}: {header.value}{CRLF}"


def generate_raw_headers(
    headers: Iterable[Header], line_length_limit: int = 0
) -> bytes:
    """Render *headers* in order, folding lines longer than *line_length_limit*.

    The block always ends with the empty line that separates headers from the
    body. A header that cannot be folded within the limit is left out.
    """

    parts: list[str] = []
    for header in headers:
        line = render_header_line(header)
        if line_length_limit <= 0:
            parts.append(line)
            continue

        folded = fold_header_line(line, line_length_limit)
        if not folded:
            logger.warning(
                "Dropping header {name}: cannot fold within {limit} bytes",
                name=str(header.name),
                limit=line_length_limit,
            )
        parts.extend(folded)
    parts.append(CRLF)

    raw = "".join(parts)
    try:
        return raw.encode("latin-1")
    except UnicodeEncodeError as exc:
        unencodable = exc.object[exc.start : exc.end]
        raise HeaderEncodingError(
            f"Header block contains characters outside latin-1: {unencodable!r}"
        ) from exc
