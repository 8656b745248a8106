"""Header block parser.

Tokenizes the header block at the start of a raw message into ordered
``(name, value)`` pairs, unfolding continuation lines as it goes, and reports
where the body begins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from messageheaders.folding import (
    CRLF,
    append_continuation,
    is_continuation,
    strip_margin_whitespace,
)
from messageheaders.name import Header, HeaderName


class ParseStatus(Enum):
    """Outcome of parsing a (possibly partial) header block."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    ERROR = "error"


@dataclass(frozen=True)
class ParseResult:
    """Status plus the offset of the first byte not consumed by the parser.

    For ``COMPLETE`` the offset is the start of the body. For ``INCOMPLETE``
    it is how far the parser got; everything from there on must be kept and
    parsed again once more bytes are available.
    """

    status: ParseStatus
    body_offset: int = 0

    def __bool__(self) -> bool:
        return self.status is ParseStatus.COMPLETE


@dataclass
class ParsedHeaderBlock:
    """Everything one parse pass produced."""

    result: ParseResult
    headers: list[Header] = field(default_factory=list)
    valid: bool = True


def decode_raw(raw: bytes | bytearray | memoryview | str) -> str:
    """Map raw bytes onto code points 0-255 so offsets stay byte offsets."""

    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("latin-1")
    raise TypeError(f"Expected bytes or str, got {type(raw).__name__}")


class HeaderBlockParser:
    """Parse header blocks, optionally enforcing a per-line length limit."""

    def __init__(self, line_length_limit: int = 0) -> None:
        self.line_length_limit = line_length_limit

    def parse(self, raw: bytes | bytearray | memoryview | str) -> ParsedHeaderBlock:
        text = decode_raw(raw)
        block = ParsedHeaderBlock(result=ParseResult(ParseStatus.INCOMPLETE))
        offset = 0

        while True:
            line_end = text.find(CRLF, offset)
            if line_end == -1:
                if self._exceeds_limit(len(text) - offset + len(CRLF)):
                    return self._fail(block, offset, "unterminated line exceeds limit")
                return self._finish(block, ParseStatus.INCOMPLETE, offset)

            if self._exceeds_limit(line_end - offset + len(CRLF)):
                return self._fail(block, offset, "line exceeds limit")

            # Blank line: end of the header block.
            if line_end == offset:
                offset += len(CRLF)
                status = ParseStatus.COMPLETE if block.valid else ParseStatus.ERROR
                return self._finish(block, status, offset)

            delimiter = text.find(":", offset, line_end)
            if delimiter == -1:
                return self._fail(block, offset, "header line has no colon")

            name = HeaderName(text[offset:delimiter])
            if not name.is_valid():
                logger.warning(
                    "Header name {name!r} contains characters outside printable ASCII",
                    name=str(name),
                )
                block.valid = False
            value = strip_margin_whitespace(text[delimiter + 1 : line_end])

            header_start = offset
            offset = line_end + len(CRLF)

            # Look ahead for continuation lines and unfold them into the value.
            while True:
                next_end = text.find(CRLF, offset)
                if next_end == -1:
                    if self._exceeds_limit(len(text) - offset + len(CRLF)):
                        return self._fail(
                            block, offset, "unterminated line exceeds limit"
                        )
                    # Cannot tell yet whether the header continues.
                    return self._finish(block, ParseStatus.INCOMPLETE, header_start)

                next_line = text[offset:next_end]
                if not is_continuation(next_line):
                    break
                if self._exceeds_limit(len(next_line) + len(CRLF)):
                    return self._fail(block, offset, "line exceeds limit")

                value = append_continuation(value, next_line)
                offset = next_end + len(CRLF)
                logger.debug("Unfolded continuation line for {name}", name=str(name))

            if "\r" in value or "\n" in value:
                logger.warning(
                    "Header {name!r} value contains a bare CR or LF", name=str(name)
                )
                block.valid = False
            block.headers.append(Header(name, strip_margin_whitespace(value)))

    def _exceeds_limit(self, line_length: int) -> bool:
        return self.line_length_limit > 0 and line_length > self.line_length_limit

    def _fail(
        self, block: ParsedHeaderBlock, offset: int, reason: str
    ) -> ParsedHeaderBlock:
        logger.warning(
            "Header block rejected at offset {offset}: {reason}",
            offset=offset,
            reason=reason,
        )
        block.valid = False
        return self._finish(block, ParseStatus.ERROR, offset)

    def _finish(
        self, block: ParsedHeaderBlock, status: ParseStatus, offset: int
    ) -> ParsedHeaderBlock:
        block.result = ParseResult(status, offset)
        logger.debug(
            "Parsed {count} headers status={status} body_offset={offset}",
            count=len(block.headers),
            status=status.value,
            offset=offset,
        )
        return block


def parse_header_block(
    raw: bytes | bytearray | memoryview | str, line_length_limit: int = 0
) -> ParsedHeaderBlock:
    """Parse the header block at the start of *raw*."""

    return HeaderBlockParser(line_length_limit).parse(raw)
