"""Whole internet message: a header block followed by an opaque body."""

from __future__ import annotations

import re

from messageheaders.name import HeaderName
from messageheaders.parser import ParseResult, ParseStatus, decode_raw
from messageheaders.store import HeaderStore

# Bare CR or bare LF anywhere in the body; only CRLF pairs are allowed.
_BARE_LINE_BREAK_PATTERN = re.compile(r"\r(?!\n)|(?<!\r)\n")

# RFC 5322 §2.1.1: 998 characters per line plus CRLF.
DEFAULT_LINE_LENGTH_LIMIT = 1000


class InternetMessage:
    """Pair a ``HeaderStore`` with the body that follows the header block."""

    def __init__(self, *, line_length_limit: int = DEFAULT_LINE_LENGTH_LIMIT) -> None:
        self.headers = HeaderStore(line_length_limit=line_length_limit)
        self.body = ""
        self.last_result = ParseResult(ParseStatus.INCOMPLETE)

    def parse_from_string(self, raw: bytes | bytearray | memoryview | str) -> bool:
        """Parse *raw* into headers and body.

        Returns True only when the header block is complete and valid and
        the body uses CRLF line endings throughout.
        """

        text = decode_raw(raw)
        self.last_result = self.headers.parse_raw_message(text)
        if self.last_result.status is not ParseStatus.COMPLETE:
            return False

        self.body = text[self.last_result.body_offset :]
        return not _BARE_LINE_BREAK_PATTERN.search(self.body)

    def has_header(self, name: HeaderName | str) -> bool:
        return self.headers.has_header(name)

    def get_header_value(self, name: HeaderName | str) -> str:
        return self.headers.get_header_value(name)

    def generate_raw_message(self) -> bytes:
        return self.headers.generate_raw_headers() + self.body.encode("latin-1")
