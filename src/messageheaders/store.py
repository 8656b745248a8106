"""Ordered, case-insensitive collection of message headers.

Internet messages (RFC 5322 e-mail, RFC 7230 HTTP, RFC 3261 SIP) share the
same header block syntax. ``HeaderStore`` keeps the headers of one message in
their original order, repeated names included, and converts between that
list and the raw ``Name: Value`` CRLF form.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from loguru import logger

from messageheaders.config import HeaderStoreConfig
from messageheaders.folding import strip_margin_whitespace
from messageheaders.name import Header, HeaderName
from messageheaders.parser import HeaderBlockParser, ParseResult
from messageheaders.serializer import check_no_line_breaks, generate_raw_headers
from messageheaders.settings import settings

NameLike = HeaderName | str
ValueLike = str | bytes | bytearray

TOKEN_DELIMITER = ","


def _decode_value(value: ValueLike) -> str:
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("latin-1")
    elif not isinstance(value, str):
        raise TypeError(
            f"Header value must be str or bytes, got {type(value).__name__}"
        )
    check_no_line_breaks(value)
    return value


def _decode_values(value: ValueLike | Sequence[ValueLike]) -> str | list[str]:
    """Return one decoded value, or a list when a sequence of values was given."""

    if isinstance(value, (str, bytes, bytearray)):
        return _decode_value(value)
    return [_decode_value(item) for item in value]


def _key(name: NameLike) -> HeaderName:
    key = HeaderName(name)
    check_no_line_breaks(str(key))
    return key


class HeaderStore:
    """Headers of a single message plus the line-length limit applied to them.

    A store starts empty (or with the given headers) and is filled by
    ``parse_raw_message``. Lookups compare names case-insensitively and
    return values in insertion order. Once any parse sees questionable input
    ``is_valid`` stays False for the lifetime of the store.
    """

    def __init__(
        self,
        headers: Sequence[Header] = (),
        *,
        line_length_limit: int | None = None,
    ) -> None:
        if line_length_limit is None:
            line_length_limit = settings.line_length_limit
        self._config = HeaderStoreConfig(line_length_limit=line_length_limit)
        self._headers: list[Header] = list(headers)
        self._valid = True

    def __len__(self) -> int:
        return len(self._headers)

    def __iter__(self) -> Iterator[Header]:
        return iter(list(self._headers))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (HeaderName, str)):
            return False
        return self.has_header(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderStore):
            return NotImplemented
        return self._headers == other._headers

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{str(h.name)!r}: {h.value!r}" for h in self._headers)
        return f"HeaderStore([{items}])"

    @property
    def line_length_limit(self) -> int:
        return self._config.line_length_limit

    def set_line_limit(self, line_length_limit: int) -> None:
        """Limit every physical line, CRLF included, for future parses and output."""

        self._config.line_length_limit = line_length_limit

    def is_valid(self) -> bool:
        return self._valid

    def parse_raw_message(
        self, raw: bytes | bytearray | memoryview | str
    ) -> ParseResult:
        """Parse the header block at the start of *raw* and append its headers.

        Returns the parse status and the offset where the body begins. Headers
        parsed before an error, or before the point where more input is
        needed, are kept.
        """

        block = HeaderBlockParser(self.line_length_limit).parse(raw)
        self._headers.extend(block.headers)
        if not block.valid:
            self._valid = False
        return block.result

    def generate_raw_headers(self) -> bytes:
        """Render the headers, folded to the line-length limit, plus the blank line."""

        return generate_raw_headers(self._headers, self.line_length_limit)

    def get_all(self) -> list[Header]:
        return list(self._headers)

    def has_header(self, name: NameLike) -> bool:
        key = HeaderName(name)
        return any(header.name == key for header in self._headers)

    def get_header_value(self, name: NameLike) -> str:
        """Return the value of the first header called *name*, or ``""``."""

        key = HeaderName(name)
        for header in self._headers:
            if header.name == key:
                return header.value
        return ""

    def get_header_multi_values(self, name: NameLike) -> list[str]:
        """Return the values of every header called *name*, in order."""

        key = HeaderName(name)
        return [header.value for header in self._headers if header.name == key]

    def get_header_tokens(self, name: NameLike) -> list[str]:
        """Return the comma-separated tokens of every header called *name*.

        ``Accept: a, b`` and two lines ``Accept: a`` / ``Accept: b`` both
        yield ``["a", "b"]``.
        """

        tokens: list[str] = []
        for value in self.get_header_multi_values(name):
            tokens.extend(
                strip_margin_whitespace(token) for token in value.split(TOKEN_DELIMITER)
            )
        return tokens

    def set_header(
        self,
        name: NameLike,
        value: ValueLike | Sequence[ValueLike],
        *,
        one_line: bool = False,
    ) -> None:
        """Give *name* the given value(s), replacing every existing line for it.

        With a single value the first matching line keeps its position and
        takes the new value, later matches are removed, and a new line is
        appended if there was no match. With a sequence of values they are
        joined by commas into one line when *one_line* is true, otherwise the
        first replaces as above and the rest are appended one line each. An
        empty sequence does nothing.
        """

        key = _key(name)
        decoded = _decode_values(value)
        if isinstance(decoded, list):
            if not decoded:
                return
            if one_line:
                self.set_header(key, TOKEN_DELIMITER.join(decoded))
                return
            self.set_header(key, decoded[0])
            self.add_header(key, decoded[1:])
            return

        updated: list[Header] = []
        replaced = False
        for header in self._headers:
            if header.name != key:
                updated.append(header)
            elif not replaced:
                updated.append(Header(header.name, decoded))
                replaced = True
        if not replaced:
            updated.append(Header(key, decoded))
        self._headers = updated
        logger.debug("Set header {name}", name=str(key))

    def add_header(
        self,
        name: NameLike,
        value: ValueLike | Sequence[ValueLike],
        *,
        one_line: bool = False,
    ) -> None:
        """Append *name* with the given value(s), never touching existing lines."""

        key = _key(name)
        decoded = _decode_values(value)
        if not isinstance(decoded, list):
            self._headers.append(Header(key, decoded))
        elif decoded and one_line:
            self._headers.append(Header(key, TOKEN_DELIMITER.join(decoded)))
        else:
            self._headers.extend(Header(key, extra) for extra in decoded)

    def remove_header(self, name: NameLike) -> None:
        """Remove every line called *name*."""

        key = HeaderName(name)
        self._headers = [header for header in self._headers if header.name != key]
