"""Parse and generate the header block of internet messages."""

from messageheaders.config import HeaderStoreConfig
from messageheaders.exceptions import (
    HeaderEncodingError,
    HeaderError,
    HeaderLineBreakError,
)
from messageheaders.folding import fold_header_line
from messageheaders.message import InternetMessage
from messageheaders.name import Header, HeaderName
from messageheaders.parser import ParseResult, ParseStatus, parse_header_block
from messageheaders.serializer import generate_raw_headers
from messageheaders.store import HeaderStore

__all__ = [
    "Header",
    "HeaderEncodingError",
    "HeaderError",
    "HeaderLineBreakError",
    "HeaderName",
    "HeaderStore",
    "HeaderStoreConfig",
    "InternetMessage",
    "ParseResult",
    "ParseStatus",
    "fold_header_line",
    "generate_raw_headers",
    "parse_header_block",
]
