class HeaderError(Exception):
    """Base class for errors raised by messageheaders."""


class HeaderEncodingError(HeaderError, ValueError):
    """A header name or value cannot be rendered as raw header bytes."""


class HeaderLineBreakError(HeaderError, ValueError):
    """A header name or value contains CR or LF and would split its line."""
