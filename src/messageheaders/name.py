"""Case-insensitive header names and the name/value pairs built from them.

Header names compare with ASCII-only case folding: ``Content-Type`` equals
``content-type`` but characters outside ASCII are compared exactly, so names
of different lengths are never equal.
"""

from __future__ import annotations

import string
from collections.abc import Iterator
from dataclasses import dataclass

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# Printable ASCII, excluding space (RFC 5322 §2.2 ftext range).
NAME_CHAR_MIN = 33
NAME_CHAR_MAX = 126


def fold_ascii_case(text: str) -> str:
    """Lowercase ASCII letters only, leaving every other character untouched."""

    return text.translate(_ASCII_LOWER)


class HeaderName:
    """Immutable header name with case-insensitive equality and hashing."""

    __slots__ = ("_name", "_folded")

    def __init__(self, name: str | bytes | bytearray | HeaderName = "") -> None:
        if isinstance(name, HeaderName):
            text = name._name
        elif isinstance(name, (bytes, bytearray)):
            text = bytes(name).decode("latin-1")
        elif isinstance(name, str):
            text = name
        else:
            raise TypeError(
                f"HeaderName expects str or bytes, got {type(name).__name__}"
            )
        object.__setattr__(self, "_name", text)
        object.__setattr__(self, "_folded", fold_ascii_case(text))

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError("HeaderName is immutable")

    def __reduce__(self) -> tuple[type[HeaderName], tuple[str]]:
        return (HeaderName, (self._name,))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderName):
            other_folded = other._folded
        elif isinstance(other, str):
            other_folded = fold_ascii_case(other)
        else:
            return NotImplemented
        if len(self._folded) != len(other_folded):
            return False
        return self._folded == other_folded

    def __hash__(self) -> int:
        return hash(self._folded)

    def __iter__(self) -> Iterator[str]:
        return iter(self._name)

    def __len__(self) -> int:
        return len(self._name)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"HeaderName({self._name!r})"

    def is_valid(self) -> bool:
        """Return True if every character is printable ASCII other than space."""

        return all(NAME_CHAR_MIN <= ord(char) <= NAME_CHAR_MAX for char in self._name)


@dataclass(frozen=True)
class Header:
    """One ``Name: Value`` line, stored with its value already unfolded."""

    name: HeaderName
    value: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, HeaderName):
            object.__setattr__(self, "name", HeaderName(self.name))
