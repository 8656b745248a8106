"""Header line folding and unfolding.

Folding splits a rendered ``Name: Value`` line that is longer than the
configured limit into a first line plus continuation lines, each continuation
starting with a single space (RFC 5322 §2.2.3). Unfolding is the inverse used
while parsing: a continuation line is joined to the value with one space.
"""

from __future__ import annotations

from loguru import logger

# RFC 5322 "WSP": the characters stripped from value margins and accepted as
# the first character of a continuation line.
WSP = " \t"
CRLF = "\r\n"
CONTINUATOR = " "


def strip_margin_whitespace(text: str) -> str:
    """Remove leading and trailing spaces and tabs."""

    return text.strip(WSP)


def is_continuation(line: str) -> bool:
    """Return True if *line* (without its terminator) continues the previous one."""

    return bool(line) and line[0] in WSP


def append_continuation(value: str, continuation: str) -> str:
    """Join a continuation line onto an accumulated value with a single space."""

    return f"{value} {continuation.lstrip(WSP)}"


def find_fold_break(
    line: str, start: int, limit: int, *, first_segment: bool
) -> int | None:
    """Find where the segment of *line* beginning at *start* should end.

    *line* is the full rendered header line including its CRLF terminator.
    The returned offset is exclusive; the whitespace character found there is
    dropped and the next segment begins right after it. ``len(line)`` is
    returned when the rest of the line already fits.

    The first segment reserves two characters for CRLF and never breaks on
    the first whitespace it sees (the one separating ``Name:`` from the
    value). Later segments reserve one more character for the continuation
    prefix. ``None`` means no break point keeps the segment within *limit*.
    """

    prefix = 0 if first_segment else len(CONTINUATOR)
    if len(line) - start + prefix <= limit:
        return len(line)

    reserved = len(CRLF) + prefix
    skip_whitespace = first_segment
    break_offset: int | None = None
    for index in range(start, start + limit - reserved + 1):
        if line[index] not in WSP:
            continue
        if skip_whitespace:
            skip_whitespace = False
        elif index > start:
            break_offset = index
    return break_offset


def fold_header_line(line: str, limit: int) -> list[str]:
    """Split one CRLF-terminated header line so no output line exceeds *limit*.

    Every returned line ends with CRLF and every line after the first begins
    with a single space. Whitespace runs at a break collapse into the break,
    so no continuation line is blank. An empty list is returned when the line
    cannot be folded, e.g. a value with no whitespace longer than the limit.
    """

    if limit <= 0:
        return [line]

    segments: list[str] = []
    start = 0
    while start < len(line):
        first_segment = start == 0
        break_offset = find_fold_break(line, start, limit, first_segment=first_segment)
        if break_offset is None:
            logger.debug(
                "No fold point within limit={limit} at offset={offset}",
                limit=limit,
                offset=start,
            )
            return []

        part = line[start:break_offset]
        if not first_segment:
            part = CONTINUATOR + part
        if not part.endswith(CRLF):
            part += CRLF
        segments.append(part)

        # Drop the rest of a whitespace run so no continuation line is blank.
        start = break_offset + 1
        while start < len(line) and line[start] in WSP:
            start += 1
        if line.startswith(CRLF, start):
            break

    return segments
