"""Tests for header line folding and unfolding helpers."""

import pytest

from messageheaders.folding import (
    append_continuation,
    find_fold_break,
    fold_header_line,
    is_continuation,
    strip_margin_whitespace,
)
from messageheaders.parser import parse_header_block


@pytest.mark.parametrize(
    ("line", "limit", "expected"),
    [
        ("X: Hello, World!\r\n", 12, ["X: Hello,\r\n", " World!\r\n"]),
        (
            "X: This is even longer!\r\n",
            12,
            ["X: This is\r\n", " even\r\n", " longer!\r\n"],
        ),
        ("X: short\r\n", 12, ["X: short\r\n"]),
        ("X: aaadadazdadcvbfdfvdf\r\n", 12, []),
    ],
)
def test_fold_header_line(line, limit, expected):
    assert fold_header_line(line, limit) == expected


def test_fold_without_limit_returns_line_unchanged():
    assert fold_header_line("X: " + "a " * 600 + "\r\n", 0) == ["X: " + "a " * 600 + "\r\n"]


def test_folded_lines_respect_limit():
    line = "Subject: " + " ".join(f"word{i}" for i in range(40)) + "\r\n"

    folded = fold_header_line(line, 30)

    assert folded
    assert all(len(part) <= 30 for part in folded)
    assert all(part.endswith("\r\n") for part in folded)
    assert all(part.startswith(" ") for part in folded[1:])


def test_first_whitespace_is_never_a_break_point():
    # The only whitespace within reach is the one after the colon.
    assert find_fold_break("X: abcdefghij klm\r\n", 0, 12, first_segment=True) is None


def test_break_uses_last_whitespace_within_limit():
    assert find_fold_break("X: ab cd ef gh\r\n", 0, 12, first_segment=True) == 8


def test_continuation_segment_reserves_prefix():
    line = "X: a bcdefgh ijk\r\n"
    # From offset 5 the rest is 13 bytes; with the prefix it needs 14.
    assert find_fold_break(line, 5, 14, first_segment=False) == len(line)
    assert find_fold_break(line, 5, 13, first_segment=False) == 12


def test_continuation_segment_has_no_skipped_whitespace():
    assert find_fold_break("X: a bc de fghij\r\n", 5, 7, first_segment=False) == 7


def test_unfolding_folded_value_restores_it():
    value = " ".join(f"token{i}" for i in range(25))
    line = f"Subject: {value}\r\n"

    folded = "".join(fold_header_line(line, 40)) + "\r\n"
    block = parse_header_block(folded, line_length_limit=40)

    assert [(str(h.name), h.value) for h in block.headers] == [("Subject", value)]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("X: a" + " " * 20 + "b\r\n", ["X: a      \r\n", " b\r\n"]),
        ("X: alpha beta" + " " * 10 + "\r\n", ["X: alpha\r\n", " beta     \r\n"]),
        (
            "X: alpha\t \t beta gamma\r\n",
            ["X: alpha\t \r\n", " beta\r\n", " gamma\r\n"],
        ),
    ],
)
def test_whitespace_run_collapses_into_the_break(line, expected):
    folded = fold_header_line(line, 12)

    assert folded == expected
    assert all(len(part) <= 12 for part in folded)
    assert all(part[: -len("\r\n")].strip(" \t") for part in folded)


def test_value_with_whitespace_run_survives_refolding():
    folded = "".join(fold_header_line("X: a" + " " * 20 + "b\r\n", 12)) + "\r\n"

    block = parse_header_block(folded, line_length_limit=12)

    assert [(str(h.name), h.value) for h in block.headers] == [("X", "a b")]


def test_unfoldable_line_with_one_long_token_later():
    line = "X: ok " + "z" * 20 + "\r\n"

    assert fold_header_line(line, 12) == []


@pytest.mark.parametrize(
    ("line", "expected"),
    [(" x", True), ("\tx", True), ("x", False), ("", False)],
)
def test_is_continuation(line, expected):
    assert is_continuation(line) is expected


def test_append_continuation_uses_single_space():
    assert append_continuation("This", "   is a test") == "This is a test"
    assert append_continuation("", "\tvalue") == " value"


def test_strip_margin_whitespace():
    assert strip_margin_whitespace(" \t a b \t ") == "a b"
    assert strip_margin_whitespace(" \t ") == ""
