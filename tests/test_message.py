"""Tests for the message envelope around the header store."""

import pytest

from messageheaders.message import DEFAULT_LINE_LENGTH_LIMIT, InternetMessage
from messageheaders.parser import ParseStatus

HEADERS = (
    b"Date: Mon, 27 Jul 2009 12:28:53 GMT\r\n"
    b"Server: Apache\r\n"
    b"Content-Type: text/plain\r\n"
    b"\r\n"
)


def test_parse_headers_and_body():
    message = InternetMessage()

    assert message.parse_from_string(HEADERS + b"Hello World!\r\nSecond line\r\n")
    assert message.has_header("server")
    assert message.get_header_value("Content-Type") == "text/plain"
    assert message.body == "Hello World!\r\nSecond line\r\n"
    assert message.last_result.body_offset == len(HEADERS)


def test_empty_body():
    message = InternetMessage()

    assert message.parse_from_string(HEADERS)
    assert message.body == ""


@pytest.mark.parametrize(
    "body",
    [b"bare LF\n", b"bare CR\rhere\r\n", b"trailing CR\r", b"double\r\r\n"],
)
def test_body_must_use_crlf(body):
    assert not InternetMessage().parse_from_string(HEADERS + body)


def test_incomplete_headers_fail():
    message = InternetMessage()

    assert not message.parse_from_string(b"Server: Apache\r\n")
    assert message.last_result.status is ParseStatus.INCOMPLETE
    assert message.body == ""


def test_invalid_header_name_fails():
    assert not InternetMessage().parse_from_string(b"Bad Name: x\r\n\r\n")


def test_line_limit_is_forwarded():
    message = InternetMessage(line_length_limit=10)

    assert not message.parse_from_string(b"Server: Apache\r\n\r\n")
    assert message.last_result.status is ParseStatus.ERROR


def test_default_line_limit_rejects_overlong_header():
    message = InternetMessage()

    assert message.headers.line_length_limit == DEFAULT_LINE_LENGTH_LIMIT == 1000
    assert not message.parse_from_string(b"X-Long: " + b"a" * 1200 + b"\r\n\r\nbody")
    assert message.last_result.status is ParseStatus.ERROR


def test_default_line_limit_accepts_998_characters():
    # 8 + 990 = 998 characters before the CRLF.
    raw = b"X-Long: " + b"a" * 990 + b"\r\n\r\nbody"
    message = InternetMessage()

    assert message.parse_from_string(raw)
    assert message.get_header_value("X-Long") == "a" * 990
    assert message.body == "body"


def test_zero_line_limit_disables_the_check():
    raw = b"X-Long: " + b"a" * 1200 + b"\r\n\r\nbody"

    assert InternetMessage(line_length_limit=0).parse_from_string(raw)


def test_generate_raw_message_round_trips():
    raw = HEADERS + b"payload\r\n"
    message = InternetMessage()
    message.parse_from_string(raw)

    assert message.generate_raw_message() == raw
