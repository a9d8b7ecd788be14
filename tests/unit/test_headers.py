"""
Unit tests for header block and body extraction.
"""

import pytest

from httpstream.core.scanner import NEED_MORE
from httpstream.http.errors import ContentLengthError, MalformedHeaderError
from httpstream.http.headers import (
    declared_content_length,
    parse_header_lines,
    read_body,
    read_header_block,
)


class TestReadHeaderBlock:
    """Tests for read_header_block."""

    def test_headers_after_start_line(self, cursor_factory):
        """Test reading from the CRLF that ends the start line."""
        cursor = cursor_factory(b"\r\nHost: example.com\r\nAccept: */*\r\n\r\nBODY")
        headers = read_header_block(cursor)

        assert headers == [("Host", "example.com"), ("Accept", "*/*")]
        assert cursor.peek() == b"BODY"

    def test_no_headers(self, cursor_factory):
        cursor = cursor_factory(b"\r\n\r\n")

        assert read_header_block(cursor) == []
        assert cursor.at_end()

    def test_incomplete_block(self, cursor_factory):
        """Test that a missing terminator leaves the cursor unmoved."""
        cursor = cursor_factory(b"\r\nHost: example.com\r\n")

        assert read_header_block(cursor) is NEED_MORE
        assert cursor.position == 0

    def test_long_header_block_unbounded(self, cursor_factory):
        value = "v" * 20000
        cursor = cursor_factory(f"\r\nX-Big: {value}\r\n\r\n".encode())

        assert read_header_block(cursor) == [("X-Big", value)]

    def test_strict_rejects_colonless_line(self, cursor_factory):
        cursor = cursor_factory(b"\r\nHost: a\r\nbroken line\r\n\r\n")

        with pytest.raises(MalformedHeaderError):
            read_header_block(cursor, strict=True)


class TestParseHeaderLines:
    """Tests for splitting header lines into pairs."""

    def test_duplicates_and_order_preserved(self):
        headers = parse_header_lines(
            b"Set-Cookie: a=1\r\nX-Other: y\r\nSet-Cookie: b=2"
        )

        assert headers == [
            ("Set-Cookie", "a=1"),
            ("X-Other", "y"),
            ("Set-Cookie", "b=2"),
        ]

    def test_split_on_first_colon_only(self):
        headers = parse_header_lines(b"Host: example.com:8080")

        assert headers == [("Host", "example.com:8080")]

    def test_value_whitespace_trimmed(self):
        headers = parse_header_lines(b"X-Pad:\t  padded value  \r\nX-Tight:tight")

        assert headers == [("X-Pad", "padded value"), ("X-Tight", "tight")]

    def test_name_case_kept(self):
        headers = parse_header_lines(b"CONTENT-type: text/html")

        assert headers == [("CONTENT-type", "text/html")]

    def test_colonless_lines_skipped(self):
        """Test tolerant parsing of malformed lines."""
        headers = parse_header_lines(b"Host: a\r\nthis is not a header\r\nAccept: b")

        assert headers == [("Host", "a"), ("Accept", "b")]

    def test_bare_lf_line_breaks(self):
        headers = parse_header_lines(b"Host: a\nAccept: b")

        assert headers == [("Host", "a"), ("Accept", "b")]

    def test_empty_value(self):
        assert parse_header_lines(b"X-Empty:") == [("X-Empty", "")]


class TestContentLength:
    """Tests for Content-Length validation and body extraction."""

    def test_absent(self):
        assert declared_content_length([("Host", "a")]) is None

    def test_case_insensitive_name(self):
        assert declared_content_length([("content-length", "12")]) == 12

    def test_zero(self):
        assert declared_content_length([("Content-Length", "0")]) == 0

    @pytest.mark.parametrize("value", ["abc", "-1", "1.5", "", "0x10", "1 2"])
    def test_invalid_values(self, value):
        with pytest.raises(ContentLengthError):
            declared_content_length([("Content-Length", value)])

    def test_repeated_same_value(self):
        headers = [("Content-Length", "5"), ("Content-Length", "5")]

        assert declared_content_length(headers) == 5

    def test_conflicting_values(self):
        """Test that conflicting lengths are rejected (request smuggling)."""
        headers = [("Content-Length", "5"), ("content-length", "7")]

        with pytest.raises(ContentLengthError) as exc_info:
            declared_content_length(headers)

        assert "Conflicting" in str(exc_info.value)

    def test_read_body(self, cursor_factory):
        cursor = cursor_factory(b"helloNEXT")

        assert read_body(cursor, [("Content-Length", "5")]) == b"hello"
        assert cursor.peek() == b"NEXT"

    def test_read_body_without_length(self, cursor_factory):
        cursor = cursor_factory(b"trailing")

        assert read_body(cursor, []) is None
        assert cursor.position == 0

    def test_read_body_incomplete(self, cursor_factory):
        cursor = cursor_factory(b"hell")

        assert read_body(cursor, [("Content-Length", "5")]) is NEED_MORE
        assert cursor.position == 0

    def test_read_empty_body(self, cursor_factory):
        cursor = cursor_factory(b"")

        assert read_body(cursor, [("Content-Length", "0")]) == b""
