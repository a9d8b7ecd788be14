"""
Unit tests for the sequence scanner.
"""

from httpstream.core.scanner import (
    NEED_MORE,
    consume_literal,
    match_at,
    take_exact,
    take_until,
)


class TestMatching:
    """Tests for lookahead and literal consumption."""

    def test_match_at_never_moves(self, cursor_factory):
        cursor = cursor_factory(b"GET / HTTP/1.1")

        assert match_at(cursor, b"GET") is True
        assert match_at(cursor, b"POST") is False
        assert cursor.position == 0

    def test_match_at_partial_data(self, cursor_factory):
        """Test that a truncated buffer does not match."""
        cursor = cursor_factory(b"\r\n\r")

        assert match_at(cursor, b"\r\n\r\n") is False
        assert cursor.position == 0

    def test_consume_literal(self, cursor_factory):
        cursor = cursor_factory(b"\r\nHost")

        assert consume_literal(cursor, b"\r\n") is True
        assert cursor.position == 2

    def test_consume_literal_stops_at_mismatch(self, cursor_factory):
        """Test that the cursor stays on the first differing byte."""
        cursor = cursor_factory(b"HTTX")

        assert consume_literal(cursor, b"HTTP") is False
        assert cursor.position == 3
        assert cursor.peek_byte() == ord("X")


class TestTakeUntil:
    """Tests for take_until."""

    def test_take_and_consume_terminator(self, cursor_factory):
        cursor = cursor_factory(b"GET /path")

        assert take_until(cursor, b" ") == b"GET"
        assert cursor.peek() == b"/path"

    def test_keep_terminator(self, cursor_factory):
        cursor = cursor_factory(b"HTTP/1.1\r\n")

        assert take_until(cursor, b"\r\n", consume_match=False) == b"HTTP/1.1"
        assert cursor.peek() == b"\r\n"

    def test_empty_token(self, cursor_factory):
        """Test a terminator right at the read position."""
        cursor = cursor_factory(b"\r\n\r\nbody")

        assert take_until(cursor, b"\r\n\r\n") == b""
        assert cursor.peek() == b"body"

    def test_need_more_rewinds(self, cursor_factory):
        """Test that running out of data leaves the cursor unmoved."""
        cursor = cursor_factory(b"xxHost: a\r\n")
        cursor.advance(2)

        assert take_until(cursor, b"\r\n\r\n") is NEED_MORE
        assert cursor.position == 2

    def test_max_scan_returns_scanned_bytes(self, cursor_factory):
        """Test that a bounded scan gives up without a terminator."""
        cursor = cursor_factory(b"ABCDEFGHIJKLMNOP QRS")

        assert take_until(cursor, b" ", max_scan=10) == b"ABCDEFGHIJ"
        assert cursor.position == 10

    def test_max_scan_finds_terminator_at_bound(self, cursor_factory):
        cursor = cursor_factory(b"0123456789 rest")

        assert take_until(cursor, b" ", max_scan=10) == b"0123456789"
        assert cursor.peek() == b"rest"

    def test_max_scan_short_buffer_needs_more(self, cursor_factory):
        """Test that a bounded scan still waits when the bound was not reached."""
        cursor = cursor_factory(b"GET")

        assert take_until(cursor, b" ", max_scan=10) is NEED_MORE
        assert cursor.position == 0

    def test_max_scan_waits_for_split_terminator(self, cursor_factory):
        """Test that a terminator cut in half at the bound is waited for."""
        cursor = cursor_factory(b"0123456789\r")

        assert take_until(cursor, b"\r\n", max_scan=10) is NEED_MORE
        assert cursor.position == 0

        cursor.push(b"\n")
        assert take_until(cursor, b"\r\n", max_scan=10) == b"0123456789"
        assert cursor.at_end()

    def test_max_scan_waits_until_bound_plus_terminator(self, cursor_factory):
        cursor = cursor_factory(b"0123456789A")

        assert take_until(cursor, b"\r\n", max_scan=10) is NEED_MORE

        cursor.push(b"B")
        assert take_until(cursor, b"\r\n", max_scan=10) == b"0123456789"


class TestTakeExact:
    """Tests for take_exact."""

    def test_exact(self, cursor_factory):
        cursor = cursor_factory(b"hello world")

        assert take_exact(cursor, 5) == b"hello"
        assert cursor.position == 5

    def test_exact_whole_buffer(self, cursor_factory):
        """Test taking precisely all remaining bytes."""
        cursor = cursor_factory(b"hello")

        assert take_exact(cursor, 5) == b"hello"
        assert cursor.at_end()

    def test_exact_need_more(self, cursor_factory):
        cursor = cursor_factory(b"hell")

        assert take_exact(cursor, 5) is NEED_MORE
        assert cursor.position == 0

    def test_zero_bytes(self, cursor_factory):
        cursor = cursor_factory(b"")

        assert take_exact(cursor, 0) == b""
