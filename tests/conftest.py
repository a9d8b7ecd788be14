"""
pytest configuration and fixtures.
"""

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpstream import StreamParser, ParserConfig
from httpstream.core import ByteCursor


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request without body."""
    return (
        b"GET /api/users?page=1&limit=10 HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with JSON body."""
    body = b'{"name": "John", "email": "john@example.com"}'
    return (
        b"POST /api/users HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/json\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
        + body
    )


@pytest.fixture
def sample_response() -> bytes:
    """Sample HTTP response with body."""
    return (
        b"HTTP/1.1 404 Not Found\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 9\r\n"
        b"\r\n"
        b"not found"
    )


@pytest.fixture
def parser() -> StreamParser:
    """Parser with default (tolerant) configuration."""
    return StreamParser()


@pytest.fixture
def strict_parser() -> StreamParser:
    """Parser that raises hard errors."""
    return StreamParser(ParserConfig(tolerant_mode=False))


def make_cursor(data: bytes) -> ByteCursor:
    """Helper to create a cursor preloaded with data."""
    cursor = ByteCursor()
    cursor.push(data)
    return cursor


@pytest.fixture
def cursor_factory():
    return make_cursor
