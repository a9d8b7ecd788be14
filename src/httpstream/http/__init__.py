"""
=============================================================================
HTTP/1.x MESSAGE PARSING
=============================================================================

The HTTP-aware layers of the parser, built on the core cursor/scanner:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ START LINE (start_line.py)                                          │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Finds where a message begins and parses its first line              │
    │                                                                      │
    │ Input:   b"...garbage...GET /users HTTP/1.1\\r\\n"                    │
    │ Output:  HTTPRequest(method=GET, target="/users", ...)              │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ HEADERS & BODY (headers.py)                                         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Header block up to the blank line, then Content-Length bytes       │
    │                                                                      │
    │ Input:   b"Host: a\\r\\nContent-Length: 2\\r\\n\\r\\nhi"                  │
    │ Output:  [("Host", "a"), ("Content-Length", "2")], b"hi"            │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ MESSAGES (message.py) / ERRORS (errors.py)                          │
    │ ─────────────────────────────────────────────────────────────────── │
    │ HTTPRequest / HTTPResponse dataclasses, HTTPParseError family       │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .errors import (
    HTTPParseError,
    ContentLengthError,
    MalformedHeaderError,
    BufferLimitExceeded,
)
from .message import (
    HTTPMessage,
    HTTPRequest,
    HTTPResponse,
    HTTPMethod,
    MessageKind,
    HTTP_VERSIONS,
)
from .start_line import (
    find_message_start,
    parse_start_line,
    parse_request_line,
    parse_status_line,
)
from .headers import read_header_block, read_body, declared_content_length

__all__ = [
    # Errors
    "HTTPParseError",
    "ContentLengthError",
    "MalformedHeaderError",
    "BufferLimitExceeded",

    # Messages
    "HTTPMessage",
    "HTTPRequest",
    "HTTPResponse",
    "HTTPMethod",
    "MessageKind",
    "HTTP_VERSIONS",

    # Start line
    "find_message_start",
    "parse_start_line",
    "parse_request_line",
    "parse_status_line",

    # Headers and body
    "read_header_block",
    "read_body",
    "declared_content_length",
]
