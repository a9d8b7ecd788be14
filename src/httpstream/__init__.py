"""
=============================================================================
HTTPSTREAM - INCREMENTAL HTTP/1.x MESSAGE PARSER
=============================================================================

Turns a byte stream that arrives in arbitrary chunks (a TCP socket, a
captured traffic dump) into discrete HTTP/1.x requests and responses.
No sockets, no connections: you push bytes in and pull messages out.

=============================================================================
PROJECT STRUCTURE
=============================================================================

    httpstream/
    ├── __init__.py          # Package exports (you are here)
    ├── __main__.py          # CLI: python -m httpstream capture.bin
    ├── config.py            # ParserConfig
    ├── parser.py            # StreamParser: the parse driver and queue
    ├── core/                # HTTP-agnostic scanning
    │   ├── cursor.py        # Byte buffer + read position + checkpoints
    │   └── scanner.py       # match / consume / take_until / take_exact
    └── http/                # HTTP/1.x layers
        ├── start_line.py    # Request line / status line
        ├── headers.py       # Header block and Content-Length body
        ├── message.py       # HTTPRequest / HTTPResponse
        └── errors.py        # HTTPParseError family

=============================================================================
QUICK START
=============================================================================

    from httpstream import StreamParser

    parser = StreamParser()
    parser.push(b"GET /index.html HTTP/1.1\\r\\nHost: exa")
    parser.push(b"mple.com\\r\\n\\r\\nHTTP/1.1 200 OK\\r\\n\\r\\n")

    for message in parser.drain():
        if message.is_request:
            print(message.method.value, message.target)
        else:
            print(message.status_code, message.status_text)

=============================================================================
WHAT IT DOES NOT DO
=============================================================================

- Chunked transfer-encoding and multipart bodies
- HTTP/2 and later
- Header value validation beyond basic syntax

=============================================================================
"""

__version__ = "1.0.0"

from .config import ParserConfig
from .parser import StreamParser, parse_messages
from .http import (
    HTTPMessage,
    HTTPRequest,
    HTTPResponse,
    HTTPMethod,
    MessageKind,
    HTTPParseError,
    ContentLengthError,
    MalformedHeaderError,
    BufferLimitExceeded,
)

__all__ = [
    "StreamParser",
    "ParserConfig",
    "parse_messages",
    "HTTPMessage",
    "HTTPRequest",
    "HTTPResponse",
    "HTTPMethod",
    "MessageKind",
    "HTTPParseError",
    "ContentLengthError",
    "MalformedHeaderError",
    "BufferLimitExceeded",
    "__version__",
]
