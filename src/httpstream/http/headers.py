"""
=============================================================================
HEADER & BODY EXTRACTION
=============================================================================

Everything after the start line:

    GET /upload HTTP/1.1\\r\\n           ← start line (already parsed)
    Host: example.com\\r\\n              ┐
    Content-Type: text/plain\\r\\n       ├ header block
    Content-Length: 5\\r\\n              ┘
    \\r\\n                               ← terminator (blank line)
    hello                              ← body: exactly Content-Length bytes

=============================================================================
TOLERANT HEADER PARSING
=============================================================================

Header lines are split once on the first colon:

    "Host: example.com:8080"  →  ("Host", "example.com:8080")

The value loses surrounding spaces and tabs, the name is kept as sent.
Lines without any colon are skipped by default; a malformed header line
does not cost us the whole message. Pass ``strict=True`` to reject them
with MalformedHeaderError instead.

=============================================================================
CONTENT-LENGTH
=============================================================================

Without chunked encoding, Content-Length is the only way to know where a
body ends, so a bad value is a hard error:

    Content-Length: abc          → ContentLengthError
    Content-Length: -1           → ContentLengthError
    Content-Length: 5  +  ...: 7 → ContentLengthError (request smuggling!)

Repeated headers with the SAME value are accepted.

=============================================================================
"""

import logging
import re
from typing import Optional, Union

from ..core.cursor import ByteCursor
from ..core.scanner import NEED_MORE, take_exact, take_until
from .errors import ContentLengthError, MalformedHeaderError
from .message import Header

logger = logging.getLogger(__name__)

HEADER_TERMINATOR = b"\r\n\r\n"

LINE_BREAK_PATTERN = re.compile(rb"[\r\n]")
CONTENT_LENGTH_PATTERN = re.compile(r"[0-9]+")


def read_header_block(
    cursor: ByteCursor,
    strict: bool = False,
) -> Union[list[Header], type(NEED_MORE)]:
    """
    Consume the header block and its blank-line terminator.

    The cursor is expected on the CRLF that ends the start line, which is
    where the line parsers leave it; a message without headers then reads
    as an immediate ``\\r\\n\\r\\n``.

    Returns:
        Header pairs in wire order, or NEED_MORE (cursor unmoved) when the
        terminator is not buffered yet.

    Raises:
        MalformedHeaderError: Colon-less line while ``strict`` is set.
    """
    block = take_until(cursor, HEADER_TERMINATOR)
    if block is NEED_MORE:
        return NEED_MORE
    return parse_header_lines(block, strict=strict, offset=cursor.position)


def parse_header_lines(block: bytes, strict: bool = False, offset: int = -1) -> list[Header]:
    headers: list[Header] = []

    for line in LINE_BREAK_PATTERN.split(block):
        if not line:
            continue

        name, colon, value = line.partition(b":")
        if not colon:
            if strict:
                raise MalformedHeaderError(f"Header line without colon: {line[:64]!r}", offset)
            logger.debug(f"Skipping header line without colon: {line[:64]!r}")
            continue

        headers.append((_decode(name), _decode(value).strip(" \t")))

    return headers


def declared_content_length(headers: list[Header], offset: int = -1) -> Optional[int]:
    """
    Validated Content-Length of a header list, or None if absent.

    Raises:
        ContentLengthError: Non-numeric value, or conflicting duplicates.
    """
    lengths = set()
    for name, value in headers:
        if name.lower() != "content-length":
            continue
        if not CONTENT_LENGTH_PATTERN.fullmatch(value):
            raise ContentLengthError(f"Invalid Content-Length: {value!r}", offset)
        lengths.add(int(value))

    if not lengths:
        return None
    if len(lengths) > 1:
        raise ContentLengthError(
            f"Conflicting Content-Length values: {sorted(lengths)}", offset
        )
    return lengths.pop()


def read_body(
    cursor: ByteCursor,
    headers: list[Header],
) -> Union[bytes, None, type(NEED_MORE)]:
    """
    Consume the body declared by ``headers``.

    Returns:
        None when there is no Content-Length, the body bytes, or NEED_MORE
        (nothing consumed) when fewer bytes than declared are buffered.
    """
    length = declared_content_length(headers, offset=cursor.position)
    if length is None:
        return None
    return take_exact(cursor, length)


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")
