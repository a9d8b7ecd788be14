"""
=============================================================================
START LINE PARSERS
=============================================================================

Recognizes the first line of an HTTP message:

    REQUEST LINE:   GET /api/users?page=1 HTTP/1.1\\r\\n
                    ─┬─ ────────┬──────── ────┬───
                   method    target        version

    STATUS LINE:    HTTP/1.1 404 Not Found\\r\\n
                    ────┬─── ─┬─ ────┬────
                     version code   text

=============================================================================
RESULT CONVENTION
=============================================================================

The line parsers never raise for bad grammar. They return one of:

    HTTPRequest / HTTPResponse   line recognized; cursor left ON the CRLF
    None                         not a valid line after all; cursor restored
    NEED_MORE                    line not complete yet; cursor restored

"Not valid" is common in traffic captures: a body that happens to contain
"GET " looks like a request start until the rest of the line is checked.
The driver handles None by skipping one token and searching again.

=============================================================================
SCAN BOUNDS
=============================================================================

Methods and versions are short, so they are read with a small bound
(TOKEN_SCAN). A run of garbage without spaces is then rejected after a few
bytes instead of being scanned to the end of the buffer. The request target
is unbounded (URLs can be long) but may not run past the end of the line.

=============================================================================
"""

import re
from typing import Optional, Union

from ..core.cursor import ByteCursor
from ..core.scanner import NEED_MORE, ScanResult, take_until
from .message import (
    HTTPRequest,
    HTTPResponse,
    MessageKind,
    METHOD_TOKENS,
    VERSION_TOKENS,
)

SP = b" "
CRLF = b"\r\n"

TOKEN_SCAN = 10          # longest method is 7 bytes, versions are 8
STATUS_TEXT_SCAN = 256

STATUS_CODE_PATTERN = re.compile(rb"\d+")

START_TOKENS = {
    **{token: MessageKind.REQUEST for token in METHOD_TOKENS},
    **{token: MessageKind.RESPONSE for token in VERSION_TOKENS},
}

LineResult = Union[HTTPRequest, HTTPResponse, None, type(NEED_MORE)]


def find_message_start(cursor: ByteCursor) -> Optional[MessageKind]:
    """
    Advance to the next byte that starts a request or status line.

    At each position the token up to the next space is compared with the
    known methods (request) and versions (response). On a hit the cursor is
    left at the token and its kind is returned.

    Returns None when no start is buffered yet. If the tail of the buffer
    could still grow into a start token (b"GE" waiting for b"T "), the
    cursor stops at that tail so a flush will not throw it away. Otherwise
    it ends at the end of the buffer.
    """
    while True:
        start = cursor.checkpoint()
        token = take_until(cursor, SP, consume_match=False, max_scan=TOKEN_SCAN)
        cursor.restore(start)

        if token is NEED_MORE:
            if _could_become_start(cursor.peek()):
                return None
        else:
            kind = START_TOKENS.get(token)
            if kind is not None:
                return kind

        if cursor.next_byte() is None:
            return None


def _could_become_start(tail: bytes) -> bool:
    return any(token.startswith(tail) for token in START_TOKENS)


def parse_start_line(cursor: ByteCursor, kind: MessageKind) -> LineResult:
    if kind is MessageKind.REQUEST:
        return parse_request_line(cursor)
    return parse_status_line(cursor)


def parse_request_line(cursor: ByteCursor) -> LineResult:
    """Parse ``METHOD SP target SP version`` up to (not including) the CRLF."""
    start = cursor.checkpoint()

    method = take_until(cursor, SP, max_scan=TOKEN_SCAN)
    if method is NEED_MORE:
        return NEED_MORE
    if method not in METHOD_TOKENS:
        cursor.restore(start)
        return None

    target = _take_target(cursor)
    if target is None or target is NEED_MORE:
        cursor.restore(start)
        return target

    version = take_until(cursor, CRLF, consume_match=False, max_scan=TOKEN_SCAN)
    if version is NEED_MORE:
        cursor.restore(start)
        return NEED_MORE
    if version not in VERSION_TOKENS:
        cursor.restore(start)
        return None

    return HTTPRequest(
        method=METHOD_TOKENS[method],
        target=_decode(target),
        version=VERSION_TOKENS[version],
    )


def parse_status_line(cursor: ByteCursor) -> LineResult:
    """
    Parse ``version SP code SP text`` up to (not including) the CRLF.

    A status line that ends right after the code (``HTTP/1.1 200\\r\\n``)
    is accepted with an empty status text.
    """
    start = cursor.checkpoint()

    version = take_until(cursor, SP, max_scan=TOKEN_SCAN)
    if version is NEED_MORE:
        return NEED_MORE
    if version not in VERSION_TOKENS:
        cursor.restore(start)
        return None

    code = _take_status_code(cursor)
    if code is None or code is NEED_MORE:
        cursor.restore(start)
        return code

    # The code reader stops either on the CRLF or just past the space
    status_text = take_until(cursor, CRLF, consume_match=False, max_scan=STATUS_TEXT_SCAN)
    if status_text is NEED_MORE:
        cursor.restore(start)
        return NEED_MORE
    if cursor.find(CRLF, len(CRLF)) != 0:
        # Status text longer than the scan bound
        cursor.restore(start)
        return None

    return HTTPResponse(
        version=VERSION_TOKENS[version],
        status_code=int(code),
        status_text=_decode(status_text),
    )


def skip_token(cursor: ByteCursor) -> None:
    """
    Step over the token at the cursor and the space after it.

    Used after a failed line parse so the next search does not find the
    same false start again. Always moves at least one byte.
    """
    before = cursor.position
    take_until(cursor, SP, max_scan=TOKEN_SCAN)
    if cursor.position == before:
        cursor.advance()


def _take_target(cursor: ByteCursor) -> Optional[ScanResult]:
    space = cursor.find(SP)
    line_end = cursor.find(CRLF)

    if line_end is not None and (space is None or line_end < space):
        return None  # line ends before a version could follow
    if space is None:
        return NEED_MORE

    target = cursor.read(space)
    cursor.advance(len(SP))
    return target


def _take_status_code(cursor: ByteCursor) -> Optional[ScanResult]:
    limit = TOKEN_SCAN + len(CRLF)
    space = cursor.find(SP, limit)
    line_end = cursor.find(CRLF, limit)

    if line_end is not None and (space is None or line_end < space):
        code = cursor.read(line_end)
    elif space is not None:
        code = cursor.read(space)
        cursor.advance(len(SP))
    elif cursor.remaining < limit:
        return NEED_MORE
    else:
        return None

    if not STATUS_CODE_PATTERN.fullmatch(code):
        return None
    return code


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")
