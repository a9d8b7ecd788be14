"""
=============================================================================
SEQUENCE SCANNER
=============================================================================

Scanning primitives built on top of ByteCursor. Every function takes the
cursor explicitly; there is no module-level scan state.

    ┌──────────────────┬──────────────────────────────────────────────────┐
    │  Function        │ Effect on the cursor                             │
    ├──────────────────┼──────────────────────────────────────────────────┤
    │  match_at        │ never moves (pure lookahead)                     │
    │  consume_literal │ moves past the matched prefix                    │
    │  take_until      │ moves past the token (and terminator), or not    │
    │                  │ at all when it returns NEED_MORE                 │
    │  take_exact      │ moves n bytes, or not at all (NEED_MORE)         │
    └──────────────────┴──────────────────────────────────────────────────┘

=============================================================================
NEED_MORE
=============================================================================

Running out of buffered bytes is NOT an error in a streaming parser: the
rest of the message is probably in the next TCP segment. Scanners report it
with the NEED_MORE sentinel and leave the cursor where the scan started, so
the caller can simply try again after the next push.

NEED_MORE is a dedicated enum member, so it can never be confused with a
legitimate (possibly empty) bytes result:

    token = take_until(cursor, b" ")
    if token is NEED_MORE:
        return NEED_MORE

=============================================================================
"""

from enum import Enum
from typing import Optional, Union

from .cursor import ByteCursor


class _Signal(Enum):
    NEED_MORE = "need more data"

    def __repr__(self) -> str:
        return self.name


NEED_MORE = _Signal.NEED_MORE

ScanResult = Union[bytes, _Signal]


def match_at(cursor: ByteCursor, sequence: bytes) -> bool:
    """Check whether ``sequence`` starts at the read position, without consuming it."""
    start = cursor.checkpoint()
    try:
        return consume_literal(cursor, sequence)
    finally:
        cursor.restore(start)


def consume_literal(cursor: ByteCursor, sequence: bytes) -> bool:
    """
    Consume ``sequence`` byte for byte.

    Stops at the first byte that differs (or at the end of data) and returns
    False, leaving the cursor ON that byte. Bytes matched before it stay
    consumed; callers that need all-or-nothing take a checkpoint first.
    """
    for expected in sequence:
        if cursor.peek_byte() != expected:
            return False
        cursor.advance()
    return True


def take_until(
    cursor: ByteCursor,
    sequence: bytes,
    consume_match: bool = True,
    max_scan: Optional[int] = None,
) -> ScanResult:
    """
    Read everything up to the next occurrence of ``sequence``.

    Args:
        cursor: Cursor to scan from.
        sequence: Terminator to look for.
        consume_match: Also consume the terminator when found.
        max_scan: Give up looking after this many bytes and return them
                  anyway (terminator not required). Bounds scans over data
                  that will never contain the terminator.

    Returns:
        The bytes before the terminator, the first ``max_scan`` bytes when
        the bound is hit, or NEED_MORE if the buffer ends first. NEED_MORE
        leaves the cursor where the scan started.

    The bound only counts as hit once a terminator starting at offset
    ``max_scan`` would be fully buffered; a terminator split across pushes
    is still waited for.
    """
    limit = None if max_scan is None else max_scan + len(sequence)
    offset = cursor.find(sequence, limit)

    if offset is None:
        if limit is None or cursor.remaining < limit:
            return NEED_MORE
        return cursor.read(max_scan)

    token = cursor.read(offset)
    if consume_match:
        cursor.advance(len(sequence))
    return token


def take_exact(cursor: ByteCursor, count: int) -> ScanResult:
    """Consume exactly ``count`` bytes, or return NEED_MORE without moving."""
    if cursor.remaining < count:
        return NEED_MORE
    return cursor.read(count)
