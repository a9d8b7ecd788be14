"""
=============================================================================
STREAMING HTTP PARSER
=============================================================================

Push raw bytes in, pull parsed HTTP/1.x messages out:

    parser = StreamParser()

    for chunk in chunks_from_somewhere():
        parser.push(chunk)

        while (message := parser.next_message()) is not None:
            handle(message)

=============================================================================
THE PARSE CYCLE
=============================================================================

Each cycle tries to turn the front of the buffer into one message:

    ┌───────────────────────────────────────────────────────────────────┐
    │  1. Find message start ─────────────────────────────────────────►│
    │     │  method token → request, version token → response          │
    │     │  bytes before it are garbage: flushed                      │
    │     │  nothing found? → WAIT                                      │
    │     ▼                                                             │
    │  2. Parse start line ───────────────────────────────────────────►│
    │     │  invalid? → skip one token, next cycle                     │
    │     │  incomplete? → WAIT                                         │
    │     ▼                                                             │
    │  3. Header block (up to \\r\\n\\r\\n) ──────────────────────────────►│
    │     │  incomplete? → rewind to start, WAIT                       │
    │     ▼                                                             │
    │  4. Body (Content-Length bytes) ────────────────────────────────►│
    │     │  incomplete? → rewind to start, WAIT                       │
    │     ▼                                                             │
    │  5. Enqueue message, flush consumed bytes, next cycle            │
    └───────────────────────────────────────────────────────────────────┘

WAIT ends parse(): the bytes of the in-flight message stay buffered and
the whole message is parsed again from its start after the next push.
Messages are atomic; a half-parsed message is never queued.

=============================================================================
ERRORS
=============================================================================

Hard errors (bad Content-Length, strict header violations) abort the
current message. In tolerant mode the parser logs them, throws away the
bytes consumed so far and carries on with the rest of the buffer. In strict
mode the exception propagates and the parser is left where it failed.

=============================================================================
THREAD SAFETY
=============================================================================

None. One parser per connection, driven by whoever owns that connection's
data. push(), parse() and the queue accessors must not run concurrently.

=============================================================================
"""

import logging
from collections import deque
from enum import Enum
from typing import Iterator, Optional

from .config import ParserConfig
from .core.cursor import ByteCursor
from .core.scanner import NEED_MORE
from .http.errors import BufferLimitExceeded, HTTPParseError
from .http.headers import read_body, read_header_block
from .http.message import HTTPMessage, HTTPRequest
from .http.start_line import find_message_start, parse_start_line, skip_token

logger = logging.getLogger(__name__)


class _Step(Enum):
    MESSAGE = "message"     # a message was queued
    SKIPPED = "skipped"     # false start skipped, keep going
    WAIT = "wait"           # need more data


class StreamParser:
    """
    Incremental HTTP/1.x request/response parser.

    Attributes:
        config: The ParserConfig in effect.
        messages: FIFO of completed messages, oldest first.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.config.validate()

        self._cursor = ByteCursor(compact_threshold=self.config.compact_threshold)
        self.messages: deque[HTTPMessage] = deque()

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[HTTPMessage]:
        """Iterate by draining the queue."""
        while self.messages:
            yield self.messages.popleft()

    def __repr__(self) -> str:
        return (
            f"StreamParser(queued={len(self.messages)}, buffered={self.buffered}, "
            f"tolerant_mode={self.tolerant_mode})"
        )

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    @property
    def tolerant_mode(self) -> bool:
        return self.config.tolerant_mode

    @tolerant_mode.setter
    def tolerant_mode(self, value: bool) -> None:
        self.config.tolerant_mode = value

    @property
    def buffered(self) -> int:
        """Bytes received but not yet turned into a message."""
        return len(self._cursor)

    # =========================================================================
    # INPUT
    # =========================================================================

    def push(self, data: bytes, auto_parse: bool = True) -> int:
        """
        Append bytes to the buffer.

        Args:
            data: Raw bytes, split anywhere.
            auto_parse: Run parse() right away.

        Returns:
            Number of messages completed by this call.
        """
        self._cursor.push(data)
        if not auto_parse:
            return 0
        return self.parse()

    def parse(self) -> int:
        """
        Parse as many messages as the buffered bytes allow.

        Returns:
            Number of messages queued by this call.

        Raises:
            HTTPParseError: Only with tolerant_mode off.
        """
        completed = 0

        while True:
            try:
                step = self._parse_next()
            except HTTPParseError as e:
                if not self.tolerant_mode:
                    raise
                logger.warning(f"Discarding malformed message: {e}")
                self._discard_in_flight()
                continue
            except Exception as e:
                if not self.tolerant_mode:
                    raise
                logger.exception(f"Unexpected parser error, discarding message: {e}")
                self._discard_in_flight()
                continue

            if step is _Step.WAIT:
                break
            if step is _Step.MESSAGE:
                completed += 1

        self._enforce_buffer_limit()
        return completed

    def _parse_next(self) -> _Step:
        cursor = self._cursor

        # ─────────────────────────────────────────────────────────────────
        # STEP 1: Locate the next start line, drop what precedes it
        # ─────────────────────────────────────────────────────────────────
        kind = find_message_start(cursor)
        discarded = cursor.flush_before()
        if discarded:
            logger.debug(f"Discarded {discarded} bytes preceding message start")
        if kind is None:
            return _Step.WAIT

        start = cursor.checkpoint()

        # ─────────────────────────────────────────────────────────────────
        # STEP 2: Start line
        # ─────────────────────────────────────────────────────────────────
        message = parse_start_line(cursor, kind)
        if message is NEED_MORE:
            return _Step.WAIT
        if message is None:
            logger.debug(f"Invalid {kind.value} line, skipping token")
            skip_token(cursor)
            return _Step.SKIPPED

        # ─────────────────────────────────────────────────────────────────
        # STEP 3: Headers
        # ─────────────────────────────────────────────────────────────────
        headers = read_header_block(cursor, strict=self.config.strict_headers)
        if headers is NEED_MORE:
            cursor.restore(start)
            return _Step.WAIT
        message.headers = headers

        # ─────────────────────────────────────────────────────────────────
        # STEP 4: Body
        # ─────────────────────────────────────────────────────────────────
        body = read_body(cursor, headers)
        if body is NEED_MORE:
            logger.debug("Body incomplete, waiting for more data")
            cursor.restore(start)
            return _Step.WAIT
        message.body = body

        # ─────────────────────────────────────────────────────────────────
        # STEP 5: Deliver
        # ─────────────────────────────────────────────────────────────────
        self.messages.append(message)
        cursor.flush_before()
        logger.debug(f"Parsed {_describe(message)}")
        return _Step.MESSAGE

    def _discard_in_flight(self) -> None:
        # Always drop at least one byte so the same error cannot repeat forever
        if self._cursor.position == 0:
            self._cursor.advance()
        self._cursor.flush_before()

    def _enforce_buffer_limit(self) -> None:
        limit = self.config.max_buffer_size
        if limit is None or self.buffered <= limit:
            return

        if not self.tolerant_mode:
            raise BufferLimitExceeded(
                f"{self.buffered} unconsumed bytes exceed limit of {limit}",
                self._cursor.position,
            )
        logger.warning(f"Buffer limit of {limit} bytes exceeded, dropping {self.buffered} bytes")
        self._cursor.clear()

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def next_message(self) -> Optional[HTTPMessage]:
        """Remove and return the oldest message, or None if the queue is empty."""
        if not self.messages:
            return None
        return self.messages.popleft()

    def drain(self) -> list[HTTPMessage]:
        """Remove and return every queued message."""
        drained = list(self.messages)
        self.messages.clear()
        return drained

    def reset(self) -> None:
        """Forget buffered bytes and queued messages."""
        self._cursor.clear()
        self.messages.clear()


def _describe(message: HTTPMessage) -> str:
    if isinstance(message, HTTPRequest):
        return f"request {message.method.value} {message.target}"
    return f"response {message.status_code} {message.status_text}"


def parse_messages(data: bytes, config: Optional[ParserConfig] = None) -> list[HTTPMessage]:
    """
    Parse a complete capture in one call.

    Example:
        for message in parse_messages(open("traffic.bin", "rb").read()):
            print(message.kind, message.get_header("Host"))
    """
    parser = StreamParser(config)
    parser.push(data)
    return parser.drain()
