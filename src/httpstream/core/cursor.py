"""
=============================================================================
BYTE CURSOR
=============================================================================

A growable byte buffer with a movable read position and checkpoint/rewind
support. This is the lowest layer of the parser: it knows nothing about
HTTP, only about bytes and positions.

=============================================================================
TCP HANDS US CHUNKS, NOT MESSAGES
=============================================================================

Data arrives in whatever pieces the network (or a capture file reader)
decides to hand over:

    push #1:  b"GET /index.ht"
    push #2:  b"ml HTTP/1.1\\r\\nHost: exa"
    push #3:  b"mple.com\\r\\n\\r\\n"

The cursor accumulates the pieces. The parser reads from the current
position, and when it runs out of bytes halfway through a message it
rewinds to a checkpoint and waits for the next push.

=============================================================================
THE INDEX WINDOW
=============================================================================

Discarding parsed bytes with ``del buffer[:n]`` after every message shifts
the whole remaining buffer each time, which goes quadratic on busy streams.
Instead the cursor keeps a window over a backing bytearray:

    backing store:  [ flushed bytes | unconsumed window ............ ]
                    0               ^_start        ^_pos             ^len
                                    logical 0      logical position

Flushing only moves ``_start``. The store is physically compacted once the
dead prefix reaches ``compact_threshold`` bytes, or for free when the window
becomes empty.

All positions handed out by the public API (``position``, checkpoints,
``flush_before``) are LOGICAL: relative to the window start. A flush rebases
them, so checkpoints taken before a flush must not be restored after it.

=============================================================================
"""

from typing import Optional


class ByteCursor:
    """
    Byte buffer plus read position.

    End of data is always reported as ``None``. Byte 0 is an ordinary byte
    value and never means "no more data".

    Example:
        cursor = ByteCursor()
        cursor.push(b"GET / HTTP/1.1\\r\\n")

        start = cursor.checkpoint()
        cursor.next_byte()          # 71 (ord("G"))
        cursor.restore(start)       # back to the beginning
    """

    def __init__(self, compact_threshold: int = 64 * 1024):
        self._buffer = bytearray()
        self._start = 0
        self._pos = 0
        self.compact_threshold = compact_threshold

    def __len__(self) -> int:
        """Number of unflushed bytes (consumed or not)."""
        return len(self._buffer) - self._start

    def __repr__(self) -> str:
        return f"ByteCursor(position={self.position}, length={len(self)})"

    # =========================================================================
    # POSITION
    # =========================================================================

    @property
    def position(self) -> int:
        return self._pos - self._start

    @property
    def remaining(self) -> int:
        """Bytes between the read position and the end of the buffer."""
        return len(self._buffer) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._buffer)

    def checkpoint(self) -> int:
        """Save the read position for a later ``restore``."""
        return self.position

    def restore(self, checkpoint: int) -> None:
        """
        Rewind (or fast-forward) to a saved position.

        Raises:
            ValueError: If the checkpoint lies outside the current window,
                        which happens when it predates a flush.
        """
        if not 0 <= checkpoint <= len(self):
            raise ValueError(
                f"Checkpoint {checkpoint} outside buffer window of {len(self)} bytes"
            )
        self._pos = self._start + checkpoint

    # =========================================================================
    # READING
    # =========================================================================

    def push(self, data: bytes) -> None:
        """Append bytes to the end of the buffer."""
        self._buffer += data

    def peek_byte(self) -> Optional[int]:
        if self._pos >= len(self._buffer):
            return None
        return self._buffer[self._pos]

    def next_byte(self) -> Optional[int]:
        """
        Return the byte at the read position and advance past it.

        Returns None at the end of the buffer, without moving.
        """
        if self._pos >= len(self._buffer):
            return None
        value = self._buffer[self._pos]
        self._pos += 1
        return value

    def advance(self, count: int = 1) -> int:
        """Skip up to ``count`` bytes. Returns how many were skipped."""
        moved = min(count, self.remaining)
        self._pos += moved
        return moved

    def read(self, count: int) -> bytes:
        """Consume and return up to ``count`` bytes."""
        end = min(self._pos + count, len(self._buffer))
        data = bytes(self._buffer[self._pos:end])
        self._pos = end
        return data

    def peek(self, count: Optional[int] = None) -> bytes:
        """Return up to ``count`` bytes (default: all) without consuming."""
        end = len(self._buffer) if count is None else min(self._pos + count, len(self._buffer))
        return bytes(self._buffer[self._pos:end])

    def find(self, sequence: bytes, limit: Optional[int] = None) -> Optional[int]:
        """
        Locate ``sequence`` at or after the read position.

        Args:
            sequence: Bytes to look for.
            limit: Only look at this many bytes from the read position.
                   The whole sequence must fit inside the limit.

        Returns:
            Offset from the read position, or None if not found.
        """
        end = len(self._buffer)
        if limit is not None:
            end = min(end, self._pos + limit)
        index = self._buffer.find(sequence, self._pos, end)
        if index == -1:
            return None
        return index - self._pos

    # =========================================================================
    # DISCARDING
    # =========================================================================

    def flush_before(self, position: Optional[int] = None) -> int:
        """
        Discard every byte strictly before ``position``.

        ``position`` defaults to the read position, so the common call
        ``flush_before()`` drops everything already consumed and leaves the
        cursor at logical 0.

        Returns:
            Number of bytes discarded.
        """
        if position is None:
            position = self.position
        position = max(0, min(position, len(self)))

        self._start += position
        if self._pos < self._start:
            self._pos = self._start

        self._compact()
        return position

    def clear(self) -> None:
        """Drop all buffered bytes."""
        self._buffer.clear()
        self._start = 0
        self._pos = 0

    def _compact(self) -> None:
        if self._start == len(self._buffer):
            # Empty window: nothing to move
            self.clear()
        elif self._start >= self.compact_threshold:
            del self._buffer[:self._start]
            self._pos -= self._start
            self._start = 0
