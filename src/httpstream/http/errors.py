"""
Parse errors raised by the HTTP layer.

Running out of data is never an error (see ``core.scanner.NEED_MORE``), and
neither is a start line that fails validation: the driver just skips the
offending token. Only the problems below abort a message.
"""


class HTTPParseError(Exception):
    """
    Base class for hard parse failures.

    Carries the cursor position at the point of failure when it is known.
    A strict-mode caller can use it to decide whether the parser is still
    worth feeding.
    """

    def __init__(self, message: str, offset: int = -1):
        super().__init__(message)
        self.offset = offset  # cursor position when raised, -1 if unknown


class ContentLengthError(HTTPParseError):
    """Content-Length is not a non-negative integer, or repeated with different values."""


class MalformedHeaderError(HTTPParseError):
    """A header line without a colon, raised only when strict header parsing is on."""


class BufferLimitExceeded(HTTPParseError):
    """More unconsumed bytes are buffered than the configured ceiling allows."""
