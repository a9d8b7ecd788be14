"""
=============================================================================
HTTP MESSAGE MODEL
=============================================================================

Parsed messages come out of the parser as one of two dataclasses:

    HTTPMessage                     common: version, headers, body
      ├── HTTPRequest               method, target
      └── HTTPResponse              status_code, status_text

``message.kind`` tells them apart without isinstance checks:

    for message in parser.drain():
        if message.kind is MessageKind.REQUEST:
            print(message.method.value, message.target)
        else:
            print(message.status_code, message.status_text)

=============================================================================
HEADERS ARE A LIST, NOT A DICT
=============================================================================

This parser is built for inspecting traffic, so it keeps headers exactly as
they appeared on the wire:

    Set-Cookie: a=1
    Set-Cookie: b=2         →  [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]

Order is preserved and duplicates are NOT merged. Use ``get_header`` for a
case-insensitive lookup of the first value, ``get_all_headers`` for every
value.

=============================================================================
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MessageKind(Enum):
    REQUEST = "request"
    RESPONSE = "response"


class HTTPMethod(str, Enum):
    """
    The request methods the parser recognizes.

    Anything else at the start of a line is not treated as a request.
    """

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


HTTP_VERSIONS = ("HTTP/1.0", "HTTP/1.1")

# Wire forms used by the scanners
METHOD_TOKENS = {method.value.encode("ascii"): method for method in HTTPMethod}
VERSION_TOKENS = {version.encode("ascii"): version for version in HTTP_VERSIONS}


Header = tuple[str, str]


@dataclass
class HTTPMessage(ABC):
    """Fields shared by requests and responses. Not instantiable itself."""

    version: str = "HTTP/1.1"
    headers: list[Header] = field(default_factory=list)
    body: Optional[bytes] = None

    @property
    @abstractmethod
    def kind(self) -> MessageKind:
        ...

    @property
    def is_request(self) -> bool:
        return self.kind is MessageKind.REQUEST

    @property
    def is_response(self) -> bool:
        return self.kind is MessageKind.RESPONSE

    @property
    def text(self) -> str:
        """Body decoded as UTF-8; empty string when there is no body."""
        return self.get_body_text()

    @property
    def content_length(self) -> Optional[int]:
        """
        The declared Content-Length, or None.

        The parser has already validated the value by the time a message is
        queued, so this never raises for parsed messages.
        """
        value = self.get_header("Content-Length")
        if value is None:
            return None
        return int(value)

    def get_body_text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        if not self.body:
            return ""
        return self.body.decode(encoding, errors=errors)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        First value of a header (case-insensitive lookup).

        Example:
            message.get_header("content-type")   # "text/html"
        """
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return default

    def get_all_headers(self, name: str) -> list[str]:
        """Every value of a header, in wire order."""
        name = name.lower()
        return [value for key, value in self.headers if key.lower() == name]


@dataclass
class HTTPRequest(HTTPMessage):
    method: HTTPMethod = HTTPMethod.GET
    target: str = "/"

    @property
    def kind(self) -> MessageKind:
        return MessageKind.REQUEST


@dataclass
class HTTPResponse(HTTPMessage):
    status_code: int = 200
    status_text: str = ""

    @property
    def kind(self) -> MessageKind:
        return MessageKind.RESPONSE
