"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses the raw text read from a connection into a structured Request.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  REQUEST LINE      GET /docs/ HTTP/1.1\r\n                          │
    │                    ─┬─ ──┬─── ────┬───                              │
    │                   Method Path   Version                              │
    │                                                                      │
    │  HEADERS           Host: localhost:8080\r\n                         │
    │                    User-Agent: curl/8.0\r\n                         │
    │                                                                      │
    │  EMPTY LINE        \r\n                                              │
    │                                                                      │
    │  BODY (optional)   ...anything, not interpreted by this server...   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
WHAT THIS PARSER DOES NOT DO
=============================================================================

The parser is deliberately permissive about CONTENT and strict about SHAPE:

    - Any method string is accepted (the server treats every request as
      a retrieval).
    - Any path string is accepted, including ".." sequences. Traversal
      protection is a separate, opt-in step (handlers.static.normalize_path).
    - Header names keep the case they were written in.

A request line without exactly three space-separated tokens, a version
without a single "/", or a header line without ": " is a parse error.

=============================================================================
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Union

from .message import Headers, HTTPParseError, Version


@dataclass(frozen=True)
class Request:
    """
    A parsed HTTP request.

    Attributes:
        method:  The request method, as sent ("GET", "FOO", ...).
        path:    The request target, verbatim.
        version: Protocol version of the request.
        headers: Header fields in order of appearance.
        body:    Anything after the blank line, or None.
    """

    method: str
    path: str
    version: Version
    headers: Headers = field(default_factory=Headers)
    body: Optional[str] = None

    def with_path(self, path: str) -> "Request":
        """Return a copy of this request with a rewritten path."""
        return replace(self, path=path)


class RequestParser:
    """
    Parses raw request text into Request objects.

    ==========================================================================
    PARSER ARCHITECTURE
    ==========================================================================

        raw bytes/text
              │
              ▼
        1. Decode (UTF-8, invalid sequences → U+FFFD)
              │
              ▼
        2. Split on CRLF
              │
              ▼
        3. Request line ──► exactly 3 tokens? ──► no → HTTPParseError
              │
              ▼
        4. Header lines until the first blank line
              │  "Name: value"; no ": " → HTTPParseError
              ▼
        5. Remaining lines → body
              │
              ▼
        Request

    ==========================================================================
    """

    LINE_SEPARATOR = "\r\n"
    HEADER_SEPARATOR = ": "

    def parse(self, data: Union[bytes, str]) -> Request:
        """
        Parse raw request data.

        Args:
            data: Bytes read from the socket, or already-decoded text.

        Returns:
            Parsed Request.

        Raises:
            HTTPParseError: If the request line or a header is malformed.
        """
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")

        lines = data.split(self.LINE_SEPARATOR)

        method, path, version = self._parse_request_line(lines[0])

        headers = Headers()
        body_start = len(lines)
        for index, line in enumerate(lines[1:], start=1):
            if not line:
                # Blank line: end of the header block
                body_start = index + 1
                break
            name, value = self._parse_header(line)
            headers.insert(name, value)

        body = self.LINE_SEPARATOR.join(lines[body_start:]) or None

        return Request(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
        )

    def _parse_request_line(self, line: str) -> tuple[str, str, Version]:
        """
        Parse ``METHOD SP PATH SP PROTOCOL/VERSION``.

        Splitting is on single spaces, so "GET  / HTTP/1.1" (two spaces)
        yields an empty token and four parts, which is rejected.
        """
        tokens = line.split(" ")
        if len(tokens) != 3:
            raise HTTPParseError(f"malformed request line: {line!r}")

        method, path, version_text = tokens
        return method, path, Version.parse(version_text)

    def _parse_header(self, line: str) -> tuple[str, str]:
        name, separator, value = line.partition(self.HEADER_SEPARATOR)
        if not separator:
            raise HTTPParseError(f"malformed header: {line!r}")
        return name, value


def parse_request(data: Union[bytes, str]) -> Request:
    """Parse raw request data with a default RequestParser."""
    return RequestParser().parse(data)
