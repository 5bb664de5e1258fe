"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds the responses Quickserving sends: the file itself (200) or the
configured not-found page (404).

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  STATUS LINE       HTTP/1.1 200 OK\r\n                              │
    │                                                                      │
    │  HEADERS           Content-Type: text/html\r\n                      │
    │                    Content-Length: 5\r\n                            │
    │                    Server: Quickserving\r\n                         │
    │                    Date: Mon, 19 Oct 2026 12:00:00 GMT\r\n          │
    │                                                                      │
    │  EMPTY LINE        \r\n                                              │
    │                                                                      │
    │  BODY              hello                                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THE TWO RESPONSES
=============================================================================

    found_response()                 not_found_response()
    ────────────────                 ────────────────────
    200 OK                           404 Resource not found
    Content-Type: <from extension>   Content-Type: text/html
    Content-Length: <file size>      Content-Length: <page size>
    Server: Quickserving             Server: Quickserving
    Date: <now>                      Date: <now>
    <file bytes>                     <404 page bytes, or "404">

Content-Length is always computed by ResponseBuilder.build() from the body
that is actually attached, so it cannot disagree with the body.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from .message import HTTP_1_1, Headers, Version
from .mime_types import get_mime_type
from .status_codes import HTTPStatus


# Body used when even the configured 404 page cannot be read
FALLBACK_NOT_FOUND_BODY = b"404"

DEFAULT_SERVER_NAME = "Quickserving"


@dataclass
class Response:
    """
    An HTTP response ready to be written to the client.

    Use ResponseBuilder (or the found/not-found helpers) rather than
    constructing this directly, so that Content-Length stays correct.

        Response            to_bytes()               Connection
        ────────   ──────►  serializes     ──────►   sendall()
    """

    status: int = HTTPStatus.OK
    reason: str = "OK"
    version: Version = HTTP_1_1
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    @property
    def status_line(self) -> str:
        """
        The first line of the response, without CRLF.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {int(self.status)} {self.reason}"

    def head(self) -> str:
        """Status line and header block, up to and including the blank line."""
        return f"{self.status_line}\r\n{self.headers.to_text()}\r\n"

    def to_bytes(self) -> bytes:
        """
        Serialize the response for sending over a socket.

            HTTP/1.1 404 Resource not found\\r\\n    ← Status line
            Content-Type: text/html\\r\\n            ← Headers, in order
            Content-Length: 3\\r\\n
            \\r\\n                                   ← Empty line
            404                                    ← Body bytes

        Headers are written exactly as stored; nothing is added here.
        """
        return self.head().encode("utf-8") + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing responses.

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .content_type("text/html")
            .body(b"<h1>hi</h1>")
            .server("Quickserving")
            .date()
            .build())

    Headers appear on the wire in the order they were added. Content-Length
    is special: build() always sets it to the final body length, in place if
    content_length() reserved a position for it, otherwise at the end.
    """

    def __init__(self):
        self._status: int = HTTPStatus.OK
        self._reason: Optional[str] = None
        self._headers = Headers()
        self._body: bytes = b""

    # =========================================================================
    # STATUS LINE
    # =========================================================================

    def status(self, status: int, reason: Optional[str] = None) -> "ResponseBuilder":
        """
        Set the status code and, optionally, the reason phrase.

        Args:
            status: Status code; an HTTPStatus member or a plain int.
            reason: Reason phrase. Defaults to the HTTPStatus phrase.
        """
        self._status = status
        self._reason = reason
        return self

    # =========================================================================
    # HEADERS
    # =========================================================================

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Add a single response header."""
        self._headers.insert(name, value)
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        return self.header("Content-Type", content_type)

    def content_length(self) -> "ResponseBuilder":
        """Reserve the position of the Content-Length header."""
        return self.header("Content-Length", str(len(self._body)))

    def server(self, name: str = DEFAULT_SERVER_NAME) -> "ResponseBuilder":
        return self.header("Server", name)

    def date(self, when: Optional[datetime] = None) -> "ResponseBuilder":
        """Add a Date header; defaults to the current time."""
        return self.header("Date", format_http_date(when or datetime.now(timezone.utc)))

    # =========================================================================
    # BODY
    # =========================================================================

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Set the response body. Strings are encoded as UTF-8."""
        if isinstance(body, str):
            self._body = body.encode("utf-8")
        else:
            self._body = body
        return self

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(self) -> Response:
        """Build the Response, fixing Content-Length to the body length."""
        self._headers.set("Content-Length", str(len(self._body)))

        reason = self._reason
        if reason is None:
            try:
                reason = HTTPStatus(self._status).phrase
            except ValueError:
                reason = "Unknown"

        return Response(
            status=self._status,
            reason=reason,
            headers=self._headers,
            body=self._body,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231 IMF-fixdate).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Mon, 19 Oct 2026 12:00:00 GMT

    Naive datetimes are taken to be UTC; aware ones are converted.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


# =============================================================================
# THE TWO RESPONSES THE SERVER SENDS
# =============================================================================

def found_response(
    request_path: str,
    content: bytes,
    server_name: str = DEFAULT_SERVER_NAME,
    now: Optional[datetime] = None,
) -> Response:
    """
    Create the 200 OK response for a file that was read successfully.

    Args:
        request_path: The (index-rewritten) request path; its extension
                      selects the Content-Type.
        content: The file's bytes.
        server_name: Value of the Server header.
        now: Value for the Date header (defaults to the current time).

    Returns:
        Response with 200 status.
    """
    return (ResponseBuilder()
        .status(HTTPStatus.OK)
        .content_type(get_mime_type(request_path))
        .content_length()
        .server(server_name)
        .date(now)
        .body(content)
        .build())


def not_found_response(
    content: Optional[bytes],
    server_name: str = DEFAULT_SERVER_NAME,
    now: Optional[datetime] = None,
) -> Response:
    """
    Create the 404 response.

    Args:
        content: Bytes of the configured not-found page, or None if that
                 page could not be read either, in which case the body is
                 the literal "404".
        server_name: Value of the Server header.
        now: Value for the Date header (defaults to the current time).

    Returns:
        Response with 404 status and Content-Type text/html.
    """
    if content is None:
        content = FALLBACK_NOT_FOUND_BODY

    return (ResponseBuilder()
        .status(HTTPStatus.NOT_FOUND)
        .content_type("text/html")
        .content_length()
        .server(server_name)
        .date(now)
        .body(content)
        .build())
