"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Everything that knows about the HTTP/1.1 wire format, and nothing that
knows about sockets or files.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ message.py       Version and Headers value types                    │
    │ request.py       Raw text → Request (or HTTPParseError)             │
    │ response.py      Response, ResponseBuilder, 200/404 builders        │
    │ status_codes.py  HTTPStatus enum with reason phrases                │
    │ mime_types.py    File extension → Content-Type                      │
    └─────────────────────────────────────────────────────────────────────┘

    REQUEST:                          RESPONSE:
    ─────────                         ──────────
    GET /path HTTP/1.1\r\n            HTTP/1.1 200 OK\r\n
    Header: Value\r\n                 Header: Value\r\n
    \r\n                              \r\n
    [body]                            [body]

=============================================================================
"""

from .message import HTTP_1_1, Headers, HTTPParseError, Version
from .request import Request, RequestParser, parse_request
from .response import (
    Response,
    ResponseBuilder,
    format_http_date,
    found_response,      # 200 OK with file content
    not_found_response,  # 404 with the configured page or "404"
)
from .status_codes import HTTPStatus
from .mime_types import get_mime_type

__all__ = [
    # Value types
    "Version",
    "Headers",
    "HTTP_1_1",

    # Request parsing
    "Request",
    "RequestParser",
    "HTTPParseError",
    "parse_request",

    # Response building
    "Response",
    "ResponseBuilder",
    "format_http_date",
    "found_response",
    "not_found_response",

    # Status codes and MIME types
    "HTTPStatus",
    "get_mime_type",
]
