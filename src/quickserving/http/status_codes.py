"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this server can produce, with their default reason
phrases.

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  2xx   │ 200 OK            - The requested file was found          │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  4xx   │ 404 Not Found     - The file is missing or unreadable;    │
    │        │                     the configured 404 page is sent       │
    └────────┴───────────────────────────────────────────────────────────┘

Malformed requests are never answered (no 400 is ever sent), so only the
two codes above appear on the wire.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    Extends IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Resource not found'
    """

    OK = 200
    NOT_FOUND = 404

    @property
    def phrase(self) -> str:
        """
        Get the reason phrase for this status code.

            HTTP/1.1 200 OK
                     ─── ──
                      │   └── Reason phrase
                      └────── Status code
        """
        return _STATUS_PHRASES.get(self, "Unknown")


# Reason phrases are informational only (RFC 7230 §3.1.2); clients ignore
# them. The 404 phrase is the one Quickserving has always sent.
_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "Resource not found",
}
