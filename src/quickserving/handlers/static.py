"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Turns a parsed request into a file read and a response.

=============================================================================
PATH RESOLUTION
=============================================================================

    Request path          Config                     Filesystem path
    ────────────          ──────                     ───────────────
    /                     directory="public/"        public//index.html
                          index_file="index.html"
    /docs/                                           public//docs/index.html
    /css/site.css                                    public//css/site.css

    1. DEFAULT INDEX: a path ending in "/" gets index_file appended.
    2. JOIN: directory (trailing "/" stripped) + "/" + path, verbatim.

The doubled slash is harmless to the OS. Nothing else happens: no
normalization, no symlink resolution, no check that the result stays
inside the document root.

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

Because the join is verbatim, a request such as

    GET /../../etc/passwd HTTP/1.1

is resolved to "public//../../etc/passwd" and read if it exists. Setting
Config.reject_traversal runs normalize_path() first:

    /a/./b//c        →  /a/b/c
    /a/b/../c        →  /a/c
    /../etc/passwd   →  PathTraversalError  (served as 404)

=============================================================================
"""

import logging
from typing import Optional

from ..config import Config
from ..http.request import Request
from ..http.response import Response, found_response, not_found_response


logger = logging.getLogger(__name__)


class PathTraversalError(ValueError):
    """Raised when a request path climbs above the document root."""


# =============================================================================
# PATH RESOLVER
# =============================================================================

def apply_index(request_path: str, index_file: str) -> str:
    """
    Apply the default-index rule.

    Examples:
        >>> apply_index("/", "index.html")
        '/index.html'
        >>> apply_index("/docs/", "index.html")
        '/docs/index.html'
        >>> apply_index("/a.txt", "index.html")
        '/a.txt'
    """
    if request_path.endswith("/"):
        return request_path + index_file
    return request_path


def join_root(directory: str, path: str) -> str:
    """Join ``path`` under ``directory`` verbatim."""
    return f"{directory.rstrip('/')}/{path}"


def resolve_path(request_path: str, config: Config) -> str:
    """
    Map a request path to the filesystem path to read.

    Args:
        request_path: The path from the request line.
        config: Supplies directory and index_file.

    Returns:
        The path to hand to the filesystem.
    """
    return join_root(config.directory, apply_index(request_path, config.index_file))


def normalize_path(request_path: str) -> str:
    """
    Canonicalize a request path, refusing to leave the document root.

    Empty and "." segments are dropped, ".." removes the previous segment.
    A trailing "/" is kept so the default-index rule still applies.

    Raises:
        PathTraversalError: If ".." would go above the root.
    """
    segments = []
    for segment in request_path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise PathTraversalError(f"path escapes document root: {request_path!r}")
            segments.pop()
        else:
            segments.append(segment)

    normalized = "/" + "/".join(segments)
    if request_path.endswith("/") and segments:
        normalized += "/"
    return normalized


# =============================================================================
# FILE HANDLER
# =============================================================================

def read_file(path: str) -> Optional[bytes]:
    """
    Read a whole file, or return None if it cannot be read.

    A path the OS cannot represent (an embedded NUL byte) counts as
    unreadable too.
    """
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot read {path}: {e}")
        return None


class StaticFileHandler:
    """
    Serves files from the configured document root.

    Usage:
        handler = StaticFileHandler(config)
        response = handler.handle(request)

    A missing or unreadable file is not an error: the configured not-found
    page is sent with status 404, or the body "404" if that page is missing
    too.
    """

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        self.config = config
        self.log = logger if logger is not None else logging.getLogger(__name__)

    def rewrite(self, request: Request) -> Request:
        """
        Return the request with its final path.

        Applies normalization when reject_traversal is enabled, then the
        default-index rule.

        Raises:
            PathTraversalError: If normalization rejects the path.
        """
        path = request.path
        if self.config.reject_traversal:
            path = normalize_path(path)
        return request.with_path(apply_index(path, self.config.index_file))

    def handle(self, request: Request) -> Response:
        """
        Build the response for ``request``.

        ┌─────────────────────────────────────────────────────────────────┐
        │  rewrite path ─► join under root ─► read file                   │
        │                                        │                         │
        │                          ┌─────────────┴─────────────┐           │
        │                        bytes                        None         │
        │                          │                            │          │
        │                    200 + file          read not_found_uri page   │
        │                                                       │          │
        │                                      404 + page (or "404")       │
        └─────────────────────────────────────────────────────────────────┘
        """
        try:
            request = self.rewrite(request)
        except PathTraversalError as e:
            self.log.warning(str(e))
            return self.not_found()

        self.log.info(f"Requested path {request.path}.")

        content = read_file(join_root(self.config.directory, request.path))
        if content is None:
            return self.not_found()

        return found_response(request.path, content, self.config.server_name)

    def not_found(self) -> Response:
        """The 404 response with the configured page, or "404"."""
        page = read_file(join_root(self.config.directory, self.config.not_found_uri))
        return not_found_response(page, self.config.server_name)
