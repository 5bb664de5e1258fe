"""
=============================================================================
REQUEST HANDLERS
=============================================================================

Quickserving has exactly one handler: static files from the document root.

    from quickserving.handlers import StaticFileHandler

    handler = StaticFileHandler(Config(directory="./public"))
    response = handler.handle(request)

=============================================================================
"""

from .static import (
    PathTraversalError,
    StaticFileHandler,
    apply_index,
    normalize_path,
    resolve_path,
)

__all__ = [
    "StaticFileHandler",
    "PathTraversalError",
    "apply_index",
    "normalize_path",
    "resolve_path",
]
