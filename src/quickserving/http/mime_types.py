"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps the extension of a request path to the Content-Type sent back with
the file.

    /index.html      →  text/html
    /css/site.css    →  text/css
    /img/logo.png    →  image/png
    /download.bin    →  application/octet-stream   (unknown → binary)

The lookup works on the REQUEST path, not the filesystem path, and sends
the bare type without a charset parameter ("text/html", not
"text/html; charset=utf-8"): the server serves bytes as they are on disk
and does not know their encoding.

=============================================================================
"""

import posixpath
from typing import Optional


# Extension (lowercase, with dot) → MIME type
MIME_TYPES = {
    # Documents and text
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".xml": "application/xml",
    ".json": "application/json",
    ".map": "application/json",
    ".pdf": "application/pdf",
    ".wasm": "application/wasm",

    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".bmp": "image/bmp",

    # Fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",

    # Audio / video
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".mp4": "video/mp4",
    ".webm": "video/webm",

    # Archives
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".tar": "application/x-tar",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(path: str, default: Optional[str] = None) -> str:
    """
    Get the MIME type for a request path based on its extension.

    Args:
        path: Request path or file name ("/docs/index.html").
        default: Type to use for unknown extensions.
                 Uses application/octet-stream if not specified.

    Returns:
        The MIME type string.

    Examples:
        >>> get_mime_type("/index.html")
        'text/html'

        >>> get_mime_type("/LOGO.PNG")
        'image/png'

        >>> get_mime_type("/archive.xyz")
        'application/octet-stream'
    """
    _, extension = posixpath.splitext(path)
    return MIME_TYPES.get(extension.lower(), default or DEFAULT_MIME_TYPE)
