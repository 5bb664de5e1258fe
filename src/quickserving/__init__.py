"""
=============================================================================
QUICKSERVING - A Minimal Static File HTTP Server
=============================================================================

Serves files from one directory over HTTP/1.1, one connection at a time.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    QUICKSERVING ARCHITECTURE                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   SocketServer ──► StaticServer.handle_connection                   │
    │   (listener)          │                                              │
    │                       ├──► Connection.read_request   (framing)       │
    │                       ├──► RequestParser.parse       (HTTP text)     │
    │                       ├──► StaticFileHandler.handle  (path + file)   │
    │                       │        └──► found / not_found responses      │
    │                       └──► Connection.send_response  (bytes out)     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    - One request per connection; the connection is closed afterwards.
    - 200 with the file, or 404 with the configured page ("404" if absent).
    - Malformed requests are dropped without a response.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    quickserving/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m quickserving)
    ├── server.py            # StaticServer: connection handling
    ├── config.py            # Config dataclass
    ├── log.py               # Logging setup (text / JSON)
    ├── core/                # Sockets
    │   ├── socket_server.py # Bind + accept loop
    │   └── connection.py    # Per-client reader/writer
    ├── http/                # Protocol
    │   ├── message.py       # Version, Headers
    │   ├── request.py       # Request parsing
    │   ├── response.py      # Response building
    │   ├── status_codes.py  # HTTPStatus
    │   └── mime_types.py    # Content-Type detection
    └── handlers/
        └── static.py        # Path resolution + file serving

=============================================================================
QUICK START
=============================================================================

    from quickserving import Config, StaticServer

    server = StaticServer(Config(port=8080, directory="./public"))
    server.run()

=============================================================================
"""

__version__ = "1.0.0"

from .config import Config, ConfigError
from .core import BindError
from .server import StaticServer

__all__ = ["StaticServer", "Config", "ConfigError", "BindError", "__version__"]
