"""
=============================================================================
CORE NETWORKING
=============================================================================

The socket-level half of the server:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ socket_server.py  Bind, accept one connection at a time, isolate    │
    │                   each connection's failures from the server        │
    │ connection.py     Buffered read of one request head, sendall, close │
    └─────────────────────────────────────────────────────────────────────┘

There is no thread pool: connections are served strictly one after another
on the accepting thread.

=============================================================================
"""

from .socket_server import BindError, SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Listener loop
    "BindError",        # Fatal startup error
    "Connection",       # Wrapper for one client socket
    "ConnectionState",  # READING → PARSING → RESOLVING → RESPONDING → CLOSED
]
