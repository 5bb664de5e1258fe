"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

Binds the listening socket and runs the accept loop. Each accepted
connection is ONE unit of work, handled to completion before the next
accept() call.

=============================================================================
SOCKET LIFECYCLE (Server Side)
=============================================================================

    1. socket()    Create a TCP socket
    2. bind()      Claim 0.0.0.0:<port>      ← fails if the port is taken
    3. listen()    Start queueing incoming connections
    4. accept()    Wait for one connection   ─┐
    5. handler()   Serve it, synchronously    │ forever
                                             ─┘

=============================================================================
FAILURE ISOLATION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────┐
    │   bind() fails             → BindError, nothing is ever served │
    │   handler(conn) raises     → warning logged, loop continues    │
    │   accept() fails           → warning logged, loop continues    │
    └─────────────────────────────────────────────────────────────────┘

A single misbehaving client can never stop the server. It can however
stall it: while one handler blocks on a slow client, nobody else is served.

=============================================================================
SOCKET OPTIONS
=============================================================================

SO_REUSEADDR lets the server restart immediately while old connections
sit in TIME_WAIT. SO_REUSEPORT is NOT set: it would let a second server
bind a port that is already being listened on, hiding a real conflict.

=============================================================================
"""

import logging
import socket
import threading
from typing import Callable, Optional, Tuple

from ..config import Config
from .connection import Connection


class BindError(OSError):
    """Raised when the listening socket cannot be bound."""


class SocketServer:
    """
    Listener loop: bind, then accept and dispatch connections one by one.

    Usage:
        def handle(conn: Connection):
            ...

        server = SocketServer(config)
        server.bind()        # raises BindError if the port is taken
        server.serve(handle) # blocks
    """

    # accept() wakes up this often to notice shutdown()
    POLL_INTERVAL = 1.0

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        """
        Args:
            config: Server configuration (host, port, buffer size, timeout).
            logger: Where to log. Defaults to this module's logger.
        """
        self.config = config
        self.log = logger if logger is not None else logging.getLogger(__name__)

        self._socket: Optional[socket.socket] = None
        self._running = False
        self._stopped = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_bound(self) -> bool:
        return self._socket is not None

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); the real port when config.port is 0."""
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def bind(self) -> None:
        """
        Create, bind and listen on the server socket.
        Does nothing if already bound.

        Raises:
            BindError: If the address is in use or otherwise unavailable.
        """
        if self._socket is not None:
            return

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        try:
            sock.bind((self.config.host, self.config.port))
            sock.listen()
        except OSError as e:
            sock.close()
            self.log.warning(
                f"Failed to bind to {self.config.host}:{self.config.port}: {e}"
            )
            raise BindError(
                f"this port is already in use or unavailable: "
                f"{self.config.host}:{self.config.port} ({e})"
            ) from e

        sock.settimeout(self.POLL_INTERVAL)
        self._socket = sock

    def serve(self, connection_handler: Callable[[Connection], None]) -> None:
        """
        Accept connections until shutdown() is called.

        Binds first if bind() has not been called yet.

        Args:
            connection_handler: Called with each Connection, synchronously.
                                Any exception it raises is logged and the
                                loop moves on to the next connection.
        """
        if self._socket is None:
            self.bind()

        self._running = True
        self._stopped.clear()
        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]) -> None:
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue  # Poll tick: re-check self._running
            except OSError as e:
                if not self._running:
                    break  # Socket closed by shutdown()
                self.log.warning(f"Accept failed: {e}")
                continue

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
            )
            self._dispatch(conn, connection_handler)

    def _dispatch(
        self,
        conn: Connection,
        connection_handler: Callable[[Connection], None],
    ) -> None:
        """Run one connection inside the per-connection failure boundary."""
        try:
            connection_handler(conn)
        except Exception as e:
            self.log.warning(
                f"[{conn.id}] Error occurred while handling connection "
                f"from {conn.address[0]}: {e}"
            )
        finally:
            conn.close()

    def shutdown(self) -> None:
        """
        Ask the accept loop to stop after its current iteration.

        There is no signal handling: the command-line server runs until the
        process is killed. This exists for embedding and tests.
        """
        self._running = False

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """Wait until the accept loop has exited and the socket is closed."""
        return self._stopped.wait(timeout)

    def _cleanup(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        self._running = False
        self._stopped.set()
        self.log.info("Socket server stopped")
