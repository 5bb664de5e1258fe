"""
=============================================================================
MAIN SERVER
=============================================================================

Ties the pieces together: the listener hands each accepted connection to
StaticServer.handle_connection(), which runs one request-response cycle.

=============================================================================
REQUEST FLOW
=============================================================================

    SocketServer (accept loop)
          │
          ▼
    handle_connection(conn)
          │
          ├──► 1. READING     conn.read_request()     bytes until \r\n\r\n
          │
          ├──► 2. PARSING     RequestParser.parse()   bad → warn, re-raise,
          │                                                 NO response
          ├──► 3. RESOLVING   default index + join
          │
          ├──► 4. RESPONDING  read file, 200 / 404, sendall()
          │
          └──► 5. CLOSED      connection dropped, next accept()

Everything runs on the accepting thread. While one client is being served,
the next one waits in the listen backlog.

=============================================================================
"""

import logging
from typing import Optional

from .config import Config
from .core import Connection, ConnectionState, SocketServer
from .handlers import StaticFileHandler
from .http import HTTPParseError, RequestParser


class StaticServer:
    """
    Single-threaded static file server.

    =========================================================================
    USAGE
    =========================================================================

        config = Config(port=8080, directory="./public")
        server = StaticServer(config)
        server.run()   # blocks until the process is killed

    =========================================================================
    """

    def __init__(self, config: Optional[Config] = None, logger: Optional[logging.Logger] = None):
        """
        Args:
            config: Server configuration. Defaults to Config().
            logger: Logger for every component of this server. Defaults to
                    this module's logger.
        """
        self.config = config or Config()
        self.log = logger if logger is not None else logging.getLogger(__name__)

        self._socket_server = SocketServer(self.config, logger=self.log)
        self._parser = RequestParser()
        self._handler = StaticFileHandler(self.config, logger=self.log)

    @property
    def address(self):
        """The bound (host, port)."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def bind(self) -> None:
        """
        Bind the listening socket.

        Raises:
            BindError: If the port is already in use.
        """
        self._socket_server.bind()
        port = self.address[1]
        self.log.info(f"Serving directory {self.config.directory} on port {port}.")

    def run(self) -> None:
        """
        Bind (if needed) and serve connections until shutdown().

        Raises:
            BindError: Before any connection is accepted, if binding fails.
        """
        if not self._socket_server.is_bound:
            self.bind()
        self._socket_server.serve(self.handle_connection)

    def shutdown(self) -> None:
        self._socket_server.shutdown()

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_for_shutdown(timeout)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def handle_connection(self, conn: Connection) -> None:
        """
        Serve exactly one request on ``conn``, then close it.

        Args:
            conn: The accepted client connection.

        Raises:
            HTTPParseError: The request was malformed. No response is sent.
            OSError: Reading from or writing to the socket failed.

        Both propagate to the listener, which logs them and moves on.
        """
        with conn:
            raw = conn.read_request()

            conn.state = ConnectionState.PARSING
            try:
                request = self._parser.parse(raw)
            except HTTPParseError as e:
                self.log.warning(f"[{conn.id}] Error while parsing request. Invalid request. {e}")
                raise

            conn.state = ConnectionState.RESOLVING
            response = self._handler.handle(request)

            self.log.info(f"[{conn.id}] Responding with: {response.status_line}")
            self.log.debug(f"[{conn.id}] Response head:\n{response.head()}")

            conn.send_response(response.to_bytes())

