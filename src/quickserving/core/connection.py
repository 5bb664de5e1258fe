"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket: buffered reading of the request head,
writing the response, and closing.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL!
=============================================================================

    Client sends:
        send(b"GET / HTTP/1.1\r\nHost: x\r\n\r")
        send(b"\n")

    Server might receive:
        recv() → b"GET / HTTP/1.1\r\nHost: x\r\n\r"
        recv() → b"\n"

The header terminator \r\n\r\n can be split across two reads, so it is
looked for in the WHOLE accumulated buffer, never just in the last chunk.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    READING ──► PARSING ──► RESOLVING ──► RESPONDING ──► CLOSED
       │           │            │              │            ▲
       └───────────┴────────────┴──────────────┴────────────┘
                        (any failure)

One request per connection: there is no keep-alive state. Request bodies
are not read beyond whatever arrived together with the headers.

=============================================================================
"""

import logging
import socket
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


logger = logging.getLogger(__name__)

HEADER_TERMINATOR = b"\r\n\r\n"


class ConnectionState(Enum):
    """Lifecycle states of a connection, in order."""
    READING = "reading"        # Waiting for the request head
    PARSING = "parsing"        # Turning bytes into a Request
    RESOLVING = "resolving"    # Mapping the path onto the document root
    RESPONDING = "responding"  # Writing the response
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    A client connection.

    Attributes:
        socket: The accepted client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used to correlate log lines.
        state: Current ConnectionState.
        buffer_size: Bytes requested per recv().
        timeout: Socket timeout in seconds; None blocks indefinitely.
    """

    socket: socket.socket
    address: tuple[str, int] = ("", 0)

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.READING

    buffer_size: int = 4096
    timeout: Optional[float] = None

    def __post_init__(self):
        # Blocking mode; settimeout(None) is the same as setblocking(True)
        self.socket.settimeout(self.timeout)

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> bytes:
        """
        Read the request head from the socket.

        Keeps calling recv() until either the peer closes its side (a
        zero-byte read) or the accumulated data contains \\r\\n\\r\\n.

        Returns:
            Everything read so far. May be empty if the client connected
            and closed without sending anything.

        Raises:
            OSError: Any socket error (reset, timeout, ...). It is not
                     handled here; the listener's failure boundary logs it.
        """
        self.state = ConnectionState.READING
        buffer = bytearray()

        while True:
            chunk = self.socket.recv(self.buffer_size)
            if not chunk:
                # Peer closed its side
                break

            # Only the tail of the old buffer can complete a terminator
            search_from = max(len(buffer) - len(HEADER_TERMINATOR) + 1, 0)
            buffer += chunk
            if buffer.find(HEADER_TERMINATOR, search_from) != -1:
                break

        logger.debug(f"[{self.id}] Read {len(buffer)} bytes from {self.address[0]}")
        return bytes(buffer)

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> None:
        """
        Send all of ``data`` to the client.

        sendall() blocks until every byte is handed to the kernel. Errors
        propagate to the caller.
        """
        self.state = ConnectionState.RESPONDING
        self.socket.sendall(data)

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection. Safe to call more than once.

        shutdown(SHUT_RDWR) first so the client sees EOF even if the
        socket object is still referenced somewhere, then close().
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # Peer already gone

        self.socket.close()
        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
