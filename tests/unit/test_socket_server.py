"""
Unit tests for the listening socket.
"""

from quickserving.config import Config
from quickserving.core.socket_server import SocketServer


class TestBind:
    """Tests for SocketServer.bind."""

    def test_address_before_bind(self):
        server = SocketServer(Config(host="127.0.0.1", port=0))

        assert not server.is_bound
        assert server.address == ("127.0.0.1", 0)

    def test_bind_twice_keeps_socket(self, quiet_logger):
        """Test that a second bind() reuses the socket already listening."""
        server = SocketServer(Config(host="127.0.0.1", port=0), logger=quiet_logger)
        server.bind()
        try:
            first = server._socket
            address = server.address

            server.bind()

            assert server._socket is first
            assert server.address == address
            assert first.fileno() != -1
        finally:
            server._cleanup()

        assert not server.is_bound
