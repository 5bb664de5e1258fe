"""
Unit tests for Connection reading, writing and closing.
"""

import socket
import threading
import time
from typing import Generator, Tuple

import pytest

from quickserving.core.connection import Connection, ConnectionState


@pytest.fixture
def socket_pair() -> Generator[Tuple[socket.socket, socket.socket], None, None]:
    """A connected (server side, client side) socket pair."""
    server_side, client_side = socket.socketpair()
    yield server_side, client_side
    server_side.close()
    client_side.close()


class TestReadRequest:
    """Tests for Connection.read_request."""

    def test_reads_until_terminator(self, socket_pair):
        server_side, client_side = socket_pair
        client_side.sendall(b"GET / HTTP/1.1\r\nHost: x\r\n\r\n")

        conn = Connection(server_side, timeout=5.0)

        assert conn.read_request() == b"GET / HTTP/1.1\r\nHost: x\r\n\r\n"
        assert conn.state == ConnectionState.READING

    def test_terminator_split_across_reads(self, socket_pair):
        """Test that a terminator split over two sends is still found."""
        server_side, client_side = socket_pair

        def send_in_parts():
            client_side.sendall(b"GET / HTTP/1.1\r\nHost: x\r\n\r")
            time.sleep(0.2)
            client_side.sendall(b"\n")

        sender = threading.Thread(target=send_in_parts)
        sender.start()

        conn = Connection(server_side, timeout=5.0)
        data = conn.read_request()
        sender.join()

        assert data == b"GET / HTTP/1.1\r\nHost: x\r\n\r\n"

    def test_small_buffer(self, socket_pair):
        """Test that many tiny reads still assemble the whole head."""
        server_side, client_side = socket_pair
        client_side.sendall(b"GET /a.txt HTTP/1.1\r\n\r\n")

        conn = Connection(server_side, buffer_size=1, timeout=5.0)

        assert conn.read_request() == b"GET /a.txt HTTP/1.1\r\n\r\n"

    def test_stops_at_peer_close(self, socket_pair):
        """Test that a client closing its side ends the read."""
        server_side, client_side = socket_pair
        client_side.sendall(b"GET / HTTP/1.1\r\n")
        client_side.shutdown(socket.SHUT_WR)

        conn = Connection(server_side, timeout=5.0)

        assert conn.read_request() == b"GET / HTTP/1.1\r\n"

    def test_empty_connection(self, socket_pair):
        server_side, client_side = socket_pair
        client_side.shutdown(socket.SHUT_WR)

        assert Connection(server_side, timeout=5.0).read_request() == b""

    def test_timeout_propagates(self, socket_pair):
        """Test that a silent client raises once the read timeout expires."""
        server_side, _ = socket_pair
        conn = Connection(server_side, timeout=0.2)

        with pytest.raises(socket.timeout):
            conn.read_request()


class TestSendAndClose:
    """Tests for Connection.send_response and close."""

    def test_send_response(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(server_side)

        conn.send_response(b"HTTP/1.1 200 OK\r\n\r\n")

        assert conn.state == ConnectionState.RESPONDING
        assert client_side.recv(1024) == b"HTTP/1.1 200 OK\r\n\r\n"

    def test_close_signals_eof(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(server_side)

        conn.close()

        assert conn.state == ConnectionState.CLOSED
        assert client_side.recv(1024) == b""

    def test_close_twice(self, socket_pair):
        server_side, _ = socket_pair
        conn = Connection(server_side)

        conn.close()
        conn.close()

        assert conn.state == ConnectionState.CLOSED

    def test_context_manager(self, socket_pair):
        server_side, _ = socket_pair

        with Connection(server_side) as conn:
            assert conn.state == ConnectionState.READING

        assert conn.state == ConnectionState.CLOSED

    def test_ids_are_unique(self, socket_pair):
        server_side, client_side = socket_pair

        assert Connection(server_side).id != Connection(client_side).id
