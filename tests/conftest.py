"""
pytest configuration and fixtures.
"""

import logging
import socket
import threading
import time
from typing import Generator, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickserving import Config, StaticServer


INDEX_BODY = b"hello"
NOT_FOUND_BODY = b"<h1>Not Found</h1>"


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /docs/ HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def docroot(tmp_path: Path) -> Path:
    """Document root with an index page and a 404 page."""
    (tmp_path / "index.html").write_bytes(INDEX_BODY)
    (tmp_path / "404.html").write_bytes(NOT_FOUND_BODY)
    return tmp_path


@pytest.fixture
def config(docroot: Path) -> Config:
    """Test server configuration serving ``docroot``."""
    return Config(
        directory=str(docroot),
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        timeout=5.0,
    )


@pytest.fixture
def restore_package_logger():
    """Undo setup_logging() so later tests still see records in caplog."""
    logger = logging.getLogger("quickserving")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


@pytest.fixture
def quiet_logger() -> logging.Logger:
    """Logger for test servers; its records reach caplog."""
    logger = logging.getLogger("quickserving.tests")
    logger.setLevel(logging.DEBUG)
    return logger


class TestServer:
    """Test server helper that runs in a background thread."""

    def __init__(self, server: StaticServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        """Bind, then serve in a background thread."""
        self.server.bind()
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        # Wait for the accept loop, so shutdown() cannot race with it
        for _ in range(50):  # 5 seconds max
            if self.server.is_running:
                return
            time.sleep(0.1)

        raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()
        self.server.wait_for_shutdown(timeout=5.0)

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes and read until the server closes the connection."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            return recv_all(s)


def recv_all(sock: socket.socket) -> bytes:
    """Read from ``sock`` until EOF."""
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def split_response(data: bytes):
    """Split a raw response into (status line, header list, body)."""
    head, _, body = data.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    headers = [tuple(line.split(": ", 1)) for line in lines[1:]]
    return lines[0], headers, body


@pytest.fixture
def test_server(config: Config, quiet_logger: logging.Logger) -> Generator[TestServer, None, None]:
    """Create a running test server."""
    test_srv = TestServer(StaticServer(config, logger=quiet_logger))
    test_srv.start()

    yield test_srv

    test_srv.stop()
