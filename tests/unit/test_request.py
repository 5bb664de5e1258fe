"""
Unit tests for HTTP request parsing.
"""

import pytest

from quickserving.http.message import Version
from quickserving.http.request import (
    Request,
    RequestParser,
    HTTPParseError,
    parse_request,
)


class TestRequestParser:
    """Tests for RequestParser class."""

    def test_parse_simple_get(self, sample_get_request: bytes):
        """Test parsing a simple GET request."""
        parser = RequestParser()
        request = parser.parse(sample_get_request)

        assert request.method == "GET"
        assert request.path == "/docs/"
        assert request.version == Version("HTTP", "1.1")
        assert str(request.version) == "HTTP/1.1"
        assert request.body is None

    def test_parse_headers(self, sample_get_request: bytes):
        """Test that headers are parsed in order with their case preserved."""
        request = parse_request(sample_get_request)

        assert request.headers.items() == [
            ("Host", "localhost:8080"),
            ("User-Agent", "pytest"),
            ("Accept", "text/html"),
        ]
        assert request.headers.get("Host") == "localhost:8080"
        assert request.headers.get("host") is None

    def test_parse_accepts_text(self):
        """Test that already-decoded text is accepted."""
        request = parse_request("GET / HTTP/1.1\r\nHost: x\r\n\r\n")

        assert request.path == "/"
        assert request.headers.get("Host") == "x"

    def test_parse_any_method(self):
        """Test that unknown methods are not rejected."""
        request = parse_request(b"BREW /pot HTTP/1.1\r\n\r\n")

        assert request.method == "BREW"
        assert request.path == "/pot"

    def test_parse_path_verbatim(self):
        """Test that the path is kept exactly as sent."""
        request = parse_request(b"GET /../secret/./x HTTP/1.1\r\n\r\n")

        assert request.path == "/../secret/./x"

    def test_parse_other_version(self):
        """Test that the version is split on '/' without being checked."""
        request = parse_request(b"GET / HTTP/2\r\n\r\n")

        assert request.version.name == "HTTP"
        assert request.version.number == "2"

    def test_parse_header_value_with_separator(self):
        """Test that only the first ': ' splits a header."""
        request = parse_request(b"GET / HTTP/1.1\r\nX-Note: a: b\r\n\r\n")

        assert request.headers.get("X-Note") == "a: b"

    def test_parse_body(self):
        """Test that everything after the blank line becomes the body."""
        raw = b"POST /form HTTP/1.1\r\nHost: x\r\n\r\nline one\r\nline two"
        request = parse_request(raw)

        assert request.method == "POST"
        assert request.body == "line one\r\nline two"

    def test_parse_without_blank_line(self):
        """Test a request whose head was cut short by the client closing."""
        request = parse_request(b"GET /a.txt HTTP/1.1\r\nHost: x")

        assert request.path == "/a.txt"
        assert request.headers.get("Host") == "x"
        assert request.body is None

    def test_parse_invalid_utf8(self):
        """Test that invalid UTF-8 is replaced instead of failing."""
        request = parse_request(b"GET /caf\xe9 HTTP/1.1\r\n\r\n")

        assert request.path == "/caf\ufffd"

    @pytest.mark.parametrize("raw", [
        b"GET /\r\n\r\n",
        b"GET\r\nHost: test\r\n\r\n",
        b"GET  / HTTP/1.1\r\n\r\n",
        b"GET / HTTP/1.1 extra\r\n\r\n",
        b"",
    ])
    def test_parse_invalid_request_line(self, raw: bytes):
        """Test handling of malformed request lines."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_request(raw)

        assert "malformed request line" in str(exc_info.value)

    @pytest.mark.parametrize("version", ["HTTP", "HTTP/", "/1.1", "HTTP/1/1"])
    def test_parse_invalid_version(self, version: str):
        """Test that a version without exactly one '/' is rejected."""
        with pytest.raises(HTTPParseError, match="malformed version"):
            parse_request(f"GET / {version}\r\n\r\n")

    def test_parse_invalid_header(self):
        """Test that a header line without ': ' is rejected."""
        with pytest.raises(HTTPParseError, match="malformed header"):
            parse_request(b"GET / HTTP/1.1\r\nHost:x\r\n\r\n")


class TestRequest:
    """Tests for the Request value type."""

    def test_with_path(self, sample_get_request: bytes):
        """Test that with_path returns a modified copy."""
        request = parse_request(sample_get_request)
        rewritten = request.with_path("/docs/index.html")

        assert rewritten.path == "/docs/index.html"
        assert rewritten.method == request.method
        assert rewritten.headers == request.headers
        assert request.path == "/docs/"

    def test_is_frozen(self):
        """Test that requests are immutable."""
        request = Request("GET", "/", Version("HTTP", "1.1"))

        with pytest.raises(AttributeError):
            request.path = "/other"
