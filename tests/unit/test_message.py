"""
Unit tests for the Version and Headers value types.
"""

import pytest

from quickserving.http.message import HTTP_1_1, Headers, HTTPParseError, Version


class TestVersion:
    """Tests for Version."""

    def test_str(self):
        assert str(Version("HTTP", "1.1")) == "HTTP/1.1"

    def test_parse(self):
        assert Version.parse("HTTP/1.1") == HTTP_1_1

    def test_equality(self):
        """Test that versions compare by value."""
        assert Version("HTTP", "1.1") == Version("HTTP", "1.1")
        assert Version("HTTP", "1.1") != Version("HTTP", "1.0")

    @pytest.mark.parametrize("text", ["", "HTTP", "HTTP/", "/1.1", "A/B/C"])
    def test_parse_malformed(self, text: str):
        with pytest.raises(HTTPParseError):
            Version.parse(text)


class TestHeaders:
    """Tests for Headers."""

    def test_insertion_order(self):
        """Test that headers serialize in insertion order."""
        headers = Headers().insert("Zeta", "1").insert("Alpha", "2")

        assert headers.to_text() == "Zeta: 1\r\nAlpha: 2\r\n"

    def test_empty(self):
        headers = Headers()

        assert len(headers) == 0
        assert headers.to_text() == ""
        assert headers.get("Host") is None
        assert headers.get("Host", "default") == "default"

    def test_case_sensitive(self):
        """Test that names are matched exactly as written."""
        headers = Headers().insert("Content-Type", "text/html")

        assert "Content-Type" in headers
        assert "content-type" not in headers

    def test_duplicates(self):
        """Test that get returns the first value and get_all every value."""
        headers = Headers().insert("X", "1").insert("X", "2")

        assert headers.get("X") == "1"
        assert headers.get_all("X") == ["1", "2"]
        assert len(headers) == 2

    def test_set_keeps_position(self):
        """Test that set replaces in place and drops later duplicates."""
        headers = (Headers()
            .insert("A", "1")
            .insert("B", "old")
            .insert("C", "3")
            .insert("B", "dup"))

        headers.set("B", "new")

        assert headers.items() == [("A", "1"), ("B", "new"), ("C", "3")]

    def test_set_appends_missing(self):
        headers = Headers().insert("A", "1").set("B", "2")

        assert headers.items() == [("A", "1"), ("B", "2")]

    def test_iteration_and_equality(self):
        headers = Headers([("A", "1"), ("B", "2")])

        assert list(headers) == [("A", "1"), ("B", "2")]
        assert headers == Headers().insert("A", "1").insert("B", "2")
        assert headers != Headers().insert("B", "2").insert("A", "1")

    def test_items_is_a_copy(self):
        headers = Headers().insert("A", "1")
        headers.items().append(("B", "2"))

        assert len(headers) == 1
