"""
Tests for response header parsing.
"""

import pytest

from simple_curl.exceptions import ProtocolError
from simple_curl.http11 import parse_response_head, split_header_blocks


class TestSplitHeaderBlocks:
    """Test splitting a header section into blocks."""

    def test_single_block(self):
        """Test a header section with one block."""
        section = b"HTTP/1.1 204 No Content\r\nServer: nginx\r\n\r\n"
        assert split_header_blocks(section) == [b"HTTP/1.1 204 No Content\nServer: nginx"]

    def test_redirect_blocks(self, redirect_header_section):
        """Test a header section captured while following a redirect."""
        blocks = split_header_blocks(redirect_header_section)
        assert len(blocks) == 2
        assert blocks[0].startswith(b"HTTP/1.1 301")
        assert blocks[1].startswith(b"HTTP/2 200")

    def test_empty_section(self):
        """Test that an empty section has no blocks."""
        assert split_header_blocks(b"") == []
        assert split_header_blocks(b"\r\n\r\n") == []


class TestParseResponseHead:
    """Test parsing the final header block."""

    def test_parse_http11(self):
        """Test parsing a plain HTTP/1.1 header."""
        head = parse_response_head(
            b"HTTP/1.1 404 Not Found\r\n"
            b"Content-Type: text/plain\r\n"
            b"Content-Length: 9\r\n"
            b"\r\n"
        )
        assert head.status_code == 404
        assert head.reason == b"Not Found"
        assert head.http_version == b"1.1"
        assert head.headers == [
            (b"Content-Type", b"text/plain"),
            (b"Content-Length", b"9"),
        ]

    def test_parse_last_block_after_redirect(self, redirect_header_section):
        """Test that the final response wins over redirects."""
        head = parse_response_head(redirect_header_section)
        assert head.status_code == 200
        assert head.http_version == b"2"
        assert head.get_header("Content-Type") == b"application/json"
        assert head.get_header("X-Request-Id") == b"abc123"
        assert not head.has_header("Location")

    def test_parse_after_continue(self):
        """Test that an interim 100 Continue block is skipped."""
        head = parse_response_head(
            b"HTTP/1.1 100 Continue\r\n\r\n"
            b"HTTP/1.1 201 Created\r\nLocation: /items/1\r\n\r\n"
        )
        assert head.status_code == 201
        assert head.get_header("location") == b"/items/1"

    def test_parse_bare_newlines(self):
        """Test a header section using LF line endings."""
        head = parse_response_head(b"HTTP/1.0 200 OK\nServer: test\n\n")
        assert head.status_code == 200
        assert head.http_version == b"1.0"
        assert head.get_header("server") == b"test"

    def test_empty_section(self):
        """Test that an empty section is rejected."""
        with pytest.raises(ProtocolError, match="No response header"):
            parse_response_head(b"")

    def test_not_http(self):
        """Test that a body mistaken for a header is rejected."""
        with pytest.raises(ProtocolError, match="Malformed status line"):
            parse_response_head(b"<html><body>hi</body></html>")

    def test_invalid_header_line(self):
        """Test that h11 parse failures are wrapped."""
        with pytest.raises(ProtocolError) as exc_info:
            parse_response_head(b"HTTP/1.1 200 OK\r\nthis is not a header\r\n\r\n")
        assert exc_info.value.cause is not None
