"""
Pytest configuration for simple_curl tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import pytest

from simple_curl import SimpleCurl
from simple_curl.transport import MockTransport


RAW_HEADER = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: text/html; charset=UTF-8\r\n"
    b"Content-Length: 13\r\n"
    b"Set-Cookie: a=1\r\n"
    b"Set-Cookie: b=2\r\n"
    b"\r\n"
)
RAW_BODY = b"Hello, World!"


@pytest.fixture
def transport():
    """Create a mock transport."""
    return MockTransport()


@pytest.fixture
def curl(transport):
    """
    Create a client over the mock transport.

    Options applied by the constructor are cleared so tests only see
    what they apply themselves.
    """
    client = SimpleCurl(transport=transport)
    transport.applied.clear()
    yield client
    client.close()


@pytest.fixture
def raw_response():
    """Sample raw response with header section and body."""
    return RAW_HEADER + RAW_BODY


@pytest.fixture
def raw_header_size():
    """Size of the header section in ``raw_response``."""
    return len(RAW_HEADER)


@pytest.fixture
def redirect_header_section():
    """Header section captured while following a redirect."""
    return (
        b"HTTP/1.1 301 Moved Permanently\r\n"
        b"Location: https://example.com/\r\n"
        b"Content-Length: 0\r\n"
        b"\r\n"
        b"HTTP/2 200 \r\n"
        b"content-type: application/json\r\n"
        b"x-request-id: abc123\r\n"
        b"\r\n"
    )
