"""
Transport components for simple_curl.

This package provides the session handle abstraction the client drives:
the libcurl-backed transport and an in-memory mock for tests.
"""

from .base import RawResponse, Transport, percent_escape
from .curl import CurlTransport
from .mock import MockExchange, MockTransport

__all__ = [
    "RawResponse",
    "Transport",
    "percent_escape",
    "CurlTransport",
    "MockExchange",
    "MockTransport",
]
