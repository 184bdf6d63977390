"""
simple_curl - fluent HTTP requests over libcurl

A thin object-oriented facade over a libcurl session handle: chainable
setters configure the request, verb methods run it, and the outcome is
kept on the client for inspection.
"""

__version__ = "0.1.0"

# Import main components for easy access
from .client import SimpleCurl
from .options import Option, SSLVersion, VerifyHost
from .http_primitives import ExecutionResult, ResponseHead
from .http11 import parse_response_head, split_header_blocks
from .transport import CurlTransport, MockTransport, Transport
from .exceptions import ConfigurationError, ProtocolError, SimpleCurlError, TransferError

__all__ = [
    "SimpleCurl",
    "Option",
    "SSLVersion",
    "VerifyHost",
    "ExecutionResult",
    "ResponseHead",
    "parse_response_head",
    "split_header_blocks",
    "CurlTransport",
    "MockTransport",
    "Transport",
    "ConfigurationError",
    "ProtocolError",
    "SimpleCurlError",
    "TransferError",
]
