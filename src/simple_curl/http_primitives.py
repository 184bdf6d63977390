"""
HTTP primitives for simple_curl.

This module defines the data returned to callers: the structured result
of a transfer and the parsed form of a captured response header.
Both are immutable; the client keeps its own mutable copy of the latest
transfer state.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import TransferError
from .transport.base import RawResponse

# Type aliases for better readability
Headers = List[Tuple[bytes, bytes]]
Info = Dict[str, Any]


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of one ``SimpleCurl.execute`` call.

    ``error`` is only set when the transfer produced no response; a
    successful result never carries an error, even if libcurl left a
    message behind.
    """

    response: RawResponse
    info: Info = field(default_factory=dict)
    error: Optional[str] = None
    error_no: int = 0

    @property
    def failed(self) -> bool:
        """Check if the transfer produced no response."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the result as a plain mapping.

        Returns:
            Dictionary with ``response`` and ``info``, plus ``error`` when
            the transfer failed.
        """
        result: Dict[str, Any] = {"response": self.response, "info": self.info}
        if self.failed:
            result["error"] = self.error
        return result

    def raise_for_error(self) -> "ExecutionResult":
        """
        Raise if the transfer failed.

        Returns:
            This result, to allow chaining.

        Raises:
            TransferError: If the transfer produced no response.
        """
        if self.failed:
            raise TransferError(self.error or "transfer failed", code=self.error_no)
        return self


@dataclass(frozen=True)
class ResponseHead:
    """
    Parsed status line and header fields of a response.

    Header names and values are kept as bytes, in the order received.
    """

    status_code: int
    reason: bytes = b""
    http_version: bytes = b"1.1"
    headers: Headers = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate response head data after initialization."""
        if not isinstance(self.status_code, int):
            raise ValueError("status_code must be int")

        if not isinstance(self.headers, list):
            raise ValueError("headers must be a list")

        for name, value in self.headers:
            if not isinstance(name, bytes) or not isinstance(value, bytes):
                raise ValueError("header names and values must be bytes")

    def get_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        """Get a header value by name (case-insensitive)."""
        if isinstance(name, str):
            name = name.encode()

        name_lower = name.lower()
        for header_name, header_value in self.headers:
            if header_name.lower() == name_lower:
                return header_value

        return None

    def get_header_list(self, name: Union[str, bytes]) -> List[bytes]:
        """Get every value of a repeated header, such as Set-Cookie."""
        if isinstance(name, str):
            name = name.encode()

        name_lower = name.lower()
        return [value for header_name, value in self.headers if header_name.lower() == name_lower]

    def has_header(self, name: Union[str, bytes]) -> bool:
        """Check if a header exists (case-insensitive)."""
        return self.get_header(name) is not None

    @property
    def content_length(self) -> Optional[int]:
        """Get the Content-Length value, or None if absent or invalid."""
        value = self.get_header(b"content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None
