"""
Custom exceptions for simple_curl.

Configuration mistakes raise immediately. Transfer failures are recorded
on the client instead and only become exceptions when the caller asks
for it via ``ExecutionResult.raise_for_error``.
"""

from typing import Optional


class SimpleCurlError(Exception):
    """Base exception for all simple_curl errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(SimpleCurlError):
    """Raised when an option cannot be applied to the session handle."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Configuration error: {message}", cause)


class TransferError(SimpleCurlError):
    """Raised on demand for a transfer that libcurl reported as failed."""

    def __init__(self, message: str, code: int = 0) -> None:
        if code:
            message = f"{message} (curl error {code})"
        super().__init__(f"Transfer error: {message}")
        self.code = code


class ProtocolError(SimpleCurlError):
    """Raised when a captured response header cannot be parsed."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)
