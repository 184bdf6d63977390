"""
Transport interface for simple_curl.

This module defines the Transport interface: the small set of operations
the client needs from a native transfer session (set options, escape,
perform, read back metadata and error state, release).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

from ..options import Option

# Raw response blob, ``True`` when the body was not buffered, or ``None``
# when the transfer failed.
RawResponse = Optional[Union[bytes, bool]]


def percent_escape(text: str) -> str:
    """
    Percent-encode every character outside the RFC 3986 unreserved set.

    Args:
        text: The string to escape.

    Returns:
        The escaped string, matching ``curl_easy_escape``.
    """
    return quote(text, safe="")


class Transport(ABC):
    """
    Interface for native transfer sessions.

    A transport owns exactly one session handle. Options accumulate on the
    handle until ``perform`` runs the transfer; failures are reported
    through ``error`` and ``errno`` rather than raised.
    """

    @abstractmethod
    def setopt(self, option: Option, value: Any) -> None:
        """
        Apply a single option to the session handle.

        Args:
            option: The option to set.
            value: The value for the option.
        """
        pass

    def setopt_array(self, options: Mapping[Option, Any]) -> None:
        """
        Apply a batch of options in iteration order.

        Args:
            options: Mapping of option to value.
        """
        for option, value in options.items():
            self.setopt(option, value)

    def escape(self, text: str) -> str:
        """URL encode the given string."""
        return percent_escape(text)

    @abstractmethod
    def perform(self) -> RawResponse:
        """
        Run the configured transfer and block until it completes.

        Returns:
            The buffered response, ``True`` if the body was written
            elsewhere, or ``None`` if the transfer failed.
        """
        pass

    @abstractmethod
    def getinfo(self) -> Dict[str, Any]:
        """
        Get metadata about the last transfer.

        Returns:
            Mapping with at least ``header_size``, ``http_code`` and ``url``.
        """
        pass

    @abstractmethod
    def error(self) -> str:
        """Get the error message of the last transfer ("" if none)."""
        pass

    @abstractmethod
    def errno(self) -> int:
        """Get the numeric error code of the last transfer (0 if none)."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the session handle. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Check if the session handle has been released."""
        pass
