"""
Mock transport implementation for testing.

This module provides an in-memory Transport that records every option
applied to it and replays queued responses, so the client can be unit
tested without libcurl or a network.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple

from ..options import Option
from .base import RawResponse, Transport


@dataclass
class MockExchange:
    """One scripted outcome for ``MockTransport.perform``."""

    response: RawResponse
    info: Dict[str, Any] = field(default_factory=dict)
    error: str = ""
    errno: int = 0


class MockTransport(Transport):
    """
    Mock transport for testing.

    Applied options are kept in order in ``applied``; batches passed to
    ``setopt_array`` are additionally kept in ``batches``. Each ``perform``
    consumes the next queued exchange, or an empty successful reply when
    the queue is empty.
    """

    def __init__(self) -> None:
        """Initialize the mock transport."""
        self.applied: List[Tuple[Option, Any]] = []
        self.batches: List[Dict[Option, Any]] = []
        self.escaped: List[str] = []
        self.perform_count = 0
        self.close_count = 0
        self._queue: Deque[MockExchange] = deque()
        self._last: Optional[MockExchange] = None
        self._closed = False

    def setopt(self, option: Option, value: Any) -> None:
        """
        Record an applied option.

        Raises:
            RuntimeError: If the transport is closed.
        """
        if self._closed:
            raise RuntimeError("Transport is closed")
        self.applied.append((option, value))

    def setopt_array(self, options: Mapping[Option, Any]) -> None:
        self.batches.append(dict(options))
        super().setopt_array(options)

    def escape(self, text: str) -> str:
        self.escaped.append(text)
        return super().escape(text)

    def perform(self) -> RawResponse:
        """
        Replay the next queued exchange.

        Raises:
            RuntimeError: If the transport is closed.
        """
        if self._closed:
            raise RuntimeError("Transport is closed")

        self.perform_count += 1
        if self._queue:
            self._last = self._queue.popleft()
        else:
            self._last = MockExchange(response=b"")

        self._last.info.setdefault("url", self.option_value(Option.URL))
        self._last.info.setdefault("http_code", 200 if self._last.response else 0)
        self._last.info.setdefault("header_size", 0)
        return self._last.response

    def getinfo(self) -> Dict[str, Any]:
        if self._last is None:
            return {"url": "", "http_code": 0, "header_size": 0}
        return dict(self._last.info)

    def error(self) -> str:
        return self._last.error if self._last is not None else ""

    def errno(self) -> int:
        return self._last.errno if self._last is not None else 0

    def close(self) -> None:
        """Close the mock transport."""
        self.close_count += 1
        self._closed = True

    @property
    def closed(self) -> bool:
        """Check if the mock transport is closed."""
        return self._closed

    def queue_response(
        self,
        body: bytes,
        header_size: int = 0,
        info: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Queue a successful transfer.

        Args:
            body: The raw response blob, header section first.
            header_size: Length of the header section in bytes.
            info: Extra metadata to report.
        """
        metadata = {"header_size": header_size}
        metadata.update(info or {})
        self._queue.append(MockExchange(response=body, info=metadata))

    def queue_failure(
        self,
        error: str,
        errno: int,
        info: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Queue a failed transfer.

        Args:
            error: Message libcurl would report.
            errno: Numeric libcurl error code.
            info: Extra metadata to report.
        """
        self._queue.append(
            MockExchange(response=None, info=dict(info or {}), error=error, errno=errno)
        )

    def option_value(self, option: Option, default: Any = None) -> Any:
        """
        Get the most recently applied value of an option.

        Args:
            option: The option to look up.
            default: Returned when the option was never applied.
        """
        for applied, value in reversed(self.applied):
            if applied is option:
                return value
        return default

    def options_applied(self, option: Option) -> List[Any]:
        """Get every value applied for an option, oldest first."""
        return [value for applied, value in self.applied if applied is option]

    def reset(self) -> None:
        """Forget recorded calls and queued exchanges."""
        self.applied.clear()
        self.batches.clear()
        self.escaped.clear()
        self._queue.clear()
        self._last = None
        self.perform_count = 0
