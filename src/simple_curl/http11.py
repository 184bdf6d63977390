"""
Response header parsing for simple_curl.

libcurl hands back the header section as raw bytes. When redirects are
followed, or the server sends an interim ``100 Continue``, that section
holds several header blocks back to back; the final one describes the
response whose body follows. This module parses that block with h11.
"""

import logging
import re
from typing import List, Tuple

import h11

from .exceptions import ProtocolError
from .http_primitives import ResponseHead

logger = logging.getLogger(__name__)

# h11 only speaks HTTP/1.x; newer status lines are rewritten before parsing.
_STATUS_LINE_VERSION = re.compile(rb"^HTTP/(\d(?:\.\d)?) ")


def split_header_blocks(header_section: bytes) -> List[bytes]:
    """
    Split a header section into its individual header blocks.

    Args:
        header_section: Raw header bytes as captured by libcurl

    Returns:
        Non-empty blocks in the order received, without the blank line
    """
    normalized = header_section.replace(b"\r\n", b"\n")
    return [block for block in normalized.split(b"\n\n") if block.strip()]


def _normalize_status_line(block: bytes) -> Tuple[bytes, bytes]:
    """
    Rewrite the status line of a block so h11 accepts it.

    Returns:
        The rewritten block and the HTTP version originally announced
    """
    match = _STATUS_LINE_VERSION.match(block)
    if match is None:
        status_line = block.split(b"\n", 1)[0]
        raise ProtocolError(f"Malformed status line: {status_line!r}")

    version = match.group(1)
    if version.startswith(b"1."):
        return block, version
    return b"HTTP/1.1 " + block[match.end():], version


def parse_response_head(header_section: bytes) -> ResponseHead:
    """
    Parse the final header block of a captured header section.

    Args:
        header_section: Raw header bytes as captured by libcurl

    Returns:
        The parsed status line and header fields

    Raises:
        ProtocolError: If the section is empty or not valid HTTP
    """
    blocks = split_header_blocks(header_section)
    if not blocks:
        raise ProtocolError("No response header captured")

    block, version = _normalize_status_line(blocks[-1])
    if len(blocks) > 1:
        logger.debug(f"Skipping {len(blocks) - 1} interim header block(s)")

    # h11 only parses a response once it has seen the request it answers.
    connection = h11.Connection(h11.CLIENT)
    connection.send(h11.Request(method="GET", target="/", headers=[("Host", "localhost")]))
    connection.send(h11.EndOfMessage())

    try:
        connection.receive_data(block.replace(b"\n", b"\r\n") + b"\r\n\r\n")
        event = connection.next_event()
    except h11.RemoteProtocolError as e:
        raise ProtocolError(str(e), cause=e) from e

    if isinstance(event, (h11.Response, h11.InformationalResponse)):
        return ResponseHead(
            status_code=event.status_code,
            reason=bytes(event.reason),
            http_version=version,
            headers=[(bytes(name), bytes(value)) for name, value in event.headers.raw_items()],
        )

    raise ProtocolError(f"Unexpected parser event: {type(event).__name__}")
