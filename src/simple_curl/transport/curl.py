"""
libcurl transport for simple_curl.

This module implements the Transport interface on top of a curl_cffi
``Curl`` easy handle.
"""

import io
import logging
import re
import sys
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from curl_cffi import Curl, CurlError, CurlInfo, CurlOpt

from ..options import Option
from .base import RawResponse, Transport

logger = logging.getLogger(__name__)


# (metadata key, CurlInfo member name)
INFO_FIELDS: List[Tuple[str, str]] = [
    ("url", "EFFECTIVE_URL"),
    ("content_type", "CONTENT_TYPE"),
    ("http_code", "RESPONSE_CODE"),
    ("header_size", "HEADER_SIZE"),
    ("request_size", "REQUEST_SIZE"),
    ("filetime", "FILETIME"),
    ("ssl_verify_result", "SSL_VERIFYRESULT"),
    ("redirect_count", "REDIRECT_COUNT"),
    ("total_time", "TOTAL_TIME"),
    ("namelookup_time", "NAMELOOKUP_TIME"),
    ("connect_time", "CONNECT_TIME"),
    ("pretransfer_time", "PRETRANSFER_TIME"),
    ("size_upload", "SIZE_UPLOAD"),
    ("size_download", "SIZE_DOWNLOAD"),
    ("speed_download", "SPEED_DOWNLOAD"),
    ("speed_upload", "SPEED_UPLOAD"),
    ("download_content_length", "CONTENT_LENGTH_DOWNLOAD"),
    ("upload_content_length", "CONTENT_LENGTH_UPLOAD"),
    ("starttransfer_time", "STARTTRANSFER_TIME"),
    ("redirect_time", "REDIRECT_TIME"),
    ("redirect_url", "REDIRECT_URL"),
    ("primary_ip", "PRIMARY_IP"),
    ("primary_port", "PRIMARY_PORT"),
    ("local_ip", "LOCAL_IP"),
    ("local_port", "LOCAL_PORT"),
]

# curl_cffi wraps the libcurl message: "Failed to perform, curl: (7) <message>. See https://... for more details."
_CURL_ERROR_TEXT = re.compile(
    r"curl: \(\d+\) (?P<message>.*?)(?:\.? See https?:\S+ first for more details\.)?$",
    re.DOTALL,
)


def libcurl_message(text: str) -> str:
    """
    Extract the bare libcurl error message from a curl_cffi error text.

    Text that does not carry the curl_cffi wrapper is returned unchanged.
    """
    match = _CURL_ERROR_TEXT.search(text)
    if match is None:
        return text
    return match.group("message")


class CurlTransport(Transport):
    """
    Transport backed by one libcurl easy handle.

    Output is routed at perform time: into an in-memory buffer when
    ``RETURN_TRANSFER`` is on, into the stream given by ``FILE`` when one
    is set, and to standard output otherwise.

    curl_cffi frees the request header list and drops its references to
    the upload stream after every perform, while libcurl keeps pointing
    at them. Header lines and the upload stream are therefore held here
    and handed to the handle again right before each perform; the body
    is given to libcurl with ``COPYPOSTFIELDS`` so libcurl owns its copy.
    """

    def __init__(self, curl: Optional[Curl] = None) -> None:
        """
        Initialize the transport.

        Args:
            curl: Existing easy handle to take ownership of. A new one is
                created when omitted.
        """
        self._curl = curl if curl is not None else Curl()
        self._return_transfer = False
        self._output: Optional[BinaryIO] = None
        self._headers: Optional[List[bytes]] = None
        self._infile: Optional[BinaryIO] = None
        self._error = ""
        self._errno = 0
        self._closed = False

        logger.debug("curl session handle acquired")

    def setopt(self, option: Option, value: Any) -> None:
        self._check_open()

        if option is Option.RETURN_TRANSFER:
            self._return_transfer = bool(value)
            return
        if option is Option.FILE:
            self._output = value
            return
        if option is Option.HTTP_HEADER:
            self._headers = self._coerce(list(value))
            return
        if option is Option.INFILE:
            self._infile = value
            return

        if option is Option.POSTFIELDS:
            # Size first so binary bodies are not measured with strlen()
            body = self._coerce(value)
            self._curl.setopt(CurlOpt.POSTFIELDSIZE, len(body))
            self._curl.setopt(CurlOpt.COPYPOSTFIELDS, body)
            return

        code = getattr(CurlOpt, option.curl_name)
        self._curl.setopt(code, self._coerce(value))

    def perform(self) -> RawResponse:
        self._check_open()

        if self._headers is not None:
            self._curl.setopt(CurlOpt.HTTPHEADER, self._headers)
        if self._infile is not None:
            self._curl.setopt(CurlOpt.READDATA, self._infile)

        buffer: Optional[io.BytesIO] = None
        if self._output is not None:
            self._curl.setopt(CurlOpt.WRITEDATA, self._output)
        elif self._return_transfer:
            buffer = io.BytesIO()
            self._curl.setopt(CurlOpt.WRITEDATA, buffer)
        else:
            self._curl.setopt(CurlOpt.WRITEDATA, sys.stdout.buffer)

        self._error = ""
        self._errno = 0
        try:
            self._curl.perform()
        except CurlError as e:
            self._errno = int(e.code)
            self._error = libcurl_message(str(e))
            return None

        if buffer is not None:
            return buffer.getvalue()
        return True

    def getinfo(self) -> Dict[str, Any]:
        self._check_open()

        info: Dict[str, Any] = {}
        for key, name in INFO_FIELDS:
            code = getattr(CurlInfo, name, None)
            if code is None:
                continue
            value = self._curl.getinfo(code)
            if isinstance(value, bytes):
                value = value.decode("utf-8", errors="replace")
            info[key] = value
        return info

    def error(self) -> str:
        return self._error

    def errno(self) -> int:
        return self._errno

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._curl.close()
        logger.debug("curl session handle released")

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("curl session handle is closed")

    @staticmethod
    def _coerce(value: Any) -> Any:
        """Convert Python values into the types curl_cffi passes to libcurl."""
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, str):
            return value.encode()
        if isinstance(value, (list, tuple)):
            return [v.encode() if isinstance(v, str) else v for v in value]
        return value
