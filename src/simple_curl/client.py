"""
Fluent HTTP client for simple_curl.

This module implements SimpleCurl, a thin object-oriented facade over a
libcurl session handle. Setters configure the pending request and return
the client so calls can be chained; the verb methods finish the request
and run it.

Example:
    >>> with SimpleCurl() as curl:
    ...     curl.set_followlocation().set_maxredirs(15).get("http://example.com")
    ...     if curl.has_error:
    ...         print(f"{curl.error_no}: {curl.error}")
"""

import logging
import weakref
from typing import Any, BinaryIO, List, Mapping, Optional, Union
from urllib.parse import urlencode

from .exceptions import ConfigurationError
from .http11 import parse_response_head
from .http_primitives import ExecutionResult, Info, ResponseHead
from .options import Option, SSLVersion
from .transport import CurlTransport, RawResponse, Transport

logger = logging.getLogger(__name__)

# Request bodies: sent verbatim, or form-encoded when given as a mapping.
Body = Union[str, bytes, Mapping[str, Any]]


class SimpleCurl:
    """
    Fluent facade over one libcurl session handle.

    The handle is acquired on construction and released exactly once, by
    ``close()``, by leaving a ``with`` block, or when the client is
    garbage collected. Every ``execute`` overwrites the public result
    attributes (``response``, ``info``, ``error``, ``error_no``,
    ``response_header``); no history is kept.

    ``has_error`` is set to True by a failed transfer and is never reset
    by a later successful one.

    Not thread-safe: give each thread its own client.
    """

    # Default configuration
    DEFAULT_RETURN_TRANSFER = True
    DEFAULT_FOLLOW_LOCATION = True

    def __init__(
        self,
        return_transfer: bool = DEFAULT_RETURN_TRANSFER,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the client.

        Args:
            return_transfer: Buffer the response so it is available as
                ``response`` instead of being written to standard output
            transport: Session handle to drive. A new libcurl handle is
                acquired when omitted; the client takes ownership either way.
        """
        self._transport = transport if transport is not None else CurlTransport()
        self._finalizer = weakref.finalize(self, self._transport.close)

        self.response: RawResponse = None
        self.info: Info = {}
        self.error = ""
        self.error_no = 0
        self.has_error = False
        self.response_header = b""

        try:
            self.set_opt(Option.RETURN_TRANSFER, return_transfer)
            self.set_opt(Option.FOLLOW_LOCATION, self.DEFAULT_FOLLOW_LOCATION)
        except Exception:
            self.close()
            raise

        logger.debug(f"SimpleCurl initialized: return_transfer={return_transfer}")

    # -- lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release the session handle. Further calls do nothing."""
        if self._finalizer.alive:
            self._finalizer()
            logger.debug("SimpleCurl closed")

    @property
    def closed(self) -> bool:
        """Check if the session handle has been released."""
        return not self._finalizer.alive

    def __enter__(self) -> "SimpleCurl":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _check_open(self) -> None:
        if self.closed:
            raise ConfigurationError("Session handle is closed")

    # -- generic options ---------------------------------------------------

    def set_opt(self, option: Option, value: Any) -> "SimpleCurl":
        """
        Set an option for the transfer.

        Args:
            option: The option to set
            value: The value for the option

        Returns:
            The client, for chaining

        Raises:
            ConfigurationError: If the option or value is missing, or the
                option is unknown
        """
        self._validate_option(option, value)
        self._check_open()

        self._transport.setopt(option, value)
        logger.debug(f"Option applied: {option.name}={self._loggable(option, value)}")
        return self

    def set_opt_array(self, options: Mapping[Option, Any]) -> "SimpleCurl":
        """
        Set several options in one call.

        Every entry is validated before any of them is applied.

        Args:
            options: Mapping of option to value

        Returns:
            The client, for chaining

        Raises:
            ConfigurationError: If any option or value is missing
        """
        if options is None:
            raise ConfigurationError("Option mapping is missing")
        for option, value in options.items():
            self._validate_option(option, value)
        self._check_open()

        self._transport.setopt_array(options)
        logger.debug(f"Applied {len(options)} options in one batch")
        return self

    @staticmethod
    def _validate_option(option: Any, value: Any) -> None:
        if option is None or value is None:
            raise ConfigurationError("At least one option parameter (Option/Value) is missing")
        if not isinstance(option, Option):
            raise ConfigurationError(f"Unknown option: {option!r}")

    @staticmethod
    def _loggable(option: Option, value: Any) -> Any:
        if option in (Option.USERPWD, Option.COOKIE):
            return "***"
        if option in (Option.FILE, Option.INFILE):
            return type(value).__name__
        return repr(value)

    # -- setters -----------------------------------------------------------

    def set_cookie_options(
        self,
        cookie: Optional[str] = None,
        cookie_file: Optional[str] = None,
        cookie_jar: Optional[str] = None,
    ) -> "SimpleCurl":
        """
        Configure cookie handling. Each argument is applied only when given.

        Args:
            cookie: Contents of the "Cookie: " header, with multiple cookies
                separated by a semicolon and a space ("fruit=apple; colour=red")
            cookie_file: File to read cookies from, in Netscape format or
                as plain HTTP-style headers
            cookie_jar: File all cookies are written to when the handle is
                released

        Returns:
            The client, for chaining
        """
        if cookie:
            self.set_opt(Option.COOKIE, cookie)
        if cookie_file:
            self.set_opt(Option.COOKIEFILE, cookie_file)
        if cookie_jar:
            self.set_opt(Option.COOKIEJAR, cookie_jar)
        return self

    def set_encoding(self, encoding: str) -> "SimpleCurl":
        """
        Set the contents of the "Accept-Encoding: " header.

        Supported encodings are "identity", "deflate" and "gzip"; an empty
        string sends every encoding libcurl supports. The response is
        decoded accordingly.
        """
        return self.set_opt(Option.ENCODING, encoding)

    def set_file(self, file: BinaryIO) -> "SimpleCurl":
        """Write the response body into an open binary stream."""
        return self.set_opt(Option.FILE, file)

    def set_followlocation(self, followlocation: bool = True) -> "SimpleCurl":
        """
        Follow any "Location: " header the server sends.

        Redirects are followed recursively, bounded only by ``set_maxredirs``.
        """
        return self.set_opt(Option.FOLLOW_LOCATION, followlocation)

    def set_header(self, header: bool = True) -> "SimpleCurl":
        """Include the response header in the output."""
        return self.set_opt(Option.HEADER, header)

    def set_http_header(self, headers: List[str]) -> "SimpleCurl":
        """
        Set request header fields.

        Args:
            headers: Lines such as ["Content-type: text/plain",
                "Content-length: 100"]
        """
        return self.set_opt(Option.HTTP_HEADER, headers)

    def set_maxredirs(self, maxredirs: int) -> "SimpleCurl":
        """
        Limit the number of redirects followed.

        Also turns redirect following on.
        """
        return self.set_opt(Option.MAX_REDIRS, maxredirs).set_followlocation()

    def set_referer(self, referer: str) -> "SimpleCurl":
        """Set the contents of the "Referer: " header."""
        return self.set_opt(Option.REFERER, referer)

    def set_ssl_verifyhost(self, ssl_verifyhost: int) -> "SimpleCurl":
        """
        Set how the server certificate's name is checked.

        0 skips the check; 2 requires the certificate to match the host
        name and should be kept in production. libcurl 7.28.1 and later
        no longer accept 1. See ``VerifyHost``.
        """
        return self.set_opt(Option.SSL_VERIFYHOST, ssl_verifyhost)

    def set_ssl_verifypeer(self, ssl_verifypeer: bool = True) -> "SimpleCurl":
        """Verify the peer's certificate (libcurl's default)."""
        return self.set_opt(Option.SSL_VERIFYPEER, ssl_verifypeer)

    def set_ssl_version(self, version: int = SSLVersion.TLSv1_0) -> "SimpleCurl":
        """
        Pin the SSL/TLS version instead of letting libcurl negotiate it.

        Args:
            version: One of ``SSLVersion``; TLS 1.0 unless given
        """
        return self.set_opt(Option.SSL_VERSION, int(version))

    def set_useragent(self, useragent: str) -> "SimpleCurl":
        """Set the contents of the "User-Agent: " header."""
        return self.set_opt(Option.USERAGENT, useragent)

    def set_forbid_reuse(self, forbid_reuse: bool = True) -> "SimpleCurl":
        """Close the connection when the transfer ends instead of pooling it."""
        return self.set_opt(Option.FORBID_REUSE, forbid_reuse)

    def set_user_pwd(
        self,
        username: str,
        password: str,
        unrestricted_auth: bool = True,
    ) -> "SimpleCurl":
        """
        Authenticate with "[username]:[password]".

        Args:
            username: User name
            password: Password
            unrestricted_auth: Keep sending the credentials when a redirect
                leads to a different host

        Returns:
            The client, for chaining

        Raises:
            ConfigurationError: If the username or password is missing
        """
        if username is None or password is None:
            raise ConfigurationError("Username and password are required")

        if unrestricted_auth:
            self.set_opt(Option.UNRESTRICTED_AUTH, unrestricted_auth)
        return self.set_opt(Option.USERPWD, f"{username}:{password}")

    # -- verbs -------------------------------------------------------------

    def get(
        self,
        url: str,
        data: Optional[Mapping[str, Any]] = None,
        url_encode: bool = False,
    ) -> ExecutionResult:
        """
        Perform a GET request.

        Args:
            url: The URL to send the request to
            data: Parameters appended to the URL as a query string
            url_encode: Percent-escape the URL before use

        Returns:
            The transfer result
        """
        url = self._prepare_url(url, url_encode)
        if data is not None:
            url += "?" + urlencode(data, doseq=True)
        return self.set_opt(Option.URL, url).execute()

    def post(
        self,
        url: str,
        data: Optional[Body] = None,
        url_encode: bool = False,
    ) -> ExecutionResult:
        """
        Perform a POST request.

        This is the regular application/x-www-form-urlencoded kind used by
        HTML forms.

        Args:
            url: The URL to send the request to
            data: Request body
            url_encode: Percent-escape the URL before use

        Returns:
            The transfer result
        """
        url = self._prepare_url(url, url_encode)
        self.set_opt(Option.URL, url).set_opt(Option.POST, True)
        if data is not None:
            self.set_opt(Option.POSTFIELDS, self._encode_body(data))
        return self.execute()

    def put(
        self,
        url: str,
        data: Optional[Body] = None,
        url_encode: bool = False,
    ) -> ExecutionResult:
        """
        Perform a PUT request with an in-memory body.

        Args:
            url: The URL to send the request to
            data: Request body
            url_encode: Percent-escape the URL before use

        Returns:
            The transfer result
        """
        url = self._prepare_url(url, url_encode)
        self.set_opt(Option.URL, url).set_opt(Option.CUSTOM_REQUEST, "PUT")
        if data is not None:
            self.set_opt(Option.POSTFIELDS, self._encode_body(data))
        return self.execute()

    def put_with_file(
        self,
        url: str,
        in_file: BinaryIO,
        in_file_size: int,
        return_result: bool = True,
        url_encode: bool = False,
    ) -> ExecutionResult:
        """
        Upload a file with PUT.

        Args:
            url: The URL to send the request to
            in_file: Open, readable binary stream to upload
            in_file_size: Number of bytes to upload
            return_result: Accepted for call compatibility; the result is
                always returned
            url_encode: Percent-escape the URL before use

        Returns:
            The transfer result
        """
        url = self._prepare_url(url, url_encode)
        return (
            self.set_opt(Option.URL, url)
            .set_opt(Option.PUT, True)
            .set_opt(Option.INFILE, in_file)
            .set_opt(Option.INFILE_SIZE, in_file_size)
            .execute()
        )

    def delete(self, url: str, url_encode: bool = False) -> ExecutionResult:
        """
        Perform a DELETE request.

        Args:
            url: The URL to send the request to
            url_encode: Percent-escape the URL before use

        Returns:
            The transfer result
        """
        url = self._prepare_url(url, url_encode)
        return (
            self.set_opt(Option.URL, url)
            .set_opt(Option.CUSTOM_REQUEST, "DELETE")
            .execute()
        )

    def _prepare_url(self, url: str, url_encode: bool) -> str:
        if url is None:
            raise ConfigurationError("URL is missing")
        if url_encode:
            self._check_open()
            return self._transport.escape(url)
        return url

    @staticmethod
    def _encode_body(data: Body) -> Union[str, bytes]:
        if isinstance(data, Mapping):
            return urlencode(data, doseq=True)
        return data

    # -- execution ---------------------------------------------------------

    def execute(self) -> ExecutionResult:
        """
        Run the configured transfer and capture its outcome.

        Transfer failures are not raised: they leave ``response`` falsy,
        set ``has_error`` and fill ``error`` and ``error_no``.

        Returns:
            The transfer result
        """
        self._check_open()

        self.response = self._transport.perform()
        self.info = self._transport.getinfo()
        self.error = self._transport.error()
        self.error_no = self._transport.errno()
        self.response_header = self.get_header_from_response()

        error: Optional[str] = None
        if not self.response:
            error = self.error
            self.has_error = True
            logger.warning(f"Transfer to {self.info.get('url')} failed: {self.error_no}: {self.error}")
        else:
            logger.debug(
                f"Transfer to {self.info.get('url')} -> {self.info.get('http_code')} "
                f"({self.info.get('total_time', 0.0):.3f}s)"
            )

        return ExecutionResult(
            response=self.response,
            info=self.info,
            error=error,
            error_no=self.error_no,
        )

    # -- response accessors ------------------------------------------------

    def get_header_from_response(self) -> bytes:
        """Get the header section of the last response."""
        if not isinstance(self.response, bytes):
            return b""
        return self.response[:self._header_size()]

    def get_content_from_response(self) -> bytes:
        """Get the body of the last response, without its header section."""
        if not isinstance(self.response, bytes):
            return b""
        return self.response[self._header_size():]

    def get_response_head(self) -> ResponseHead:
        """
        Parse the header section of the last response.

        Only meaningful after ``set_header()``; otherwise libcurl does not
        put the header into the output.

        Raises:
            ProtocolError: If no header was captured or it is not valid HTTP
        """
        return parse_response_head(self.get_header_from_response())

    def _header_size(self) -> int:
        return int(self.info.get("header_size") or 0)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<SimpleCurl [{state}] has_error={self.has_error}>"
