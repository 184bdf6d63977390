"""
Option codes understood by the client.

``Option`` is the closed set of settings a ``SimpleCurl`` may apply to its
session handle. Each member's value is the libcurl option name it maps to;
the transports translate members into concrete codes. A few members have
no libcurl equivalent of their own (``RETURN_TRANSFER``, ``FILE``,
``INFILE``, ``PUT``) and are rewritten by the transport into the matching
write/read callbacks or upload flag.
"""

from enum import Enum, IntEnum


class Option(Enum):
    """Settings that can be applied to a session handle."""

    # Output handling
    RETURN_TRANSFER = "RETURNTRANSFER"   # buffer body instead of printing it
    FILE = "WRITEDATA"                   # write body into an open stream
    HEADER = "HEADER"                    # include response header in output

    # Request line and body
    URL = "URL"
    POST = "POST"
    POSTFIELDS = "POSTFIELDS"
    CUSTOM_REQUEST = "CUSTOMREQUEST"
    PUT = "UPLOAD"
    INFILE = "READDATA"
    INFILE_SIZE = "INFILESIZE"

    # Headers
    HTTP_HEADER = "HTTPHEADER"
    ENCODING = "ACCEPT_ENCODING"
    REFERER = "REFERER"
    USERAGENT = "USERAGENT"

    # Cookies
    COOKIE = "COOKIE"
    COOKIEFILE = "COOKIEFILE"
    COOKIEJAR = "COOKIEJAR"

    # Redirects
    FOLLOW_LOCATION = "FOLLOWLOCATION"
    MAX_REDIRS = "MAXREDIRS"

    # TLS
    SSL_VERIFYHOST = "SSL_VERIFYHOST"
    SSL_VERIFYPEER = "SSL_VERIFYPEER"
    SSL_VERSION = "SSLVERSION"

    # Connection and authentication
    FORBID_REUSE = "FORBID_REUSE"
    UNRESTRICTED_AUTH = "UNRESTRICTED_AUTH"
    USERPWD = "USERPWD"

    @property
    def curl_name(self) -> str:
        """Name of the libcurl option this member maps to."""
        return self.value


class SSLVersion(IntEnum):
    """Values accepted by ``Option.SSL_VERSION``."""

    DEFAULT = 0
    TLSv1 = 1
    SSLv2 = 2
    SSLv3 = 3
    TLSv1_0 = 4
    TLSv1_1 = 5
    TLSv1_2 = 6
    TLSv1_3 = 7


class VerifyHost(IntEnum):
    """Values accepted by ``Option.SSL_VERIFYHOST``."""

    NONE = 0
    # Accepted for backwards compatibility; libcurl >= 7.28.1 treats it as STRICT.
    EXISTS = 1
    STRICT = 2
