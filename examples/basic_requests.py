"""
Basic request examples using simple_curl.

This example demonstrates plain and parameterized GET requests, a chain
of options before a request, and reading the header and body apart.
"""

import logging

from simple_curl import SimpleCurl

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def simple_get_request():
    """Demonstrate a simple GET request."""
    with SimpleCurl() as curl:
        curl.get("http://tzfrs.de")
        logger.info(f"Response length: {len(curl.response or b'')} bytes")


def get_request_with_parameters():
    """Demonstrate a GET request with query parameters."""
    with SimpleCurl() as curl:
        result = curl.get("http://tzfrs.de/", {"s": "searchterm"})
        logger.info(f"Requested {result.info.get('url')}")


def chained_options():
    """Demonstrate configuring a request through a chain of setters."""
    with SimpleCurl() as curl:
        curl.set_followlocation().set_maxredirs(15).get("http://tzfrs.de")
        if curl.has_error:
            logger.error(f"{curl.error_no}: {curl.error}")
        else:
            logger.info(curl.response.decode("utf-8", errors="replace")[:200])


def header_and_body():
    """Demonstrate splitting the response into header and body."""
    with SimpleCurl() as curl:
        result = curl.set_header().set_useragent("simple_curl/0.1.0").get("https://httpbin.org/get")
        if result.failed:
            logger.error(f"Request failed: {result.error}")
            return

        head = curl.get_response_head()
        logger.info(f"Status: {head.status_code}")
        logger.info(f"Content-Type: {head.get_header('content-type')}")
        logger.info(f"Body length: {len(curl.get_content_from_response())} bytes")


def main():
    """Run all examples."""
    simple_get_request()
    get_request_with_parameters()
    chained_options()
    header_and_body()


if __name__ == "__main__":
    main()
