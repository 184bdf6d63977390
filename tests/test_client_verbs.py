"""
Tests for SimpleCurl request verbs.

Each verb finishes the request configuration on the session handle and
runs exactly one transfer.
"""

import io

import pytest

from simple_curl.exceptions import ConfigurationError
from simple_curl.http_primitives import ExecutionResult
from simple_curl.options import Option

URL = "http://tzfrs.de/"


class TestGet:
    """Test GET requests."""

    def test_simple_get(self, curl, transport):
        """Test that get only sets the URL and executes."""
        result = curl.get(URL)
        assert isinstance(result, ExecutionResult)
        assert transport.applied == [(Option.URL, URL)]
        assert transport.perform_count == 1

    def test_get_with_params(self, curl, transport):
        """Test that parameters are appended as a query string."""
        curl.get(URL, {"s": "searchterm"})
        assert transport.applied == [(Option.URL, URL + "?s=searchterm")]
        assert transport.perform_count == 1

    def test_get_params_are_url_encoded(self, curl, transport):
        """Test that parameter names and values are encoded."""
        curl.get(URL, {"q": "a b&c", "lang": "en"})
        assert transport.option_value(Option.URL) == URL + "?q=a+b%26c&lang=en"

    def test_get_with_sequence_param(self, curl, transport):
        """Test that list values repeat the parameter."""
        curl.get(URL, {"tag": ["a", "b"]})
        assert transport.option_value(Option.URL) == URL + "?tag=a&tag=b"

    def test_get_with_empty_params(self, curl, transport):
        """Test that an empty mapping still appends the separator."""
        curl.get(URL, {})
        assert transport.option_value(Option.URL) == URL + "?"

    def test_get_with_url_encoding(self, curl, transport):
        """Test that the URL is escaped before parameters are appended."""
        curl.get(URL, {"s": "searchterm"}, url_encode=True)
        assert transport.escaped == [URL]
        assert transport.option_value(Option.URL) == "http%3A%2F%2Ftzfrs.de%2F?s=searchterm"

    def test_get_missing_url(self, curl, transport):
        """Test that a missing URL is a configuration error."""
        with pytest.raises(ConfigurationError):
            curl.get(None)
        assert transport.perform_count == 0


class TestPost:
    """Test POST requests."""

    def test_post_without_data(self, curl, transport):
        """Test that POST without data sets no body."""
        curl.post(URL)
        assert transport.applied == [(Option.URL, URL), (Option.POST, True)]
        assert transport.perform_count == 1

    def test_post_with_string(self, curl, transport):
        """Test that string bodies are passed through verbatim."""
        curl.post(URL, "name=value")
        assert transport.applied == [
            (Option.URL, URL),
            (Option.POST, True),
            (Option.POSTFIELDS, "name=value"),
        ]

    def test_post_with_mapping(self, curl, transport):
        """Test that mapping bodies are form-encoded."""
        curl.post(URL, {"name": "Jane Doe", "age": 30})
        assert transport.option_value(Option.POSTFIELDS) == "name=Jane+Doe&age=30"

    def test_post_with_bytes(self, curl, transport):
        """Test that binary bodies are passed through verbatim."""
        curl.post(URL, b'{"message": "Hello"}')
        assert transport.option_value(Option.POSTFIELDS) == b'{"message": "Hello"}'

    def test_post_with_url_encoding(self, curl, transport):
        """Test that the URL is escaped when requested."""
        curl.post("http://example.com/a b", url_encode=True)
        assert transport.option_value(Option.URL) == "http%3A%2F%2Fexample.com%2Fa%20b"


class TestPut:
    """Test PUT requests."""

    def test_put_without_data(self, curl, transport):
        """Test that PUT uses a custom request method."""
        curl.put(URL)
        assert transport.applied == [(Option.URL, URL), (Option.CUSTOM_REQUEST, "PUT")]
        assert transport.perform_count == 1

    def test_put_with_data(self, curl, transport):
        """Test that PUT sends its body as post fields."""
        curl.put(URL, "payload")
        assert transport.applied == [
            (Option.URL, URL),
            (Option.CUSTOM_REQUEST, "PUT"),
            (Option.POSTFIELDS, "payload"),
        ]


class TestPutWithFile:
    """Test PUT uploads from a stream."""

    def test_put_with_file(self, curl, transport):
        """Test that upload mode, stream and size are applied."""
        upload = io.BytesIO(b"file contents")
        result = curl.put_with_file(URL, upload, 13)
        assert isinstance(result, ExecutionResult)
        assert transport.applied == [
            (Option.URL, URL),
            (Option.PUT, True),
            (Option.INFILE, upload),
            (Option.INFILE_SIZE, 13),
        ]
        assert transport.perform_count == 1

    def test_put_with_file_always_returns_result(self, curl, transport):
        """Test that return_result=False still returns the transfer result."""
        transport.queue_response(b"stored", header_size=0)
        result = curl.put_with_file(URL, io.BytesIO(b"x"), 1, return_result=False)
        assert isinstance(result, ExecutionResult)
        assert result.response == b"stored"
        assert curl.response == b"stored"

    def test_put_with_file_url_encoding(self, curl, transport):
        """Test that the URL is escaped when requested."""
        curl.put_with_file("http://example.com/é", io.BytesIO(b""), 0, url_encode=True)
        assert transport.option_value(Option.URL) == "http%3A%2F%2Fexample.com%2F%C3%A9"

    def test_put_with_file_missing_size(self, curl, transport):
        """Test that a missing size fails before the transfer."""
        with pytest.raises(ConfigurationError):
            curl.put_with_file(URL, io.BytesIO(b""), None)
        assert transport.perform_count == 0


class TestDelete:
    """Test DELETE requests."""

    def test_delete(self, curl, transport):
        """Test that DELETE uses a custom request method."""
        curl.delete(URL)
        assert transport.applied == [(Option.URL, URL), (Option.CUSTOM_REQUEST, "DELETE")]
        assert transport.perform_count == 1

    def test_delete_with_url_encoding(self, curl, transport):
        """Test that the URL is escaped when requested."""
        curl.delete("http://example.com/~user", url_encode=True)
        assert transport.option_value(Option.URL) == "http%3A%2F%2Fexample.com%2F~user"


class TestReuse:
    """Test several requests on one client."""

    def test_sequential_requests(self, curl, transport):
        """Test that each verb runs its own transfer on the same handle."""
        transport.queue_response(b"first")
        transport.queue_response(b"second")
        curl.get(URL)
        assert curl.response == b"first"
        curl.delete(URL)
        assert curl.response == b"second"
        assert transport.perform_count == 2
        assert transport.options_applied(Option.URL) == [URL, URL]
