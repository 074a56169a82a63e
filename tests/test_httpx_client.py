"""Tests for the httpx-backed HttpClient."""

import httpx
import pytest

from quantalox.exceptions import (
    HttpStatusError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
)
from quantalox.network.httpx_client import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    HttpxClient,
    HttpxResponse,
    ParsedUrl,
    build_query_string,
    parse_url,
)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, status_code: int = 200, text: str = "ok", headers=None):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(status_code, text=text, headers=headers)

        super().__init__(handler)


def raising_transport(exc: Exception) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return httpx.MockTransport(handler)


class TestParseUrl:
    def test_splits_scheme_host_and_path(self):
        assert parse_url("https://example.com/api/data") == ParsedUrl(
            scheme_host="https://example.com", path="/api/data"
        )

    def test_keeps_port(self):
        assert parse_url("http://localhost:8080/x").scheme_host == "http://localhost:8080"

    def test_missing_path_defaults_to_root(self):
        assert parse_url("https://example.com").path == "/"

    def test_missing_scheme_raises(self):
        with pytest.raises(NetworkError, match="missing scheme"):
            parse_url("example.com/api")


class TestBuildQueryString:
    def test_preserves_insertion_order(self):
        assert build_query_string({"b": "2", "a": "1"}) == "b=2&a=1"

    def test_encodes_reserved_characters(self):
        assert build_query_string({"q": "a b&c=d/é"}) == "q=a%20b%26c%3Dd%2F%C3%A9"

    def test_empty(self):
        assert build_query_string({}) == ""


class TestHttpxClientGet:
    def test_resolves_target_from_url_and_params(self):
        transport = RecordingTransport()
        client = HttpxClient(transport=transport)

        response = client.get("https://example.com/api/data", {"id": "X1"})

        assert response.status_code == 200
        assert response.body == "ok"
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.scheme == "https"
        assert request.url.host == "example.com"
        assert request.url.raw_path == b"/api/data?id=X1"

    def test_double_slash_path_stays_on_the_same_host(self):
        transport = RecordingTransport()
        client = HttpxClient(transport=transport)

        client.get("https://example.com//api/data", {"id": "X1"})

        url = transport.requests[0].url
        assert url.host == "example.com"
        assert url.raw_path == b"//api/data?id=X1"

    def test_percent_escapes_in_path_are_preserved(self):
        transport = RecordingTransport()
        client = HttpxClient(transport=transport)

        client.get("https://example.com/a%2Fb/c d")

        assert transport.requests[0].url.raw_path == b"/a%2Fb/c%20d"

    def test_appends_to_existing_query(self):
        transport = RecordingTransport()
        client = HttpxClient(transport=transport)

        client.get("https://example.com/api?x=1", {"id": "X1"})

        assert transport.requests[0].url.raw_path == b"/api?x=1&id=X1"

    def test_500_raises_http_status_error(self):
        client = HttpxClient(transport=RecordingTransport(status_code=500, text="boom"))

        with pytest.raises(HttpStatusError) as exc_info:
            client.get("https://example.com/api/data", {"id": "X1"})

        assert exc_info.value.status_code == 500
        assert "boom" in exc_info.value.message

    def test_large_error_body_is_truncated_in_message(self):
        client = HttpxClient(transport=RecordingTransport(status_code=502, text="x" * 5000))

        with pytest.raises(HttpStatusError) as exc_info:
            client.get("https://example.com/")

        assert exc_info.value.status_code == 502
        assert len(exc_info.value.message) < 600
        assert exc_info.value.message.endswith("...")

    def test_404_is_a_network_error(self):
        client = HttpxClient(transport=RecordingTransport(status_code=404))

        with pytest.raises(NetworkError):
            client.get("https://example.com/missing")

    def test_default_headers_merged_with_request_headers(self):
        transport = RecordingTransport()
        client = HttpxClient(transport=transport)
        client.set_default_headers({"User-Agent": "qx", "Accept": "text/plain"})

        client.get("https://example.com/", headers={"Accept": "application/json"})

        request = transport.requests[0]
        assert request.headers["User-Agent"] == "qx"
        assert request.headers["Accept"] == "application/json"

    def test_connect_timeout_maps_to_timeout_error(self):
        client = HttpxClient(transport=raising_transport(httpx.ConnectTimeout("slow")))

        with pytest.raises(NetworkTimeoutError):
            client.get("https://example.com/")

    def test_read_timeout_maps_to_timeout_error(self):
        client = HttpxClient(transport=raising_transport(httpx.ReadTimeout("slow")))

        with pytest.raises(NetworkTimeoutError):
            client.get("https://example.com/")

    def test_connect_error_maps_to_connection_error(self):
        client = HttpxClient(transport=raising_transport(httpx.ConnectError("refused")))

        with pytest.raises(NetworkConnectionError):
            client.get("https://example.com/")


class TestHttpxClientPost:
    def test_posts_body_with_content_type(self):
        transport = RecordingTransport(status_code=201)
        client = HttpxClient(transport=transport)
        client.set_default_headers({"Content-Type": "text/plain"})

        response = client.post("https://example.com/items", '{"a": 1}')

        assert response.status_code == 201
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/items"
        assert request.content == b'{"a": 1}'
        assert request.headers["Content-Type"] == "application/json"

    def test_custom_content_type(self):
        transport = RecordingTransport()
        client = HttpxClient(transport=transport)

        client.post("https://example.com/items", "a=1", "application/x-www-form-urlencoded")

        assert (
            transport.requests[0].headers["Content-Type"]
            == "application/x-www-form-urlencoded"
        )


class TestHttpxClientConfiguration:
    def test_defaults(self):
        client = HttpxClient()

        assert client.connect_timeout == DEFAULT_CONNECT_TIMEOUT == 10
        assert client.read_timeout == DEFAULT_READ_TIMEOUT == 30
        assert client.default_headers == {}

    def test_setters(self):
        client = HttpxClient()

        client.set_connect_timeout(3)
        client.set_read_timeout(7)
        client.set_default_headers({"X-Key": "1"})

        assert client.connect_timeout == 3
        assert client.read_timeout == 7
        assert client.default_headers == {"X-Key": "1"}


class TestHttpxResponse:
    def test_header_lookup_is_case_insensitive(self):
        response = HttpxResponse(200, "{}", {"Content-Type": "application/json"})

        assert response.header("Content-Type") == "application/json"
        assert response.header("content-type") == "application/json"
        assert response.header("X-Missing") is None

    def test_json(self):
        response = HttpxResponse(200, '{"a": [1, 2]}', {})

        assert response.json() == {"a": [1, 2]}

    def test_from_httpx_keeps_headers(self):
        transport = RecordingTransport(headers={"X-Request-Id": "abc"})
        client = HttpxClient(transport=transport)

        response = client.get("https://example.com/")

        assert response.header("x-request-id") == "abc"
        assert response.headers["X-Request-Id"] == "abc"
