"""HttpClient implementation over httpx.

Each request opens a short-lived httpx.Client and sends to an absolute URL
built from the scheme+host and the raw target, so the client itself holds
only configuration (default headers and timeouts). It is not reentrant:
configure it before sharing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

import httpx

from quantalox.exceptions import (
    HttpStatusError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
)
from quantalox.logging_config import get_logger
from quantalox.network.interfaces import Headers, HttpClient, HttpResponse, QueryParams

logger = get_logger(__name__)

DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 30

# Reserved characters and existing escapes stay as written in the target
_TARGET_SAFE = "/?[]@!$&'()*+,;=:%"


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    scheme_host: str  # e.g. "https://www.ls-tc.de"
    path: str  # e.g. "/_rpc/json/instrument/chart/data"


def parse_url(url: str) -> ParsedUrl:
    """Split an absolute URL into its scheme+host prefix and its path.

    Raises:
        NetworkError: If the URL has no scheme
    """
    scheme_end = url.find("://")
    if scheme_end == -1:
        raise NetworkError(f"Invalid URL (missing scheme): {url}")

    path_start = url.find("/", scheme_end + 3)
    if path_start == -1:
        return ParsedUrl(scheme_host=url, path="/")
    return ParsedUrl(scheme_host=url[:path_start], path=url[path_start:])


def build_query_string(params: QueryParams) -> str:
    """URL-encode params as k=v pairs joined by '&', in insertion order."""
    return "&".join(
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
        for key, value in params.items()
    )


class HttpxResponse(HttpResponse):
    def __init__(self, status_code: int, body: str, headers: Headers) -> None:
        self._status_code = status_code
        self._body = body
        self._headers = dict(headers)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> HttpxResponse:
        encoding = response.headers.encoding
        # Raw keys keep the case the server sent; later duplicates win.
        headers = {
            key.decode(encoding): value.decode(encoding)
            for key, value in response.headers.raw
        }
        return cls(response.status_code, response.text, headers)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> str:
        return self._body

    @property
    def headers(self) -> Headers:
        return dict(self._headers)

    def header(self, name: str) -> str | None:
        if name in self._headers:
            return self._headers[name]
        lowered = name.lower()
        for key, value in self._headers.items():
            if key.lower() == lowered:
                return value
        return None

    def __repr__(self) -> str:
        return f"HttpxResponse(status_code={self._status_code})"


class HttpxClient(HttpClient):
    def __init__(
        self,
        connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: int = DEFAULT_READ_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._default_headers: Headers = {}
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._transport = transport

    @property
    def default_headers(self) -> Headers:
        return dict(self._default_headers)

    @property
    def connect_timeout(self) -> int:
        return self._connect_timeout

    @property
    def read_timeout(self) -> int:
        return self._read_timeout

    def set_default_headers(self, headers: Headers) -> None:
        self._default_headers = dict(headers)

    def set_connect_timeout(self, seconds: int) -> None:
        self._connect_timeout = seconds

    def set_read_timeout(self, seconds: int) -> None:
        self._read_timeout = seconds

    def get(
        self,
        url: str,
        params: QueryParams | None = None,
        headers: Headers | None = None,
    ) -> HttpResponse:
        parsed = parse_url(url)
        target = parsed.path
        if params:
            separator = "&" if "?" in target else "?"
            target += separator + build_query_string(params)
        return self._send("GET", url, parsed.scheme_host, target, self._merge(headers))

    def post(
        self,
        url: str,
        body: str,
        content_type: str = "application/json",
        headers: Headers | None = None,
    ) -> HttpResponse:
        parsed = parse_url(url)
        merged = self._merge(headers)
        merged["Content-Type"] = content_type
        return self._send(
            "POST", url, parsed.scheme_host, parsed.path, merged, content=body
        )

    def _merge(self, headers: Headers | None) -> Headers:
        merged = dict(self._default_headers)
        if headers:
            merged.update(headers)
        return merged

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._connect_timeout,
            read=self._read_timeout,
            write=self._read_timeout,
            pool=self._connect_timeout,
        )

    def _send(
        self,
        method: str,
        url: str,
        scheme_host: str,
        target: str,
        headers: Headers,
        content: str | None = None,
    ) -> HttpResponse:
        try:
            # Resolving target against a base_url would read "//x" as a host
            request_url = httpx.URL(scheme_host).copy_with(
                raw_path=quote(target, safe=_TARGET_SAFE).encode("ascii")
            )
            with httpx.Client(
                timeout=self._timeout(),
                transport=self._transport,
            ) as client:
                response = client.request(
                    method, request_url, headers=headers, content=content
                )
        except httpx.TimeoutException as e:
            logger.warning("http_request_timeout", method=method, url=url, error=str(e))
            raise NetworkTimeoutError(f"Request timed out: {url}") from e
        except httpx.TransportError as e:
            logger.warning(
                "http_connection_error", method=method, url=url, error=str(e)
            )
            raise NetworkConnectionError(f"Failed to connect: {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Request failed: {url}: {e}") from e

        logger.debug(
            "http_request_completed",
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if not 200 <= response.status_code < 300:
            logger.warning(
                "http_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise HttpStatusError(response.status_code, response.text)

        return HttpxResponse.from_httpx(response)
