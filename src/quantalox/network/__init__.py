from quantalox.network.httpx_client import (
    HttpxClient,
    HttpxResponse,
    build_query_string,
    parse_url,
)
from quantalox.network.interfaces import Headers, HttpClient, HttpResponse, QueryParams

__all__ = [
    "Headers",
    "HttpClient",
    "HttpResponse",
    "HttpxClient",
    "HttpxResponse",
    "QueryParams",
    "build_query_string",
    "parse_url",
]
