import json
from abc import ABC, abstractmethod
from typing import Any

Headers = dict[str, str]
QueryParams = dict[str, str]


class HttpResponse(ABC):
    @property
    @abstractmethod
    def status_code(self) -> int:
        pass

    @property
    @abstractmethod
    def body(self) -> str:
        pass

    @property
    @abstractmethod
    def headers(self) -> Headers:
        pass

    @abstractmethod
    def header(self, name: str) -> str | None:
        pass

    def json(self) -> Any:
        return json.loads(self.body)


class HttpClient(ABC):
    """Blocking HTTP client used by the network gateways.

    Failures surface as quantalox.exceptions.NetworkError subclasses:
    NetworkConnectionError, NetworkTimeoutError, or HttpStatusError for
    responses outside the 2xx range.
    """

    @abstractmethod
    def set_default_headers(self, headers: Headers) -> None:
        pass

    @abstractmethod
    def set_connect_timeout(self, seconds: int) -> None:
        pass

    @abstractmethod
    def set_read_timeout(self, seconds: int) -> None:
        pass

    @abstractmethod
    def get(
        self,
        url: str,
        params: QueryParams | None = None,
        headers: Headers | None = None,
    ) -> HttpResponse:
        pass

    @abstractmethod
    def post(
        self,
        url: str,
        body: str,
        content_type: str = "application/json",
        headers: Headers | None = None,
    ) -> HttpResponse:
        pass
