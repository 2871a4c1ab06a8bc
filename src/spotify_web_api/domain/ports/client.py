"""Transport ports: what the query strategies need from an HTTP client.

Hey future me - the strategies never touch httpx directly. They build a ``RestRequest``, hand it
to an ``IClient``/``IAsyncClient`` and get a ``RestResponse`` back. That is what lets the tests
swap in tiny in-memory clients, and what lets the real clients inject auth in one spot.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import httpx


@dataclass
class RestRequest:
    """An unauthenticated request built from an endpoint."""

    method: str
    url: httpx.URL
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""


@dataclass
class RestResponse:
    """Transport-agnostic response envelope (status, headers, body bytes)."""

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def location(self) -> str | None:
        return self.headers.get("location")

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "RestResponse":
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
        )


class IRestClient(ABC):
    """Knows where the Web API lives."""

    @abstractmethod
    def rest_endpoint(self, endpoint: str) -> httpx.URL:
        """Resolve a relative endpoint path (``me/albums``) into an absolute API URL.

        Raises:
            UrlError: If the path cannot be joined onto the API base URL
        """
        pass


class IClient(IRestClient):
    """Blocking transport."""

    @abstractmethod
    def rest(self, request: RestRequest) -> RestResponse:
        """Execute a request (adding authentication) and return the raw response.

        Raises:
            ClientError: On transport or authentication failures
        """
        pass


class IAsyncClient(IRestClient):
    """Asynchronous transport."""

    @abstractmethod
    async def rest_async(self, request: RestRequest) -> RestResponse:
        """Execute a request (adding authentication) and return the raw response.

        Raises:
            ClientError: On transport or authentication failures
        """
        pass
