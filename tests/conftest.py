"""Shared fixtures: in-memory transports for exercising endpoints and query strategies."""

from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from spotify_web_api.domain.ports import IAsyncClient, IClient, RestRequest, RestResponse
from spotify_web_api.infrastructure.integrations.params import query_pairs

API_URL = "https://api.spotify.com/v1/"


@dataclass
class ExpectedUrl:
    """What a test expects the next request to look like."""

    endpoint: str
    method: str = "GET"
    query: list[tuple[str, str]] = field(default_factory=list)
    content_type: str | None = None
    body: bytes = b""


class SingleTestClient(IClient, IAsyncClient):
    """Answers exactly one kind of request, asserting it matches ``expected``."""

    def __init__(
        self,
        expected: ExpectedUrl,
        data: bytes = b"",
        status_code: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.expected = expected
        self.data = data
        self.status_code = status_code
        self.headers = httpx.Headers(headers or {})
        self.requests: list[RestRequest] = []

    def rest_endpoint(self, endpoint: str) -> httpx.URL:
        return httpx.URL(API_URL).join(endpoint)

    def _check(self, request: RestRequest) -> RestResponse:
        self.requests.append(request)
        expected = self.expected
        assert request.method == expected.method
        url = request.url
        assert f"{url.scheme}://{url.host}{url.path}" == f"{API_URL}{expected.endpoint}"
        assert query_pairs(request.url) == expected.query
        assert request.headers.get("Content-Type") == expected.content_type
        assert request.content == expected.body
        if expected.method in ("POST", "PUT"):
            assert request.headers["Content-Length"] == str(len(expected.body))
        else:
            assert "Content-Length" not in request.headers
        return RestResponse(self.status_code, self.headers, self.data)

    def rest(self, request: RestRequest) -> RestResponse:
        return self._check(request)

    async def rest_async(self, request: RestRequest) -> RestResponse:
        return self._check(request)


class PagedTestClient(IClient, IAsyncClient):
    """Serves ``total`` items ``{"id": i}`` as offset pages with absolute ``next`` links."""

    def __init__(self, endpoint: str, total: int) -> None:
        self.endpoint = endpoint
        self.dataset = [{"id": i} for i in range(total)]
        self.requests: list[httpx.URL] = []

    def rest_endpoint(self, endpoint: str) -> httpx.URL:
        return httpx.URL(API_URL).join(endpoint)

    def _page(self, request: RestRequest) -> RestResponse:
        url = request.url
        self.requests.append(url)
        assert request.method == "GET"
        assert url.path == f"/v1/{self.endpoint}"

        offset = int(url.params["offset"])
        limit = int(url.params["limit"])
        items = self.dataset[offset : offset + limit]
        end = offset + limit
        next_url = str(url.copy_set_param("offset", str(end))) if end < len(self.dataset) else None
        body: dict[str, Any] = {
            "href": str(url),
            "limit": limit,
            "next": next_url,
            "offset": offset,
            "previous": None,
            "total": len(self.dataset),
            "items": items,
        }
        return RestResponse(200, httpx.Headers(), httpx.Response(200, json=body).content)

    def rest(self, request: RestRequest) -> RestResponse:
        return self._page(request)

    async def rest_async(self, request: RestRequest) -> RestResponse:
        return self._page(request)


@pytest.fixture
def single_client():
    """Factory for a client expecting one specific request."""
    return SingleTestClient


@pytest.fixture
def expected_url():
    """Factory for request expectations."""
    return ExpectedUrl


@pytest.fixture
def paged_client():
    """Factory for a client serving an offset-paged dataset."""
    return PagedTestClient
