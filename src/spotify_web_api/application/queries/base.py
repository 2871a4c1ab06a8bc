"""Request building and execution shared by every query strategy.

Hey future me - Ignore, Raw, Typed and both paginators differ ONLY in what they do with a
successful body. Everything up to that point lives here:

1. URL = url base + endpoint path + endpoint query parameters
2. body and mime type from the endpoint (none -> empty body)
3. Content-Type only when there is a body, Content-Length ALWAYS for POST/PUT,
   even when the body is empty
4. send through the client (which adds auth)
5. classify (infrastructure/integrations/responses.py): 301 first, then non-2xx, then hand
   the body to the strategy
"""

import httpx

from spotify_web_api.domain.ports import (
    Endpoint,
    IAsyncClient,
    IClient,
    IRestClient,
    RestRequest,
    RestResponse,
)
from spotify_web_api.infrastructure.integrations.responses import (
    check_response,
    decode_into,
    decode_json,
)

METHODS_WITH_LENGTH = frozenset({"POST", "PUT"})


def endpoint_url(endpoint: Endpoint, client: IRestClient) -> httpx.URL:
    """Absolute URL of an endpoint including its own query parameters."""
    url = endpoint.url_base().endpoint_for(client, endpoint.endpoint())
    return endpoint.parameters().add_to_url(url)


def build_request(endpoint: Endpoint, url: httpx.URL) -> RestRequest:
    """Build the request for ``url`` with the endpoint's method and body.

    Raises:
        BodyError: If the endpoint body cannot be serialized
    """
    method = endpoint.method().upper()
    body = endpoint.body()

    headers: dict[str, str] = {}
    content = b""
    if body is not None:
        mime, content = body
        headers["Content-Type"] = mime
    if method in METHODS_WITH_LENGTH:
        headers["Content-Length"] = str(len(content))

    return RestRequest(method=method, url=url, headers=headers, content=content)


def execute(endpoint: Endpoint, client: IClient, url: httpx.URL | None = None) -> RestResponse:
    """Send ``endpoint`` (to ``url`` if given, e.g. a ``next`` link) and check the response."""
    if url is None:
        url = endpoint_url(endpoint, client)
    request = build_request(endpoint, url)
    return check_response(client.rest(request))


async def execute_async(
    endpoint: Endpoint, client: IAsyncClient, url: httpx.URL | None = None
) -> RestResponse:
    """Async variant of ``execute``."""
    if url is None:
        url = endpoint_url(endpoint, client)
    request = build_request(endpoint, url)
    return check_response(await client.rest_async(request))


__all__ = [
    "build_request",
    "check_response",
    "decode_into",
    "decode_json",
    "endpoint_url",
    "execute",
    "execute_async",
]
