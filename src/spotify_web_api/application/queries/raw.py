"""Execute an endpoint and return the undecoded response bytes."""

from dataclasses import dataclass

from spotify_web_api.application.queries.base import execute, execute_async
from spotify_web_api.domain.ports import Endpoint, IAsyncClient, IClient


@dataclass(frozen=True)
class Raw:
    """Query strategy returning the exact body bytes of a successful response.

    Use it for bodies that are not JSON, or when you want to decode them yourself.
    """

    endpoint: Endpoint

    def query(self, client: IClient) -> bytes:
        return execute(self.endpoint, client).content

    async def query_async(self, client: IAsyncClient) -> bytes:
        response = await execute_async(self.endpoint, client)
        return response.content


def raw(endpoint: Endpoint) -> Raw:
    return Raw(endpoint)
