"""Execute an endpoint and throw the response body away."""

from dataclasses import dataclass

from spotify_web_api.application.queries.base import execute, execute_async
from spotify_web_api.domain.ports import Endpoint, IAsyncClient, IClient


# Hey future me - this is for the write endpoints (save, remove, pause, repeat...) whose
# response is empty or irrelevant. Errors are STILL classified, only success bodies are dropped.
@dataclass(frozen=True)
class Ignore:
    """Query strategy returning ``None`` on success."""

    endpoint: Endpoint

    def query(self, client: IClient) -> None:
        execute(self.endpoint, client)

    async def query_async(self, client: IAsyncClient) -> None:
        await execute_async(self.endpoint, client)


def ignore(endpoint: Endpoint) -> Ignore:
    return Ignore(endpoint)
