"""Execute an endpoint and decode its JSON body into a typed value."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from spotify_web_api.application.queries.base import (
    decode_into,
    decode_json,
    execute,
    execute_async,
)
from spotify_web_api.domain.ports import Endpoint, IAsyncClient, IClient

T = TypeVar("T")


@dataclass(frozen=True)
class Typed(Generic[T]):
    """Query strategy decoding the response into ``into``.

    ``into`` is anything pydantic's ``TypeAdapter`` accepts: a BaseModel, ``Page[MyModel]``,
    ``list[bool]``, ``dict``...
    """

    endpoint: Endpoint
    into: Any = dict

    def query(self, client: IClient) -> T:
        """Execute and decode.

        Raises:
            ServerError: If the body is not JSON
            DataTypeError: If the JSON does not fit ``into``
        """
        response = execute(self.endpoint, client)
        return decode_into(decode_json(response), self.into)

    async def query_async(self, client: IAsyncClient) -> T:
        response = await execute_async(self.endpoint, client)
        return decode_into(decode_json(response), self.into)


def typed(endpoint: Endpoint, into: type[T] | Any = dict) -> Typed[T]:
    return Typed(endpoint, into)
