"""The Endpoint port: one logical Web API operation.

Hey future me - an Endpoint is a DUMB descriptor. It says "PUT me/albums?ids=a,b" and nothing
else: no HTTP, no auth, no decoding. ``endpoint()``, ``parameters()`` and ``body()`` must be pure
functions of the instance fields, because the paginators call them once per page.

Writing a new endpoint:
    @dataclass(frozen=True)
    class GetAlbum(Endpoint):
        id: AlbumId
        market: str | None = None

        def method(self) -> str:
            return "GET"

        def endpoint(self) -> str:
            return f"albums/{self.id}"

        def parameters(self) -> QueryParams:
            return QueryParams().push_opt("market", self.market)
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from spotify_web_api.domain.exceptions import UrlError
from spotify_web_api.domain.ports.client import IAsyncClient, IClient, IRestClient

if TYPE_CHECKING:
    from spotify_web_api.infrastructure.integrations.params import Body, QueryParams

T = TypeVar("T")

ACCOUNTS_BASE_URL = "https://accounts.spotify.com/"


class UrlBase(str, Enum):
    """Which host an endpoint lives on."""

    API = "api"
    ACCOUNTS = "accounts"

    def endpoint_for(self, client: IRestClient, endpoint: str) -> httpx.URL:
        """Resolve ``endpoint`` against this base.

        Raises:
            UrlError: If the result is not a valid URL
        """
        if self is UrlBase.API:
            return client.rest_endpoint(endpoint)
        try:
            return httpx.URL(ACCOUNTS_BASE_URL).join(endpoint)
        except httpx.InvalidURL as e:
            raise UrlError(endpoint, str(e)) from e


class Endpoint(ABC):
    """Describes one API operation: method, base, path, query parameters and body."""

    @abstractmethod
    def method(self) -> str:
        """HTTP verb (``GET``, ``POST``, ``PUT``, ``DELETE``)."""
        pass

    @abstractmethod
    def endpoint(self) -> str:
        """Path relative to the URL base, e.g. ``playlists/{id}/tracks``."""
        pass

    def url_base(self) -> UrlBase:
        return UrlBase.API

    def parameters(self) -> "QueryParams":
        from spotify_web_api.infrastructure.integrations.params import QueryParams

        return QueryParams()

    def body(self) -> "Body | None":
        """``(mime_type, bytes)`` or None for requests without a body.

        Raises:
            BodyError: If the body cannot be serialized
        """
        return None

    # Yo future me - these two are plain convenience wrappers around the typed query strategy
    # (application/queries/typed.py). Imported lazily because the application layer imports us.
    def query(self, client: IClient, into: type[T] | Any = dict) -> T:
        """Execute and decode the JSON response into ``into``."""
        from spotify_web_api.application.queries.typed import typed

        return typed(self, into).query(client)

    async def query_async(self, client: IAsyncClient, into: type[T] | Any = dict) -> T:
        """Async variant of ``query``."""
        from spotify_web_api.application.queries.typed import typed

        return await typed(self, into).query_async(client)


class Pageable:
    """Marker: the endpoint returns an offset-paged envelope and accepts ``limit``/``offset``.

    Only endpoints mixing this in can be wrapped by the paginators.
    """

    pass
