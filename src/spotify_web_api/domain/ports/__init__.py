"""Domain ports (interfaces) between endpoints, query strategies and transports."""

from spotify_web_api.domain.ports.client import (
    IAsyncClient,
    IClient,
    IRestClient,
    RestRequest,
    RestResponse,
)
from spotify_web_api.domain.ports.endpoint import Endpoint, Pageable, UrlBase

__all__ = [
    "Endpoint",
    "Pageable",
    "UrlBase",
    "IRestClient",
    "IClient",
    "IAsyncClient",
    "RestRequest",
    "RestResponse",
]
