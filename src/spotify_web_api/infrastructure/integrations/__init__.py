"""Spotify transport clients, OAuth flows and wire encoding."""

from spotify_web_api.infrastructure.integrations.http_pool import HttpClientPool
from spotify_web_api.infrastructure.integrations.params import (
    FormParams,
    JsonParams,
    QueryParams,
    param_value,
)
from spotify_web_api.infrastructure.integrations.spotify_client import (
    API_BASE_URL,
    AsyncSpotifyClient,
    AsyncSpotifyClientCredentials,
    AsyncSpotifyPKCE,
    SpotifyClient,
    SpotifyClientCredentials,
    SpotifyPKCE,
)
from spotify_web_api.infrastructure.integrations.token_store import TokenStore

__all__ = [
    "API_BASE_URL",
    "AsyncSpotifyClient",
    "AsyncSpotifyClientCredentials",
    "AsyncSpotifyPKCE",
    "FormParams",
    "HttpClientPool",
    "JsonParams",
    "QueryParams",
    "SpotifyClient",
    "SpotifyClientCredentials",
    "SpotifyPKCE",
    "TokenStore",
    "param_value",
]
