"""Typed client for the Spotify Web API.

Quick tour:

    from spotify_web_api import SpotifyClientCredentials, paged_all
    from spotify_web_api.api import GetSeveralAlbums

    with SpotifyClientCredentials.from_settings() as spotify:
        spotify.request_token()
        albums = GetSeveralAlbums(["382ObEPsp2rxGrnsizN5TX"]).query(spotify)
"""

from spotify_web_api.application.queries import (
    Ignore,
    Paged,
    Raw,
    Typed,
    ignore,
    paged,
    paged_all,
    paged_with_limit,
    paged_with_limit_and_offset,
    raw,
    typed,
)
from spotify_web_api.domain.dtos import Page, Token
from spotify_web_api.domain.exceptions import ApiError, AuthError, SpotifyWebApiError
from spotify_web_api.domain.ports import Endpoint, Pageable
from spotify_web_api.domain.value_objects import Pagination, Scope
from spotify_web_api.infrastructure.integrations import (
    AsyncSpotifyClientCredentials,
    AsyncSpotifyPKCE,
    SpotifyClientCredentials,
    SpotifyPKCE,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AsyncSpotifyClientCredentials",
    "AsyncSpotifyPKCE",
    "AuthError",
    "Endpoint",
    "Ignore",
    "Page",
    "Paged",
    "Pageable",
    "Pagination",
    "Raw",
    "Scope",
    "SpotifyClientCredentials",
    "SpotifyPKCE",
    "SpotifyWebApiError",
    "Token",
    "Typed",
    "ignore",
    "paged",
    "paged_all",
    "paged_with_limit",
    "paged_with_limit_and_offset",
    "raw",
    "typed",
]
