"""Spotify Web API clients (blocking and async) for both OAuth flows.

Hey future me - the class map:

                      blocking (httpx.Client)        async (httpx.AsyncClient)
    PKCE              SpotifyPKCE                    AsyncSpotifyPKCE
    client creds      SpotifyClientCredentials       AsyncSpotifyClientCredentials

They all implement the transport ports (IClient / IAsyncClient), so any query strategy takes any
of them. Before EVERY request a client:

1. reads the token (EmptyAccessTokenError if there is none yet)
2. if it is expired AND there is a refresh token, refreshes and stores the new one first
3. adds ``Authorization: Bearer ...`` (never logged) and sends

Step 2 can race between concurrent callers - see token_store.py, it is accepted.

Usage (PKCE):
    with SpotifyPKCE(client_id, "http://127.0.0.1:8888/callback", Scope.library()) as spotify:
        print(spotify.user_authorization_url())
        spotify.request_token_from_redirect_url(input("Paste the redirect URL: "))
        albums = paged_all(GetUserSavedAlbums()).query(spotify)
"""

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

import httpx

from spotify_web_api.config.settings import HttpSettings, Settings, SpotifySettings, get_settings
from spotify_web_api.domain.dtos import Token
from spotify_web_api.domain.exceptions import (
    AuthError,
    ClientError,
    ConfigurationError,
    EmptyRefreshTokenError,
    UrlError,
)
from spotify_web_api.domain.ports import (
    IAsyncClient,
    IClient,
    IRestClient,
    RestRequest,
    RestResponse,
)
from spotify_web_api.domain.value_objects.scopes import Scope, parse_scopes
from spotify_web_api.infrastructure.integrations.auth import (
    AuthCodePKCE,
    AuthFlow,
    ClientCredentials,
    PKCEStage,
)
from spotify_web_api.infrastructure.integrations.auth.base import header_value
from spotify_web_api.infrastructure.integrations.http_pool import HttpClientPool, transport_error
from spotify_web_api.infrastructure.integrations.token_store import TokenCallback, TokenStore

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.spotify.com/v1/"

ClientT = TypeVar("ClientT", bound="BaseSpotifyClient")


class BaseSpotifyClient(IRestClient):
    """State shared by every client: auth flow, API base URL and the token store."""

    def __init__(self, auth: AuthFlow, api_url: str = API_BASE_URL) -> None:
        self.auth = auth
        # join() drops the last path segment unless the base ends with "/"
        self.api_url = httpx.URL(api_url if api_url.endswith("/") else f"{api_url}/")
        self._tokens = TokenStore()

    def rest_endpoint(self, endpoint: str) -> httpx.URL:
        logger.debug("REST api call %s", endpoint)
        try:
            return self.api_url.join(endpoint)
        except httpx.InvalidURL as e:
            raise UrlError(endpoint, str(e)) from e

    @property
    def token(self) -> Token | None:
        """The current token, if any."""
        return self._tokens.get()

    def token_callback(self: ClientT, callback: TokenCallback) -> ClientT:
        """Register a function called with every newly stored token (e.g. to persist it)."""
        self._tokens.callback = callback
        return self

    def token_to_string(self) -> str:
        """Serialize the current token to JSON.

        Raises:
            EmptyAccessTokenError: If there is no token yet
        """
        return self._tokens.to_json()

    def _store_token(self, token: Token, previous: Token | None = None) -> Token:
        return self._tokens.set(token, previous)

    @staticmethod
    def _http_request(request: RestRequest, token: Token) -> httpx.Request:
        headers = dict(request.headers)
        headers["Authorization"] = header_value(f"Bearer {token.access_token}")
        return httpx.Request(
            request.method, request.url, headers=headers, content=request.content
        )


class SpotifyClient(BaseSpotifyClient, IClient):
    """Blocking client. Use one of the flow-specific subclasses."""

    def __init__(
        self,
        auth: AuthFlow,
        http: httpx.Client | None = None,
        api_url: str = API_BASE_URL,
        http_settings: HttpSettings | None = None,
    ) -> None:
        super().__init__(auth, api_url)
        if http is None:
            http_settings = http_settings or HttpSettings()
            http = HttpClientPool.create_client(
                timeout=http_settings.timeout,
                max_keepalive=http_settings.max_keepalive,
                max_connections=http_settings.max_connections,
            )
        self.http = http

    def _fresh_token(self) -> Token:
        token = self._tokens.require()
        if token.is_expired and token.refresh_token:
            logger.info("Access token expired, refreshing")
            refreshed = self.auth.refresh_token(self.http, token.refresh_token)
            token = self._store_token(refreshed, previous=token)
        return token

    def rest(self, request: RestRequest) -> RestResponse:
        try:
            token = self._fresh_token()
            http_request = self._http_request(request, token)
        except AuthError as e:
            raise ClientError(e) from e

        logger.debug("%s %s", request.method, request.url)
        try:
            response = self.http.send(http_request)
        except httpx.HTTPError as e:
            logger.warning("Spotify request %s %s failed: %s", request.method, request.url, e)
            raise transport_error(e) from e
        return RestResponse.from_httpx(response)

    # Hey, this close() is IMPORTANT - if you don't call it, you'll leak connections. Use the
    # client as a context manager or call close() in a finally block.
    def close(self) -> None:
        """Close the HTTP client."""
        self.http.close()

    def __enter__(self: ClientT) -> ClientT:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncSpotifyClient(BaseSpotifyClient, IAsyncClient):
    """Async client. Use one of the flow-specific subclasses."""

    def __init__(
        self,
        auth: AuthFlow,
        http: httpx.AsyncClient | None = None,
        api_url: str = API_BASE_URL,
        http_settings: HttpSettings | None = None,
    ) -> None:
        super().__init__(auth, api_url)
        if http is None:
            http_settings = http_settings or HttpSettings()
            http = HttpClientPool.create_async_client(
                timeout=http_settings.timeout,
                max_keepalive=http_settings.max_keepalive,
                max_connections=http_settings.max_connections,
            )
        self.http = http

    async def _fresh_token(self) -> Token:
        token = self._tokens.require()
        if token.is_expired and token.refresh_token:
            logger.info("Access token expired, refreshing")
            refreshed = await self.auth.refresh_token_async(self.http, token.refresh_token)
            token = self._store_token(refreshed, previous=token)
        return token

    async def rest_async(self, request: RestRequest) -> RestResponse:
        try:
            token = await self._fresh_token()
            http_request = self._http_request(request, token)
        except AuthError as e:
            raise ClientError(e) from e

        logger.debug("%s %s", request.method, request.url)
        try:
            response = await self.http.send(http_request)
        except httpx.HTTPError as e:
            logger.warning("Spotify request %s %s failed: %s", request.method, request.url, e)
            raise transport_error(e) from e
        return RestResponse.from_httpx(response)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http.aclose()

    async def __aenter__(self: ClientT) -> ClientT:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


# =============================================================================
# Flow specific clients
# =============================================================================


def _spotify_settings(settings: Settings | None) -> Settings:
    return settings if settings is not None else get_settings()


def _require(value: str, env_name: str) -> str:
    if not value or not value.strip():
        raise ConfigurationError(
            f"{env_name} is not configured. Set it in your environment or .env file. "
            "Get credentials at https://developer.spotify.com/dashboard"
        )
    return value


class _PKCEMixin:
    """Authorization-URL helpers shared by the blocking and async PKCE clients."""

    auth: AuthCodePKCE
    _tokens: TokenStore

    def user_authorization_url(self) -> str:
        """Generate the consent URL to send the user to (see ``AuthCodePKCE``)."""
        return self.auth.user_authorization_url()

    def verify_authorization_code(self, url: str) -> str:
        """Check the redirect callback URL and return its authorization code."""
        return self.auth.verify_authorization_code(url)

    def _restore_token(self, token: Token) -> None:
        # Scopes come back from the GRANTED scope string, not from what we asked for.
        self.auth.scopes = parse_scopes(token.scope)
        self.auth.stage = PKCEStage.AUTHORIZED
        self._tokens.restore(token)


class SpotifyPKCE(_PKCEMixin, SpotifyClient):
    """Blocking client using Authorization Code with PKCE."""

    auth: AuthCodePKCE

    def __init__(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Iterable[Scope | str] = (),
        *,
        http: httpx.Client | None = None,
        api_url: str = API_BASE_URL,
        http_settings: HttpSettings | None = None,
    ) -> None:
        super().__init__(
            AuthCodePKCE(client_id, redirect_uri, scopes),
            http=http,
            api_url=api_url,
            http_settings=http_settings,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, http: httpx.Client | None = None
    ) -> "SpotifyPKCE":
        """Build from ``SPOTIFY_CLIENT_ID``, ``SPOTIFY_REDIRECT_URI`` and ``SPOTIFY_SCOPES``.

        Raises:
            ConfigurationError: If client id or redirect uri is missing
        """
        settings = _spotify_settings(settings)
        spotify: SpotifySettings = settings.spotify
        client = cls(
            _require(spotify.client_id, "SPOTIFY_CLIENT_ID"),
            _require(spotify.redirect_uri, "SPOTIFY_REDIRECT_URI"),
            spotify.scope_set,
            http=http,
            api_url=spotify.api_url,
            http_settings=settings.http,
        )
        client.auth.token_url = spotify.token_url
        client.auth.authorize_url = spotify.authorize_url
        return client

    def with_token(self, token: Token) -> "SpotifyPKCE":
        """Use a previously persisted token (see ``token_to_string``)."""
        self._restore_token(token)
        return self

    def request_token(self, code: str) -> Token:
        """Exchange an authorization code for a token and store it.

        Raises:
            NoCodeVerifierError: If ``user_authorization_url`` was never called
            ClientError: On transport failures
            ApiError: On error responses from the accounts service
        """
        return self._store_token(self.auth.request_token(self.http, code))

    def request_token_from_redirect_url(self, url: str) -> Token:
        """Verify the redirect callback URL and exchange its code for a token."""
        return self.request_token(self.verify_authorization_code(url))

    def refresh_token(self) -> Token:
        """Force a token refresh.

        Raises:
            EmptyAccessTokenError: If there is no token at all
            EmptyRefreshTokenError: If the token has no refresh token
        """
        token = self._tokens.require()
        if not token.refresh_token:
            raise EmptyRefreshTokenError()
        refreshed = self.auth.refresh_token(self.http, token.refresh_token)
        return self._store_token(refreshed, previous=token)


class AsyncSpotifyPKCE(_PKCEMixin, AsyncSpotifyClient):
    """Async client using Authorization Code with PKCE."""

    auth: AuthCodePKCE

    def __init__(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Iterable[Scope | str] = (),
        *,
        http: httpx.AsyncClient | None = None,
        api_url: str = API_BASE_URL,
        http_settings: HttpSettings | None = None,
    ) -> None:
        super().__init__(
            AuthCodePKCE(client_id, redirect_uri, scopes),
            http=http,
            api_url=api_url,
            http_settings=http_settings,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, http: httpx.AsyncClient | None = None
    ) -> "AsyncSpotifyPKCE":
        """Async variant of ``SpotifyPKCE.from_settings``."""
        settings = _spotify_settings(settings)
        spotify: SpotifySettings = settings.spotify
        client = cls(
            _require(spotify.client_id, "SPOTIFY_CLIENT_ID"),
            _require(spotify.redirect_uri, "SPOTIFY_REDIRECT_URI"),
            spotify.scope_set,
            http=http,
            api_url=spotify.api_url,
            http_settings=settings.http,
        )
        client.auth.token_url = spotify.token_url
        client.auth.authorize_url = spotify.authorize_url
        return client

    def with_token(self, token: Token) -> "AsyncSpotifyPKCE":
        self._restore_token(token)
        return self

    async def request_token(self, code: str) -> Token:
        token = await self.auth.request_token_async(self.http, code)
        return self._store_token(token)

    async def request_token_from_redirect_url(self, url: str) -> Token:
        return await self.request_token(self.verify_authorization_code(url))

    async def refresh_token(self) -> Token:
        token = self._tokens.require()
        if not token.refresh_token:
            raise EmptyRefreshTokenError()
        refreshed = await self.auth.refresh_token_async(self.http, token.refresh_token)
        return self._store_token(refreshed, previous=token)


def _strip_user_fields(token: Token) -> Token:
    # App tokens never carry a refresh token or granted scopes.
    return token.model_copy(update={"refresh_token": None, "scope": None})


def _client_credentials_from_settings(settings: Settings | None) -> tuple[Settings, str, str]:
    settings = _spotify_settings(settings)
    return (
        settings,
        _require(settings.spotify.client_id, "SPOTIFY_CLIENT_ID"),
        _require(settings.spotify.client_secret, "SPOTIFY_CLIENT_SECRET"),
    )


class SpotifyClientCredentials(SpotifyClient):
    """Blocking client using the Client Credentials flow (app data only, no refresh)."""

    auth: ClientCredentials

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        http: httpx.Client | None = None,
        api_url: str = API_BASE_URL,
        http_settings: HttpSettings | None = None,
    ) -> None:
        super().__init__(
            ClientCredentials(client_id, client_secret),
            http=http,
            api_url=api_url,
            http_settings=http_settings,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, http: httpx.Client | None = None
    ) -> "SpotifyClientCredentials":
        """Build from settings (``SPOTIFY_CLIENT_ID``, ``SPOTIFY_CLIENT_SECRET``).

        Raises:
            ConfigurationError: If client id or secret is missing
        """
        settings, client_id, client_secret = _client_credentials_from_settings(settings)
        client = cls(
            client_id,
            client_secret,
            http=http,
            api_url=settings.spotify.api_url,
            http_settings=settings.http,
        )
        client.auth.token_url = settings.spotify.token_url
        return client

    def with_token(self, token: Token) -> "SpotifyClientCredentials":
        self._tokens.restore(_strip_user_fields(token))
        return self

    def request_token(self) -> Token:
        """Fetch an app token and store it.

        Raises:
            ClientError: On transport failures
            ApiError: On error responses (e.g. invalid_client)
        """
        return self._store_token(self.auth.request_token(self.http))


class AsyncSpotifyClientCredentials(AsyncSpotifyClient):
    """Async client using the Client Credentials flow."""

    auth: ClientCredentials

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        http: httpx.AsyncClient | None = None,
        api_url: str = API_BASE_URL,
        http_settings: HttpSettings | None = None,
    ) -> None:
        super().__init__(
            ClientCredentials(client_id, client_secret),
            http=http,
            api_url=api_url,
            http_settings=http_settings,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, http: httpx.AsyncClient | None = None
    ) -> "AsyncSpotifyClientCredentials":
        settings, client_id, client_secret = _client_credentials_from_settings(settings)
        client = cls(
            client_id,
            client_secret,
            http=http,
            api_url=settings.spotify.api_url,
            http_settings=settings.http,
        )
        client.auth.token_url = settings.spotify.token_url
        return client

    def with_token(self, token: Token) -> "AsyncSpotifyClientCredentials":
        self._tokens.restore(_strip_user_fields(token))
        return self

    async def request_token(self) -> Token:
        return self._store_token(await self.auth.request_token_async(self.http))
