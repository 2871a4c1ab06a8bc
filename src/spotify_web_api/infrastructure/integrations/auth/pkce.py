"""Authorization Code flow with PKCE.

Hey future me - the PKCE dance in three steps:

1. ``user_authorization_url()`` generates a random ``state`` and a code verifier, keeps BOTH,
   and returns the Spotify consent URL carrying the verifier's SHA-256 challenge
2. Spotify redirects the user to ``<redirect_uri>?code=...&state=...``;
   ``verify_authorization_code(url)`` checks the state and pulls out the code
3. ``request_token(http, code)`` swaps the code plus the stored verifier for a token

No client secret anywhere - that's the whole point of PKCE, it is safe for public clients
(desktop apps, CLIs). Refreshing only needs the refresh token and the client id.
"""

import base64
import hashlib
import logging
import secrets
from collections.abc import Iterable
from enum import Enum
from urllib.parse import urlencode

import httpx

from spotify_web_api.domain.dtos import Token
from spotify_web_api.domain.exceptions import (
    AuthUrlParseError,
    CodeNotFoundError,
    InvalidStateError,
    NoCodeVerifierError,
    NoStateError,
)
from spotify_web_api.domain.value_objects.scopes import Scope, join_scopes
from spotify_web_api.infrastructure.integrations.auth.base import (
    AUTHORIZE_URL,
    AuthFlow,
    request_token,
    request_token_async,
)
from spotify_web_api.infrastructure.integrations.params import FormParams

logger = logging.getLogger(__name__)


class PKCEStage(str, Enum):
    """Where the flow is in the authorization dance."""

    CREATED = "created"
    AUTHORIZATION_URL_ISSUED = "authorization_url_issued"
    AUTHORIZED = "authorized"


class AuthCodePKCE(AuthFlow):
    """Authorization Code with PKCE: user consent, no client secret, refreshable tokens."""

    authorize_url: str = AUTHORIZE_URL

    def __init__(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Iterable[Scope | str] = (),
    ) -> None:
        """
        Initialize the flow.

        Args:
            client_id: Spotify app client id
            redirect_uri: Callback URL registered for the app (must match EXACTLY)
            scopes: Scopes to request on the consent screen
        """
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.scopes: set[Scope] = {Scope(scope) for scope in scopes}
        self.state: str | None = None
        self.code_verifier: str | None = None
        self.stage = PKCEStage.CREATED

    # Yo future me, this generates a random 32-byte code verifier. We strip the "=" padding
    # because the PKCE RFC says so. Don't log this value or put it in URLs!
    @staticmethod
    def generate_code_verifier() -> str:
        """
        Generate a PKCE code verifier.

        Returns:
            Random code verifier string
        """
        return (
            base64.urlsafe_b64encode(secrets.token_bytes(32))
            .decode("utf-8")
            .rstrip("=")
        )

    # The challenge goes in the auth URL (public), only we know the verifier (secret).
    @staticmethod
    def generate_code_challenge(code_verifier: str) -> str:
        """
        Generate a PKCE code challenge from verifier.

        Args:
            code_verifier: Code verifier string

        Returns:
            SHA256 hash of code verifier as base64 URL-safe string without padding
        """
        digest = hashlib.sha256(code_verifier.encode("utf-8")).digest()
        return base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")

    @staticmethod
    def generate_state() -> str:
        return secrets.token_urlsafe(16)

    def user_authorization_url(self) -> str:
        """Generate state and verifier and return the Spotify consent URL.

        Calling it again invalidates the previous URL (new state, new verifier).
        """
        self.state = self.generate_state()
        self.code_verifier = self.generate_code_verifier()
        self.stage = PKCEStage.AUTHORIZATION_URL_ISSUED

        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "code_challenge_method": "S256",
            "code_challenge": self.generate_code_challenge(self.code_verifier),
            "state": self.state,
        }
        if self.scopes:
            params["scope"] = join_scopes(self.scopes)

        return f"{self.authorize_url}?{urlencode(params)}"

    # Listen up, the state check is our CSRF protection - it has to match byte for byte.
    def verify_authorization_code(self, url: str) -> str:
        """Extract the authorization code from the redirect callback URL.

        Args:
            url: Full callback URL (``<redirect_uri>?code=...&state=...``)

        Returns:
            The authorization code

        Raises:
            AuthUrlParseError: If ``url`` cannot be parsed
            NoStateError: If no authorization URL was generated yet
            CodeNotFoundError: If the URL carries no ``code``
            InvalidStateError: If the returned state is not the one we issued
        """
        try:
            params = httpx.URL(url).params
        except httpx.InvalidURL as e:
            raise AuthUrlParseError(url) from e

        if self.state is None:
            raise NoStateError()

        code = params.get("code")
        if not code:
            raise CodeNotFoundError()

        got = params.get("state")
        if got != self.state:
            raise InvalidStateError(expected=self.state, got=got)

        return code

    def token_form(self, code: str) -> FormParams:
        """Form body of the code exchange.

        Raises:
            NoCodeVerifierError: If no authorization URL was generated yet
        """
        if self.code_verifier is None:
            raise NoCodeVerifierError()
        form = FormParams()
        form.push("grant_type", "authorization_code")
        form.push("code", code)
        form.push("redirect_uri", self.redirect_uri)
        form.push("client_id", self.client_id)
        form.push("code_verifier", self.code_verifier)
        return form

    def refresh_form(self, refresh_token: str) -> FormParams:
        form = FormParams()
        form.push("grant_type", "refresh_token")
        form.push("refresh_token", refresh_token)
        form.push("client_id", self.client_id)
        return form

    # Yo future me, the code is single-use and expires after ~10 minutes! If the user idles on
    # the consent screen, this fails with an invalid_grant SpotifyWithStatusError.
    def request_token(self, http: httpx.Client, code: str) -> Token:
        """Exchange the authorization code for a token (no Basic auth header)."""
        token = request_token(http, self.token_form(code), token_url=self.token_url)
        self.stage = PKCEStage.AUTHORIZED
        logger.info("Obtained Spotify access token via PKCE")
        return token

    async def request_token_async(self, http: httpx.AsyncClient, code: str) -> Token:
        """Async variant of ``request_token``."""
        token = await request_token_async(http, self.token_form(code), token_url=self.token_url)
        self.stage = PKCEStage.AUTHORIZED
        logger.info("Obtained Spotify access token via PKCE")
        return token

    def refresh_token(self, http: httpx.Client, refresh_token: str) -> Token:
        logger.debug("Refreshing Spotify access token")
        return request_token(http, self.refresh_form(refresh_token), token_url=self.token_url)

    async def refresh_token_async(self, http: httpx.AsyncClient, refresh_token: str) -> Token:
        logger.debug("Refreshing Spotify access token")
        return await request_token_async(
            http, self.refresh_form(refresh_token), token_url=self.token_url
        )
