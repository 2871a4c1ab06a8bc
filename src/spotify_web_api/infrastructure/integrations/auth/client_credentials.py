"""Client Credentials flow: app-only tokens, no user, no refresh."""

import base64
import logging

import httpx

from spotify_web_api.domain.dtos import Token
from spotify_web_api.infrastructure.integrations.auth.base import (
    AuthFlow,
    request_token,
    request_token_async,
)
from spotify_web_api.infrastructure.integrations.params import FormParams

logger = logging.getLogger(__name__)


class ClientCredentials(AuthFlow):
    """Server-side flow authenticating the app itself with id and secret.

    Tokens from this flow cannot read user data and come without a refresh token; when one
    expires, request a new one. ``refresh_token`` keeps the base behaviour and raises
    ``EmptyRefreshTokenError``.
    """

    def __init__(self, client_id: str, client_secret: str) -> None:
        self.client_id = client_id
        self.client_secret = client_secret

    def authorization_header(self) -> str:
        credentials = f"{self.client_id}:{self.client_secret}".encode()
        return f"Basic {base64.b64encode(credentials).decode('ascii')}"

    def token_form(self) -> FormParams:
        form = FormParams()
        form.push("grant_type", "client_credentials")
        return form

    def request_token(self, http: httpx.Client) -> Token:
        """Fetch an app token (HTTP Basic auth with id and secret)."""
        token = request_token(
            http, self.token_form(), self.authorization_header(), token_url=self.token_url
        )
        logger.info("Obtained Spotify access token via client credentials")
        return token

    async def request_token_async(self, http: httpx.AsyncClient) -> Token:
        """Async variant of ``request_token``."""
        token = await request_token_async(
            http, self.token_form(), self.authorization_header(), token_url=self.token_url
        )
        logger.info("Obtained Spotify access token via client credentials")
        return token
