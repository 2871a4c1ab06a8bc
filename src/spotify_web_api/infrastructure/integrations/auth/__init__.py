"""OAuth 2.0 flows supported by the Spotify clients."""

from spotify_web_api.infrastructure.integrations.auth.base import (
    AUTHORIZE_URL,
    TOKEN_URL,
    AuthFlow,
)
from spotify_web_api.infrastructure.integrations.auth.client_credentials import (
    ClientCredentials,
)
from spotify_web_api.infrastructure.integrations.auth.pkce import AuthCodePKCE, PKCEStage

__all__ = [
    "AUTHORIZE_URL",
    "TOKEN_URL",
    "AuthFlow",
    "AuthCodePKCE",
    "ClientCredentials",
    "PKCEStage",
]
