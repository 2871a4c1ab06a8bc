"""Shared plumbing of the OAuth flows: the token endpoint call and the AuthFlow base class.

FLOW                           Access user resources   Needs client secret   Token refresh
Authorization code with PKCE   yes                     no                    yes
Client credentials             no                      yes                   no
"""

import logging
from abc import ABC

import httpx

from spotify_web_api.domain.dtos import Token
from spotify_web_api.domain.exceptions import EmptyRefreshTokenError, InvalidHeaderValueError
from spotify_web_api.domain.ports import RestResponse
from spotify_web_api.infrastructure.integrations.http_pool import transport_error
from spotify_web_api.infrastructure.integrations.params import FormParams
from spotify_web_api.infrastructure.integrations.responses import (
    check_response,
    decode_into,
    decode_json,
)

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"  # nosec B105 - public endpoint URL


def header_value(value: str) -> str:
    """Validate a header value (visible ASCII and spaces only).

    Raises:
        InvalidHeaderValueError: On control characters or non-ASCII text
    """
    if not value or any(not (32 <= ord(char) < 127) for char in value):
        raise InvalidHeaderValueError(f"invalid header value for a {len(value)} character token")
    return value


def token_request(
    form: FormParams, authorization: str | None = None, token_url: str = TOKEN_URL
) -> httpx.Request:
    """Build the form-urlencoded POST to the token endpoint."""
    mime, data = form.into_body()
    headers = {"Content-Type": mime, "Content-Length": str(len(data))}
    if authorization is not None:
        headers["Authorization"] = header_value(authorization)
    return httpx.Request("POST", token_url, headers=headers, content=data)


def parse_token_response(response: RestResponse) -> Token:
    """Classify the token endpoint's answer and decode the token.

    Raises:
        MovedPermanentlyError: On 301
        ServerError: If the body is not JSON
        SpotifyError / SpotifyWithStatusError / SpotifyUnrecognizedError: On non-2xx
        DataTypeError: If the JSON is not a token
    """
    check_response(response)
    return decode_into(decode_json(response), Token)


# Yo future me, it HAS to be form-urlencoded, not JSON - the accounts service ignores JSON
# bodies. Transport failures become ClientError so callers only match on our exceptions.
def request_token(
    http: httpx.Client,
    form: FormParams,
    authorization: str | None = None,
    token_url: str = TOKEN_URL,
) -> Token:
    """POST ``form`` to the token endpoint (blocking)."""
    request = token_request(form, authorization, token_url)
    try:
        response = http.send(request)
    except httpx.HTTPError as e:
        logger.warning("Token request failed: %s", e)
        raise transport_error(e) from e
    return parse_token_response(RestResponse.from_httpx(response))


async def request_token_async(
    http: httpx.AsyncClient,
    form: FormParams,
    authorization: str | None = None,
    token_url: str = TOKEN_URL,
) -> Token:
    """POST ``form`` to the token endpoint (async)."""
    request = token_request(form, authorization, token_url)
    try:
        response = await http.send(request)
    except httpx.HTTPError as e:
        logger.warning("Token request failed: %s", e)
        raise transport_error(e) from e
    return parse_token_response(RestResponse.from_httpx(response))


class AuthFlow(ABC):
    """An OAuth grant flow the Spotify clients can be built around.

    Flows without refresh support keep the default ``refresh_token`` implementations, which
    raise ``EmptyRefreshTokenError``.
    """

    token_url: str = TOKEN_URL

    def refresh_token(self, http: httpx.Client, refresh_token: str) -> Token:
        raise EmptyRefreshTokenError()

    async def refresh_token_async(self, http: httpx.AsyncClient, refresh_token: str) -> Token:
        raise EmptyRefreshTokenError()
