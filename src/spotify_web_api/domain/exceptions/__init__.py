"""Exceptions raised by the Spotify Web API client."""

from typing import Any


class SpotifyWebApiError(Exception):
    """Base exception for everything this library raises."""

    # Hey future me, we store message as an attribute so code can inspect it without parsing
    # str(exception). Never raise this one directly - callers match on the concrete subclasses to
    # decide their own retry/backoff policy (we do none).
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ConfigurationError(SpotifyWebApiError):
    """Raised when required settings (client id, secret, redirect uri) are missing."""

    pass


class BodyError(SpotifyWebApiError):
    """Raised when an endpoint's request body cannot be serialized."""

    pass


# =============================================================================
# Identifier errors
# =============================================================================


class IdError(SpotifyWebApiError):
    """Base class for invalid Spotify ids and URIs."""

    pass


class InvalidIdFormatError(IdError):
    """The id contains characters outside base62, or the URI prefix is wrong."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid id format: {value!r}")
        self.value = value


class InvalidIdLengthError(IdError):
    """The id does not have the expected length (22 characters)."""

    def __init__(self, got: int, expected: int = 22) -> None:
        super().__init__(f"invalid id length: got {got}, expected {expected}")
        self.got = got
        self.expected = expected


# =============================================================================
# Authentication errors
# =============================================================================


class AuthError(SpotifyWebApiError):
    """Base class for OAuth flow failures."""

    pass


class InvalidHeaderValueError(AuthError):
    """A token could not be turned into a valid Authorization header value."""

    def __init__(self, message: str = "invalid header value") -> None:
        super().__init__(message)


class AuthUrlParseError(AuthError):
    """The redirect callback URL could not be parsed."""

    def __init__(self, url: str) -> None:
        super().__init__(f"failed to parse url: {url!r}")
        self.url = url


class CodeNotFoundError(AuthError):
    """The redirect callback URL does not carry a ``code`` parameter."""

    def __init__(self) -> None:
        super().__init__("authorization code not found in callback url")


class InvalidStateError(AuthError):
    """The ``state`` returned by Spotify does not match the one we issued."""

    # Yo, this is the CSRF check failing. Keep both values around so the caller can log them -
    # a mismatch usually means the user opened two auth tabs, not an attack, but you never know.
    def __init__(self, expected: str, got: str | None) -> None:
        super().__init__(f"invalid state parameter: expected {expected!r}, got {got!r}")
        self.expected = expected
        self.got = got


class NoStateError(AuthError):
    """The callback was verified before an authorization URL was generated."""

    def __init__(self) -> None:
        super().__init__("no state was generated, call user_authorization_url() first")


class NoCodeVerifierError(AuthError):
    """A PKCE token exchange was attempted without a stored code verifier."""

    def __init__(self) -> None:
        super().__init__("no PKCE code verifier, call user_authorization_url() first")


class EmptyAccessTokenError(AuthError):
    """A request needs an access token but none has been obtained yet."""

    def __init__(self) -> None:
        super().__init__("empty access token, request a token first")


class EmptyRefreshTokenError(AuthError):
    """The flow has no refresh token (or does not support refreshing at all)."""

    def __init__(self) -> None:
        super().__init__("empty refresh token")


# =============================================================================
# Transport errors
# =============================================================================


class RestError(SpotifyWebApiError):
    """Base class for failures of the underlying HTTP engine."""

    pass


class CommunicationError(RestError):
    """Network or protocol failure while talking to Spotify."""

    def __init__(self, source: Exception) -> None:
        super().__init__(f"communication with spotify: {source}")
        self.source = source


class RequestTimeoutError(RestError):
    """The per-request timeout elapsed."""

    def __init__(self, source: Exception) -> None:
        super().__init__(f"request timed out: {source}")
        self.source = source


# =============================================================================
# API errors
# =============================================================================


class ApiError(SpotifyWebApiError):
    """Base class for everything that can go wrong executing an endpoint."""

    pass


class ClientError(ApiError):
    """Wraps an error raised by the transport client."""

    def __init__(self, source: RestError | AuthError) -> None:
        super().__init__(f"client error: {source.message}")
        self.source = source


class UrlError(ApiError):
    """An endpoint path or ``next`` link could not be turned into a URL."""

    def __init__(self, url: str, reason: str = "invalid url") -> None:
        super().__init__(f"{reason}: {url!r}")
        self.url = url


class ServerError(ApiError):
    """Spotify answered with a body that is not JSON."""

    def __init__(self, status: int, data: bytes) -> None:
        super().__init__(f"spotify server error (HTTP {status})")
        self.status = status
        self.data = data


class MovedPermanentlyError(ApiError):
    """Spotify answered ``301 Moved Permanently``; redirects are never followed."""

    def __init__(self, location: str | None) -> None:
        super().__init__(f"moved permanently to: {location or '<UNKNOWN>'}")
        self.location = location


class SpotifyError(ApiError):
    """Structured ``{"error": {"status": ..., "message": ...}}`` error body."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"spotify error (HTTP {status}): {message}")
        self.status = status
        self.spotify_message = message


class SpotifyWithStatusError(ApiError):
    """Legacy ``{"error": "..."}`` or ``{"message": "..."}`` error body."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"spotify error (HTTP {status}): {message}")
        self.status = status
        self.spotify_message = message


class SpotifyUnrecognizedError(ApiError):
    """JSON error body in a shape we do not know."""

    def __init__(self, status: int, obj: Any) -> None:
        super().__init__(f"spotify error (HTTP {status}) with unrecognized body: {obj!r}")
        self.status = status
        self.obj = obj


class DataTypeError(ApiError):
    """The response JSON does not decode into the requested type."""

    def __init__(self, typename: str, source: Exception) -> None:
        super().__init__(f"could not parse {typename} data from JSON: {source}")
        self.typename = typename
        self.source = source


__all__ = [
    "SpotifyWebApiError",
    "ConfigurationError",
    "BodyError",
    "IdError",
    "InvalidIdFormatError",
    "InvalidIdLengthError",
    "AuthError",
    "InvalidHeaderValueError",
    "AuthUrlParseError",
    "CodeNotFoundError",
    "InvalidStateError",
    "NoStateError",
    "NoCodeVerifierError",
    "EmptyAccessTokenError",
    "EmptyRefreshTokenError",
    "RestError",
    "CommunicationError",
    "RequestTimeoutError",
    "ApiError",
    "ClientError",
    "UrlError",
    "ServerError",
    "MovedPermanentlyError",
    "SpotifyError",
    "SpotifyWithStatusError",
    "SpotifyUnrecognizedError",
    "DataTypeError",
]
