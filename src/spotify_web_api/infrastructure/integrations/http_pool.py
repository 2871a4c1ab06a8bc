"""httpx client construction for the Spotify clients.

Hey future me - every SpotifyClient OWNS one httpx client (sync or async) built here, so timeout,
connection limits and redirect policy are decided in ONE place:

- 10s overall timeout per request. There is no other cancellation: async callers cancel by
  abandoning the coroutine, sync callers wait for the timeout
- redirects are NEVER followed. A 301 from Spotify surfaces as MovedPermanentlyError and the
  caller decides what to do with the Location
- ``transport`` is the test seam (httpx.MockTransport); production code leaves it None

Usage:
    http = HttpClientPool.create_client()
    async_http = HttpClientPool.create_async_client(timeout=5.0)

Don't forget to close them - the SpotifyClient context managers do that for you.
"""

import logging
from typing import ClassVar

import httpx

from spotify_web_api.domain.exceptions import ClientError, CommunicationError, RequestTimeoutError

logger = logging.getLogger(__name__)


class HttpClientPool:
    """Factory for configured ``httpx.Client`` / ``httpx.AsyncClient`` instances."""

    # Hey future me, these are CLASS VARIABLES shared by every factory call. If you hit
    # Spotify's rate limits, LOWER max_connections. Settings can override all three per client.
    DEFAULT_TIMEOUT: ClassVar[float] = 10.0
    DEFAULT_MAX_KEEPALIVE: ClassVar[int] = 20
    DEFAULT_MAX_CONNECTIONS: ClassVar[int] = 50

    @classmethod
    def _options(
        cls,
        timeout: float | None,
        max_keepalive: int | None,
        max_connections: int | None,
    ) -> dict:
        effective_timeout = timeout if timeout is not None else cls.DEFAULT_TIMEOUT
        effective_keepalive = (
            max_keepalive if max_keepalive is not None else cls.DEFAULT_MAX_KEEPALIVE
        )
        effective_max_conn = (
            max_connections if max_connections is not None else cls.DEFAULT_MAX_CONNECTIONS
        )
        logger.debug(
            "Creating HTTP client (timeout=%.1fs, keepalive=%d, max_conn=%d)",
            effective_timeout,
            effective_keepalive,
            effective_max_conn,
        )
        return {
            "timeout": httpx.Timeout(effective_timeout),
            "limits": httpx.Limits(
                max_keepalive_connections=effective_keepalive,
                max_connections=effective_max_conn,
            ),
            "follow_redirects": False,
        }

    @classmethod
    def create_client(
        cls,
        timeout: float | None = None,
        max_keepalive: int | None = None,
        max_connections: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> httpx.Client:
        """Create a blocking client.

        Args:
            timeout: Request timeout in seconds (default: 10.0)
            max_keepalive: Max idle connections to keep open (default: 20)
            max_connections: Max total concurrent connections (default: 50)
            transport: Custom transport, e.g. ``httpx.MockTransport`` in tests

        Returns:
            New httpx.Client; the caller owns and closes it
        """
        options = cls._options(timeout, max_keepalive, max_connections)
        return httpx.Client(transport=transport, **options)

    @classmethod
    def create_async_client(
        cls,
        timeout: float | None = None,
        max_keepalive: int | None = None,
        max_connections: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an async client. Same arguments as ``create_client``."""
        options = cls._options(timeout, max_keepalive, max_connections)
        return httpx.AsyncClient(transport=transport, **options)


def transport_error(error: httpx.HTTPError) -> ClientError:
    """Wrap an httpx failure into the library's client error."""
    if isinstance(error, httpx.TimeoutException):
        return ClientError(RequestTimeoutError(error))
    return ClientError(CommunicationError(error))
