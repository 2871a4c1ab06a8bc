"""Tests for httpx client construction."""

import httpx

from spotify_web_api.domain.exceptions import (
    ClientError,
    CommunicationError,
    RequestTimeoutError,
)
from spotify_web_api.infrastructure.integrations.http_pool import HttpClientPool, transport_error


class TestHttpClientPool:
    """Test client factory defaults."""

    def test_default_client(self):
        """Test the default timeout and redirect policy."""
        client = HttpClientPool.create_client()
        try:
            assert client.timeout == httpx.Timeout(10.0)
            assert client.follow_redirects is False
        finally:
            client.close()

    def test_custom_timeout(self):
        """Test overriding the timeout."""
        client = HttpClientPool.create_client(timeout=2.5)
        try:
            assert client.timeout == httpx.Timeout(2.5)
        finally:
            client.close()

    def test_zero_limits_are_kept(self):
        """Test explicit zero limits are passed through instead of replaced by defaults."""
        limits = HttpClientPool._options(None, 0, 0)["limits"]
        assert limits.max_keepalive_connections == 0
        assert limits.max_connections == 0

    def test_unset_options_use_defaults(self):
        """Test None falls back to the class defaults."""
        options = HttpClientPool._options(None, None, None)
        assert options["timeout"] == httpx.Timeout(10.0)
        assert options["limits"].max_keepalive_connections == 20
        assert options["limits"].max_connections == 50

    async def test_async_client(self):
        """Test the async factory."""
        client = HttpClientPool.create_async_client()
        try:
            assert isinstance(client, httpx.AsyncClient)
            assert client.follow_redirects is False
        finally:
            await client.aclose()


class TestTransportError:
    """Test wrapping of httpx failures."""

    def test_timeout(self):
        """Test timeouts map to RequestTimeoutError."""
        error = transport_error(httpx.ConnectTimeout("slow"))
        assert isinstance(error, ClientError)
        assert isinstance(error.source, RequestTimeoutError)

    def test_other_errors(self):
        """Test anything else maps to CommunicationError."""
        error = transport_error(httpx.RemoteProtocolError("broken"))
        assert isinstance(error.source, CommunicationError)
        assert "broken" in error.message
