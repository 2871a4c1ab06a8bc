"""Tests for the ignore, raw and typed query strategies."""

from dataclasses import dataclass

import httpx
import pytest
from pydantic import BaseModel

from spotify_web_api.application.queries import ignore, raw, typed
from spotify_web_api.application.queries.base import build_request
from spotify_web_api.domain.exceptions import (
    BodyError,
    DataTypeError,
    ServerError,
    SpotifyError,
)
from spotify_web_api.domain.ports import Endpoint, UrlBase
from spotify_web_api.infrastructure.integrations.params import Body, JsonParams, QueryParams


@dataclass(frozen=True)
class DummyGet(Endpoint):
    market: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "dummy"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("market", self.market)
        return params


@dataclass(frozen=True)
class DummyPut(Endpoint):
    def method(self) -> str:
        return "PUT"

    def endpoint(self) -> str:
        return "dummy"


@dataclass(frozen=True)
class DummyPostJson(Endpoint):
    payload: str

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return "dummy"

    def body(self) -> Body:
        return JsonParams.into_body({"payload": self.payload})


@dataclass(frozen=True)
class BrokenBody(Endpoint):
    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return "dummy"

    def body(self) -> Body:
        return JsonParams.into_body({"value": object()})


class Dummy(BaseModel):
    value: int


class TestIgnore:
    """Test the ignore strategy."""

    def test_ignore_returns_none(self, single_client, expected_url):
        """Test a successful request returns None whatever the body."""
        client = single_client(expected_url("dummy"), b"not json at all")
        assert ignore(DummyGet()).query(client) is None

    def test_ignore_still_raises_errors(self, single_client, expected_url):
        """Test error responses are classified even when the body is ignored."""
        body = b'{"error": {"status": 404, "message": "Not found"}}'
        client = single_client(expected_url("dummy"), body, status_code=404)
        with pytest.raises(SpotifyError) as exc_info:
            ignore(DummyGet()).query(client)
        assert exc_info.value.status == 404

    def test_put_sends_zero_content_length(self, single_client, expected_url):
        """Test PUT without body still sends Content-Length: 0."""
        client = single_client(expected_url("dummy", method="PUT"))
        ignore(DummyPut()).query(client)
        assert client.requests[0].headers == {"Content-Length": "0"}

    async def test_ignore_async(self, single_client, expected_url):
        """Test the async ignore strategy."""
        client = single_client(expected_url("dummy", query=[("market", "SE")]))
        assert await ignore(DummyGet(market="SE")).query_async(client) is None


class TestRaw:
    """Test the raw strategy."""

    def test_raw_returns_exact_bytes(self, single_client, expected_url):
        """Test the body is returned byte for byte."""
        client = single_client(expected_url("dummy"), b"\x00\x01 raw")
        assert raw(DummyGet()).query(client) == b"\x00\x01 raw"

    async def test_raw_async(self, single_client, expected_url):
        """Test the async raw strategy."""
        client = single_client(expected_url("dummy"), b"{}")
        assert await raw(DummyGet()).query_async(client) == b"{}"


class TestTyped:
    """Test the typed strategy."""

    def test_typed_decodes_model(self, single_client, expected_url):
        """Test decoding into a pydantic model."""
        client = single_client(expected_url("dummy"), b'{"value": 7}')
        assert typed(DummyGet(), Dummy).query(client) == Dummy(value=7)

    def test_endpoint_query_convenience(self, single_client, expected_url):
        """Test Endpoint.query decodes into dict by default."""
        client = single_client(expected_url("dummy"), b'{"value": 7}')
        assert DummyGet().query(client) == {"value": 7}

    def test_non_json_success_body(self, single_client, expected_url):
        """Test a non-JSON success body raises ServerError."""
        client = single_client(expected_url("dummy"), b"<html>")
        with pytest.raises(ServerError):
            typed(DummyGet(), Dummy).query(client)

    def test_shape_mismatch(self, single_client, expected_url):
        """Test a JSON body of the wrong shape raises DataTypeError."""
        client = single_client(expected_url("dummy"), b'{"other": 1}')
        with pytest.raises(DataTypeError) as exc_info:
            typed(DummyGet(), Dummy).query(client)
        assert exc_info.value.typename == "Dummy"

    async def test_typed_async_with_json_body(self, single_client, expected_url):
        """Test JSON bodies are sent with their content type."""
        expected = expected_url(
            "dummy",
            method="POST",
            content_type="application/json",
            body=b'{"payload":"x"}',
        )
        client = single_client(expected, b'{"value": 1}')
        assert await DummyPostJson("x").query_async(client, into=Dummy) == Dummy(value=1)


class TestBuildRequest:
    """Test request construction."""

    def test_body_error_propagates(self, single_client, expected_url):
        """Test unserializable bodies fail before anything is sent."""
        client = single_client(expected_url("dummy", method="POST"))
        with pytest.raises(BodyError):
            ignore(BrokenBody()).query(client)
        assert client.requests == []

    def test_get_has_no_length_or_type(self):
        """Test GET requests carry neither Content-Type nor Content-Length."""
        request = build_request(DummyGet(), httpx.URL("https://api.spotify.com/v1/dummy"))
        assert request.headers == {}
        assert request.content == b""

    def test_default_url_base_is_api(self):
        """Test endpoints live on the API host unless they say otherwise."""
        assert DummyGet().url_base() is UrlBase.API
