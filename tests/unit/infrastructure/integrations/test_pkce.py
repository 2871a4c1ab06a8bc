"""Tests for the Authorization Code with PKCE flow."""

import base64
import hashlib

import httpx
import pytest

from spotify_web_api.domain.exceptions import (
    AuthUrlParseError,
    CodeNotFoundError,
    DataTypeError,
    InvalidStateError,
    NoCodeVerifierError,
    NoStateError,
)
from spotify_web_api.domain.value_objects.scopes import Scope
from spotify_web_api.infrastructure.integrations.auth import AuthCodePKCE, PKCEStage

REDIRECT_URI = "http://127.0.0.1:8888/callback"


@pytest.fixture
def flow() -> AuthCodePKCE:
    """Create a PKCE flow for testing."""
    return AuthCodePKCE("client-id", REDIRECT_URI, [Scope.USER_LIBRARY_READ])


def token_transport(seen: list[httpx.Request], body: dict) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


class TestCodeVerifier:
    """Test code verifier and challenge generation."""

    def test_verifier_is_unpadded_urlsafe(self):
        """Test the verifier is 43 URL-safe characters without padding."""
        verifier = AuthCodePKCE.generate_code_verifier()
        assert len(verifier) == 43
        assert "=" not in verifier

    def test_challenge_is_sha256_of_verifier(self):
        """Test the S256 challenge derivation."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        expected = (
            base64.urlsafe_b64encode(hashlib.sha256(verifier.encode()).digest())
            .decode()
            .rstrip("=")
        )
        assert AuthCodePKCE.generate_code_challenge(verifier) == expected


class TestAuthorizationUrl:
    """Test the consent URL."""

    def test_url_carries_pkce_parameters(self, flow: AuthCodePKCE):
        """Test the consent URL has every parameter the accounts service needs."""
        url = httpx.URL(flow.user_authorization_url())
        params = url.params

        assert str(url).startswith("https://accounts.spotify.com/authorize?")
        assert params["client_id"] == "client-id"
        assert params["response_type"] == "code"
        assert params["redirect_uri"] == REDIRECT_URI
        assert params["code_challenge_method"] == "S256"
        assert params["code_challenge"] == AuthCodePKCE.generate_code_challenge(
            flow.code_verifier
        )
        assert params["state"] == flow.state
        assert params["scope"] == "user-library-read"
        assert flow.stage is PKCEStage.AUTHORIZATION_URL_ISSUED

    def test_no_scope_parameter_without_scopes(self):
        """Test the scope parameter is omitted when no scopes are requested."""
        flow = AuthCodePKCE("client-id", REDIRECT_URI)
        assert "scope" not in httpx.URL(flow.user_authorization_url()).params

    def test_new_url_rotates_state(self, flow: AuthCodePKCE):
        """Test every call issues a fresh state and verifier."""
        flow.user_authorization_url()
        first_state, first_verifier = flow.state, flow.code_verifier
        flow.user_authorization_url()
        assert flow.state != first_state
        assert flow.code_verifier != first_verifier


class TestVerifyAuthorizationCode:
    """Test redirect callback verification."""

    def test_valid_callback(self, flow: AuthCodePKCE):
        """Test the code is returned when the state matches."""
        flow.user_authorization_url()
        url = f"{REDIRECT_URI}?code=abc123&state={flow.state}"
        assert flow.verify_authorization_code(url) == "abc123"

    def test_state_mismatch(self, flow: AuthCodePKCE):
        """Test a foreign state is rejected."""
        flow.user_authorization_url()
        with pytest.raises(InvalidStateError) as exc_info:
            flow.verify_authorization_code(f"{REDIRECT_URI}?code=abc123&state=forged")
        assert exc_info.value.got == "forged"
        assert exc_info.value.expected == flow.state

    def test_missing_state_parameter(self, flow: AuthCodePKCE):
        """Test a callback without state is rejected."""
        flow.user_authorization_url()
        with pytest.raises(InvalidStateError):
            flow.verify_authorization_code(f"{REDIRECT_URI}?code=abc123")

    def test_missing_code(self, flow: AuthCodePKCE):
        """Test a callback without code is rejected."""
        flow.user_authorization_url()
        with pytest.raises(CodeNotFoundError):
            flow.verify_authorization_code(f"{REDIRECT_URI}?error=access_denied&state=x")

    def test_no_state_issued_yet(self, flow: AuthCodePKCE):
        """Test verifying before an authorization URL was generated."""
        with pytest.raises(NoStateError):
            flow.verify_authorization_code(f"{REDIRECT_URI}?code=abc123&state=x")

    def test_unparseable_url(self, flow: AuthCodePKCE):
        """Test URLs httpx cannot parse."""
        flow.user_authorization_url()
        with pytest.raises(AuthUrlParseError):
            flow.verify_authorization_code("http://127.0.0.1/callback?code=a\x00")


class TestTokenExchange:
    """Test code exchange and refresh requests."""

    def test_exchange_requires_verifier(self, flow: AuthCodePKCE):
        """Test the exchange fails before an authorization URL exists."""
        with pytest.raises(NoCodeVerifierError):
            flow.token_form("abc123")

    def test_request_token(self, flow: AuthCodePKCE):
        """Test the code exchange posts the verifier and no Basic auth."""
        flow.user_authorization_url()
        seen: list[httpx.Request] = []
        body = {
            "access_token": "access",
            "token_type": "Bearer",
            "expires_in": 3600,
            "refresh_token": "refresh",
            "scope": "user-library-read",
        }
        with httpx.Client(transport=token_transport(seen, body)) as http:
            token = flow.request_token(http, "abc123")

        assert token.access_token == "access"
        assert token.refresh_token == "refresh"
        assert flow.stage is PKCEStage.AUTHORIZED

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://accounts.spotify.com/api/token"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert "Authorization" not in request.headers
        form = httpx.QueryParams(request.content.decode())
        assert form["grant_type"] == "authorization_code"
        assert form["code"] == "abc123"
        assert form["redirect_uri"] == REDIRECT_URI
        assert form["client_id"] == "client-id"
        assert form["code_verifier"] == flow.code_verifier

    def test_refresh_token(self, flow: AuthCodePKCE):
        """Test the refresh request only needs the refresh token and client id."""
        seen: list[httpx.Request] = []
        body = {"access_token": "new", "expires_in": 3600}
        with httpx.Client(transport=token_transport(seen, body)) as http:
            token = flow.refresh_token(http, "refresh")

        assert token.access_token == "new"
        form = httpx.QueryParams(seen[0].content.decode())
        assert dict(form) == {
            "grant_type": "refresh_token",
            "refresh_token": "refresh",
            "client_id": "client-id",
        }

    def test_token_without_expires_in_is_rejected(self, flow: AuthCodePKCE):
        """Test a token body missing expires_in fails to decode instead of getting a default."""
        seen: list[httpx.Request] = []
        with httpx.Client(transport=token_transport(seen, {"access_token": "new"})) as http:
            with pytest.raises(DataTypeError):
                flow.refresh_token(http, "refresh")

    async def test_request_token_async(self, flow: AuthCodePKCE):
        """Test the async code exchange."""
        flow.user_authorization_url()
        seen: list[httpx.Request] = []
        transport = token_transport(seen, {"access_token": "access", "expires_in": 60})
        async with httpx.AsyncClient(transport=transport) as http:
            token = await flow.request_token_async(http, "abc123")

        assert token.expires_in == 60
        assert httpx.QueryParams(seen[0].content.decode())["code"] == "abc123"
