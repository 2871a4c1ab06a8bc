"""Tests for wire models."""

from datetime import UTC, datetime, timedelta

from spotify_web_api.domain.dtos import FollowedArtists, Page, Token


class TestToken:
    """Test access token expiry handling."""

    def test_with_expiry_is_absolute(self):
        """Test expires_at is computed from expires_in."""
        now = datetime(2024, 1, 1, tzinfo=UTC)
        token = Token(access_token="abc", expires_in=3600).with_expiry(now)
        assert token.expires_at == now + timedelta(hours=1)

    def test_no_expiry_is_not_expired(self):
        """Test a token without expires_at never counts as expired."""
        assert not Token(access_token="abc", expires_in=3600).is_expired

    def test_past_expiry_is_expired(self):
        """Test a token whose expiry has passed is expired."""
        token = Token(
            access_token="abc",
            expires_in=3600,
            expires_at=datetime.now(UTC) - timedelta(seconds=1),
        )
        assert token.is_expired

    def test_round_trip_keeps_expiry(self):
        """Test the JSON form restores the absolute expiry."""
        token = Token(access_token="abc", expires_in=3600, refresh_token="r").with_expiry()
        restored = Token.model_validate_json(token.model_dump_json())
        assert restored == token


class TestPage:
    """Test page envelopes."""

    def test_page_of_dicts(self):
        """Test decoding a page envelope."""
        page = Page[dict].model_validate(
            {
                "href": "https://api.spotify.com/v1/me/albums",
                "limit": 2,
                "next": None,
                "offset": 0,
                "previous": None,
                "total": 2,
                "items": [{"id": 1}, {"id": 2}],
            }
        )
        assert page.items == [{"id": 1}, {"id": 2}]
        assert page.next is None

    def test_followed_artists_cursor_page(self):
        """Test the followed artists wrapper decodes its cursor page."""
        followed = FollowedArtists.model_validate(
            {
                "artists": {
                    "href": "https://api.spotify.com/v1/me/following?type=artist",
                    "limit": 20,
                    "next": None,
                    "cursors": {"after": "0I2XqVXqHScXjHhk6AYYRe"},
                    "total": 1,
                    "items": [{"id": "0I2XqVXqHScXjHhk6AYYRe"}],
                }
            }
        )
        assert followed.artists.cursors is not None
        assert followed.artists.cursors.after == "0I2XqVXqHScXjHhk6AYYRe"
