"""Tests for OAuth scopes."""

from spotify_web_api.domain.value_objects.scopes import Scope, join_scopes, parse_scopes


class TestScopeGroups:
    """Test the scope group helpers."""

    def test_library_group(self):
        """Test the library group holds read and modify."""
        assert Scope.library() == {Scope.USER_LIBRARY_READ, Scope.USER_LIBRARY_MODIFY}

    def test_all_scopes_covers_every_group(self):
        """Test all_scopes is the union of all groups."""
        groups = (
            Scope.images()
            | Scope.spotify_connect()
            | Scope.playback()
            | Scope.playlists()
            | Scope.follow()
            | Scope.listening_history()
            | Scope.library()
            | Scope.user_details()
        )
        assert groups == Scope.all_scopes()
        assert len(Scope.all_scopes()) == 19


class TestScopeParsing:
    """Test scope string parsing and joining."""

    def test_parse_scopes(self):
        """Test parsing a granted scope string."""
        assert parse_scopes("user-library-read playlist-read-private") == {
            Scope.USER_LIBRARY_READ,
            Scope.PLAYLIST_READ_PRIVATE,
        }

    def test_parse_scopes_ignores_unknown(self):
        """Test scopes newer than the enum are skipped."""
        assert parse_scopes("user-library-read brand-new-scope") == {Scope.USER_LIBRARY_READ}

    def test_parse_empty(self):
        """Test empty or missing scope strings."""
        assert parse_scopes(None) == set()
        assert parse_scopes("") == set()

    def test_join_scopes_is_sorted(self):
        """Test joined scopes are stable regardless of input order."""
        joined = join_scopes([Scope.USER_LIBRARY_READ, "playlist-read-private"])
        assert joined == "playlist-read-private user-library-read"
