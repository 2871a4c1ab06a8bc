"""OAuth scopes understood by the Spotify accounts service."""

from collections.abc import Iterable
from enum import Enum


class Scope(str, Enum):
    """One OAuth scope. The value is the exact wire token."""

    # Images
    UGC_IMAGE_UPLOAD = "ugc-image-upload"

    # Spotify Connect
    USER_READ_PLAYBACK_STATE = "user-read-playback-state"
    USER_MODIFY_PLAYBACK_STATE = "user-modify-playback-state"
    USER_READ_CURRENTLY_PLAYING = "user-read-currently-playing"

    # Playback
    APP_REMOTE_CONTROL = "app-remote-control"
    STREAMING = "streaming"

    # Playlists
    PLAYLIST_READ_PRIVATE = "playlist-read-private"
    PLAYLIST_READ_COLLABORATIVE = "playlist-read-collaborative"
    PLAYLIST_MODIFY_PRIVATE = "playlist-modify-private"
    PLAYLIST_MODIFY_PUBLIC = "playlist-modify-public"

    # Follow
    USER_FOLLOW_MODIFY = "user-follow-modify"
    USER_FOLLOW_READ = "user-follow-read"

    # Listening history
    USER_READ_PLAYBACK_POSITION = "user-read-playback-position"
    USER_TOP_READ = "user-top-read"
    USER_READ_RECENTLY_PLAYED = "user-read-recently-played"

    # Library
    USER_LIBRARY_MODIFY = "user-library-modify"
    USER_LIBRARY_READ = "user-library-read"

    # Users
    USER_READ_EMAIL = "user-read-email"
    USER_READ_PRIVATE = "user-read-private"

    @classmethod
    def images(cls) -> set["Scope"]:
        return {cls.UGC_IMAGE_UPLOAD}

    @classmethod
    def spotify_connect(cls) -> set["Scope"]:
        return {
            cls.USER_READ_PLAYBACK_STATE,
            cls.USER_MODIFY_PLAYBACK_STATE,
            cls.USER_READ_CURRENTLY_PLAYING,
        }

    @classmethod
    def playback(cls) -> set["Scope"]:
        return {cls.APP_REMOTE_CONTROL, cls.STREAMING}

    @classmethod
    def playlists(cls) -> set["Scope"]:
        return {
            cls.PLAYLIST_READ_PRIVATE,
            cls.PLAYLIST_READ_COLLABORATIVE,
            cls.PLAYLIST_MODIFY_PRIVATE,
            cls.PLAYLIST_MODIFY_PUBLIC,
        }

    @classmethod
    def follow(cls) -> set["Scope"]:
        return {cls.USER_FOLLOW_MODIFY, cls.USER_FOLLOW_READ}

    @classmethod
    def listening_history(cls) -> set["Scope"]:
        return {
            cls.USER_READ_PLAYBACK_POSITION,
            cls.USER_TOP_READ,
            cls.USER_READ_RECENTLY_PLAYED,
        }

    @classmethod
    def library(cls) -> set["Scope"]:
        return {cls.USER_LIBRARY_MODIFY, cls.USER_LIBRARY_READ}

    @classmethod
    def user_details(cls) -> set["Scope"]:
        return {cls.USER_READ_EMAIL, cls.USER_READ_PRIVATE}

    @classmethod
    def all_scopes(cls) -> set["Scope"]:
        return set(cls)


# Hey future me - Spotify echoes the GRANTED scopes back as one space separated string in the
# token response. It may contain scopes newer than this enum, so unknown tokens are skipped
# instead of blowing up token restore.
def parse_scopes(scope: str | None) -> set[Scope]:
    """Parse the ``scope`` string of a token response into a set of scopes."""
    if not scope:
        return set()
    known = {item.value: item for item in Scope}
    return {known[token] for token in scope.split() if token in known}


def join_scopes(scopes: Iterable[Scope | str]) -> str:
    """Join scopes into the space separated form the authorize URL expects (sorted, stable)."""
    return " ".join(sorted(Scope(scope).value for scope in scopes))
