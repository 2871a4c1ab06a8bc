"""Validated Spotify identifiers.

Hey future me - Spotify ids are 22-char base62 strings (``6rqhFgbbKwnb9MLmUQDhG6``) and URIs
are ``spotify:<type>:<id>``. Every resource type shares the SAME validation, so there is one
generic ``SpotifyId`` and the concrete types (TrackId, AlbumId, ...) only pin the ``IdType``.
That still keeps a TrackId and an AlbumId distinct for type checkers and ``==``.

User ids are the odd one out: they are free-form usernames, so they are never validated.

Usage:
    from spotify_web_api.domain.value_objects.ids import TrackId

    track = TrackId.from_uri("spotify:track:6rqhFgbbKwnb9MLmUQDhG6")
    track.id   -> "6rqhFgbbKwnb9MLmUQDhG6"
    track.uri  -> "spotify:track:6rqhFgbbKwnb9MLmUQDhG6"
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeVar

from spotify_web_api.domain.exceptions import InvalidIdFormatError, InvalidIdLengthError

ID_LENGTH = 22
BASE62_ALPHABET = frozenset(string.ascii_letters + string.digits)

IdT = TypeVar("IdT", bound="SpotifyId")


class IdType(str, Enum):
    """Resource type segment of a Spotify URI."""

    USER = "user"
    ALBUM = "album"
    ARTIST = "artist"
    PLAYLIST = "playlist"
    TRACK = "track"
    SHOW = "show"
    EPISODE = "episode"


def is_base62(value: str) -> bool:
    """Check that every character is an ASCII letter or digit."""
    return all(char in BASE62_ALPHABET for char in value)


@dataclass(frozen=True)
class SpotifyId:
    """A validated Spotify identifier of one resource type."""

    id: str

    id_type: ClassVar[IdType]

    def __init_subclass__(cls, id_type: IdType | None = None, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if id_type is not None:
            cls.id_type = id_type

    @classmethod
    def _validate(cls, value: str) -> str:
        if cls.id_type is IdType.USER:
            return value
        if len(value) != ID_LENGTH:
            raise InvalidIdLengthError(got=len(value), expected=ID_LENGTH)
        if not is_base62(value):
            raise InvalidIdFormatError(value)
        return value

    @classmethod
    def from_id(cls: type[IdT], value: str) -> IdT:
        """Build an id from its bare form.

        Raises:
            InvalidIdLengthError: If the id is not 22 characters long
            InvalidIdFormatError: If the id is not base62
        """
        return cls(cls._validate(value))

    @classmethod
    def from_uri(cls: type[IdT], uri: str) -> IdT:
        """Build an id from ``spotify:<type>:<id>``.

        Raises:
            InvalidIdFormatError: If the prefix does not match this id type
            InvalidIdLengthError: If the id part is not 22 characters long
        """
        prefix = f"spotify:{cls.id_type.value}:"
        if not uri.startswith(prefix):
            raise InvalidIdFormatError(uri)
        return cls(cls._validate(uri[len(prefix) :]))

    @property
    def uri(self) -> str:
        """Spotify URI, e.g. ``spotify:track:<id>``."""
        return f"spotify:{self.id_type.value}:{self.id}"

    @property
    def url(self) -> str:
        """Public open.spotify.com link."""
        return f"https://open.spotify.com/{self.id_type.value}/{self.id}"

    def __str__(self) -> str:
        return self.id


class UserId(SpotifyId, id_type=IdType.USER):
    """A Spotify user id (not validated)."""


class AlbumId(SpotifyId, id_type=IdType.ALBUM):
    """A validated Spotify album id."""


class ArtistId(SpotifyId, id_type=IdType.ARTIST):
    """A validated Spotify artist id."""


class PlaylistId(SpotifyId, id_type=IdType.PLAYLIST):
    """A validated Spotify playlist id."""


class TrackId(SpotifyId, id_type=IdType.TRACK):
    """A validated Spotify track id."""


class ShowId(SpotifyId, id_type=IdType.SHOW):
    """A validated Spotify show (podcast) id."""


class EpisodeId(SpotifyId, id_type=IdType.EPISODE):
    """A validated Spotify episode id."""
