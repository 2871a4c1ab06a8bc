"""Value objects: identifiers, scopes and pagination policy."""

from spotify_web_api.domain.value_objects.ids import (
    AlbumId,
    ArtistId,
    EpisodeId,
    IdType,
    PlaylistId,
    ShowId,
    SpotifyId,
    TrackId,
    UserId,
)
from spotify_web_api.domain.value_objects.pagination import (
    MAX_LIMIT,
    PageCursor,
    PageState,
    Pagination,
)
from spotify_web_api.domain.value_objects.scopes import Scope, parse_scopes

__all__ = [
    "AlbumId",
    "ArtistId",
    "EpisodeId",
    "IdType",
    "PlaylistId",
    "ShowId",
    "SpotifyId",
    "TrackId",
    "UserId",
    "MAX_LIMIT",
    "PageCursor",
    "PageState",
    "Pagination",
    "Scope",
    "parse_scopes",
]
