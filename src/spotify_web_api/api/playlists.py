"""Playlist endpoints."""

from collections.abc import Sequence
from dataclasses import dataclass

from spotify_web_api.domain.ports import Endpoint, Pageable
from spotify_web_api.domain.value_objects.ids import (
    EpisodeId,
    PlaylistId,
    SpotifyId,
    TrackId,
    UserId,
)
from spotify_web_api.infrastructure.integrations.params import (
    Body,
    JsonParams,
    QueryParams,
    comma_list,
)

PlaylistItem = TrackId | EpisodeId


@dataclass(frozen=True)
class GetPlaylist(Endpoint):
    """``GET playlists/{id}`` - a playlist owned by any user.

    ``fields`` is Spotify's field filter, e.g. ``"name,tracks.items(track(name))"``.
    """

    id: str | PlaylistId
    market: str | None = None
    fields: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"playlists/{self.id}"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("market", self.market)
        params.push_opt("fields", self.fields)
        return params


@dataclass(frozen=True)
class GetCurrentUserPlaylists(Endpoint, Pageable):
    """``GET me/playlists`` - playlists owned or followed by the user (paged)."""

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "me/playlists"


@dataclass(frozen=True)
class CreatePlaylist(Endpoint):
    """``POST users/{user_id}/playlists`` - create an (empty) playlist for a user."""

    user_id: str | UserId
    name: str
    public: bool | None = None
    collaborative: bool | None = None
    description: str | None = None

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return f"users/{self.user_id}/playlists"

    def body(self) -> Body:
        return JsonParams.into_body(
            JsonParams.clean(
                {
                    "name": self.name,
                    "public": self.public,
                    "collaborative": self.collaborative,
                    "description": self.description,
                }
            )
        )


# Hey future me - this endpoint wants URIs (spotify:track:...), NOT bare ids. Ids would be
# accepted by the query string and then silently rejected by Spotify with a 400.
def item_uri(item: SpotifyId | str) -> str:
    return item.uri if isinstance(item, SpotifyId) else item


@dataclass(frozen=True)
class AddItemsToPlaylist(Endpoint):
    """``POST playlists/{id}/tracks`` - add tracks or episodes (appended unless ``position``).

    Answers with the new playlist version, decode it with ``query(client, into=SnapshotId)``.
    """

    id: str | PlaylistId
    uris: Sequence[PlaylistItem | str]
    position: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "uris", tuple(self.uris))

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return f"playlists/{self.id}/tracks"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("uris", comma_list(item_uri(item) for item in self.uris))
        params.push_opt("position", self.position)
        return params
