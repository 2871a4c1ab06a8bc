"""Concrete Web API endpoints.

Each endpoint is a frozen dataclass describing one request; run it with a query strategy:

    ignore(SaveTracksForCurrentUser(["4iV5W9uYEdYUVa79Axb7Rh"])).query(spotify)
    albums = paged_all(GetUserSavedAlbums()).query(spotify)
    playlist = GetPlaylist("3cEYpjA9oz9GiPac4AsH4n").query(spotify, into=SimplifiedPlaylist)
"""

from spotify_web_api.api.albums import (
    CheckUserSavedAlbums,
    GetSeveralAlbums,
    GetUserSavedAlbums,
    SaveAlbumsForCurrentUser,
)
from spotify_web_api.api.player import GetPlaybackState, PausePlayback, SetRepeatMode
from spotify_web_api.api.playlists import (
    AddItemsToPlaylist,
    CreatePlaylist,
    GetCurrentUserPlaylists,
    GetPlaylist,
)
from spotify_web_api.api.tracks import RemoveUserSavedTracks, SaveTracksForCurrentUser
from spotify_web_api.api.users import GetFollowedArtists

__all__ = [
    "CheckUserSavedAlbums",
    "GetSeveralAlbums",
    "GetUserSavedAlbums",
    "SaveAlbumsForCurrentUser",
    "GetPlaybackState",
    "PausePlayback",
    "SetRepeatMode",
    "AddItemsToPlaylist",
    "CreatePlaylist",
    "GetCurrentUserPlaylists",
    "GetPlaylist",
    "RemoveUserSavedTracks",
    "SaveTracksForCurrentUser",
    "GetFollowedArtists",
]
