"""Saved-track endpoints of the user's library."""

from collections.abc import Sequence
from dataclasses import dataclass

from spotify_web_api.domain.ports import Endpoint
from spotify_web_api.domain.value_objects.ids import TrackId
from spotify_web_api.infrastructure.integrations.params import QueryParams, comma_list


@dataclass(frozen=True)
class SaveTracksForCurrentUser(Endpoint):
    """``PUT me/tracks?ids=...`` - up to 50 ids per call."""

    ids: Sequence[str | TrackId]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))

    def method(self) -> str:
        return "PUT"

    def endpoint(self) -> str:
        return "me/tracks"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("ids", comma_list(self.ids))
        return params


@dataclass(frozen=True)
class RemoveUserSavedTracks(Endpoint):
    """``DELETE me/tracks?ids=...``."""

    ids: Sequence[str | TrackId]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))

    def method(self) -> str:
        return "DELETE"

    def endpoint(self) -> str:
        return "me/tracks"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("ids", comma_list(self.ids))
        return params
