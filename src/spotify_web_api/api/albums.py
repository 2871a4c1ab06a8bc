"""Album endpoints."""

from collections.abc import Sequence
from dataclasses import dataclass

from spotify_web_api.domain.ports import Endpoint, Pageable
from spotify_web_api.domain.value_objects.ids import AlbumId
from spotify_web_api.infrastructure.integrations.params import QueryParams, comma_list


@dataclass(frozen=True)
class GetSeveralAlbums(Endpoint):
    """``GET albums?ids=...`` - catalog information for up to 20 albums."""

    ids: Sequence[str | AlbumId]
    market: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "albums"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("ids", comma_list(self.ids))
        params.push_opt("market", self.market)
        return params


@dataclass(frozen=True)
class GetUserSavedAlbums(Endpoint, Pageable):
    """``GET me/albums`` - the albums saved in the user's library (paged)."""

    market: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "me/albums"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("market", self.market)
        return params


@dataclass(frozen=True)
class SaveAlbumsForCurrentUser(Endpoint):
    """``PUT me/albums?ids=...`` - save albums to the user's library."""

    ids: Sequence[str | AlbumId]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))

    def method(self) -> str:
        return "PUT"

    def endpoint(self) -> str:
        return "me/albums"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("ids", comma_list(self.ids))
        return params


@dataclass(frozen=True)
class CheckUserSavedAlbums(Endpoint):
    """``GET me/albums/contains?ids=...`` - answers with one boolean per id, in order."""

    ids: Sequence[str | AlbumId]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "me/albums/contains"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("ids", comma_list(self.ids))
        return params
