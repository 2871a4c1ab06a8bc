"""User endpoints."""

from dataclasses import dataclass

from spotify_web_api.domain.dtos import FollowedArtistsType
from spotify_web_api.domain.ports import Endpoint
from spotify_web_api.infrastructure.integrations.params import QueryParams


# Yo future me, this one is CURSOR paged ({"artists": {"cursors": {"after": ...}}}), so it is
# NOT Pageable and the offset paginators refuse it. Walk it by feeding cursors.after back into
# ``after`` until it comes back None, decoding each answer into FollowedArtists.
@dataclass(frozen=True)
class GetFollowedArtists(Endpoint):
    """``GET me/following?type=artist`` - artists the user follows."""

    type: FollowedArtistsType = FollowedArtistsType.ARTIST
    after: str | None = None
    limit: int | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "me/following"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("type", self.type)
        params.push_opt("after", self.after)
        params.push_opt("limit", self.limit)
        return params
