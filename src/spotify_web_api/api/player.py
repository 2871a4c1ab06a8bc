"""Player endpoints (need a Premium account for the write operations)."""

from dataclasses import dataclass

from spotify_web_api.domain.dtos import RepeatState
from spotify_web_api.domain.ports import Endpoint
from spotify_web_api.infrastructure.integrations.params import QueryParams


@dataclass(frozen=True)
class GetPlaybackState(Endpoint):
    """``GET me/player`` - current playback state. 204 with an empty body if nothing plays."""

    market: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "me/player"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("market", self.market)
        return params


@dataclass(frozen=True)
class PausePlayback(Endpoint):
    """``PUT me/player/pause``."""

    device_id: str | None = None

    def method(self) -> str:
        return "PUT"

    def endpoint(self) -> str:
        return "me/player/pause"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("device_id", self.device_id)
        return params


@dataclass(frozen=True)
class SetRepeatMode(Endpoint):
    """``PUT me/player/repeat?state=track|context|off``."""

    state: RepeatState
    device_id: str | None = None

    def method(self) -> str:
        return "PUT"

    def endpoint(self) -> str:
        return "me/player/repeat"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push("state", self.state)
        params.push_opt("device_id", self.device_id)
        return params
