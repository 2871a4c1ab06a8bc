"""Wire models shared by every endpoint.

Hey future me - these are the SMALL set of JSON shapes the query pipeline itself needs (token,
page envelopes) plus the enums endpoints push as parameters. The hundreds of per-resource
response objects Spotify returns are NOT modelled here; decode them into your own pydantic model
(or a plain ``dict``) with the typed query strategy.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Token(BaseModel):
    """OAuth access token as returned by ``/api/token`` plus its absolute expiry."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_token: str | None = None
    scope: str | None = None

    # Hey future me - Spotify only sends the RELATIVE expires_in. The token store turns it into an
    # absolute UTC timestamp the moment the token is stored, so any reader (sync or async, any
    # thread) only has to compare against "now".
    expires_at: datetime | None = None

    def with_expiry(self, now: datetime | None = None) -> "Token":
        """Return a copy whose ``expires_at`` is ``now + expires_in``."""
        now = now or datetime.now(UTC)
        return self.model_copy(update={"expires_at": now + timedelta(seconds=self.expires_in)})

    @property
    def is_expired(self) -> bool:
        """True once the absolute expiry is in the past. No expiry means never expired."""
        if self.expires_at is None:
            return False
        return datetime.now(UTC) > self.expires_at


class Page(BaseModel, Generic[T]):
    """Offset-paged envelope: ``{href, limit, next, offset, previous, total, items}``."""

    href: str = ""
    limit: int = 0
    next: str | None = None
    offset: int = 0
    previous: str | None = None
    total: int = 0
    items: list[T] = Field(default_factory=list)


class Cursors(BaseModel):
    after: str | None = None
    before: str | None = None


class CursorPage(BaseModel, Generic[T]):
    """Cursor-paged envelope used by e.g. followed artists and recently played."""

    href: str = ""
    limit: int = 0
    next: str | None = None
    cursors: Cursors | None = None
    total: int | None = None
    items: list[T] = Field(default_factory=list)


class FollowedArtists(BaseModel):
    """``GET me/following`` wraps its cursor page in an ``artists`` key."""

    artists: CursorPage[dict[str, Any]]


class Image(BaseModel):
    url: str
    height: int | None = None
    width: int | None = None


class ExternalUrls(BaseModel):
    spotify: str


class SnapshotId(BaseModel):
    """Response of playlist item mutations."""

    snapshot_id: str


class SimplifiedPlaylist(BaseModel):
    """The subset of a playlist object every playlist endpoint returns."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    uri: str
    public: bool | None = None
    collaborative: bool = False
    description: str | None = None
    snapshot_id: str | None = None
    images: list[Image] | None = None
    external_urls: ExternalUrls | None = None


# =============================================================================
# Enumerations pushed as request parameters
# =============================================================================


class RepeatState(str, Enum):
    TRACK = "track"
    CONTEXT = "context"
    OFF = "off"


class FollowedArtistsType(str, Enum):
    ARTIST = "artist"


__all__ = [
    "Token",
    "Page",
    "Cursors",
    "CursorPage",
    "FollowedArtists",
    "Image",
    "ExternalUrls",
    "SnapshotId",
    "SimplifiedPlaylist",
    "RepeatState",
    "FollowedArtistsType",
]
