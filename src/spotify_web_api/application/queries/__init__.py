"""Query strategies: how an endpoint is executed and what comes back."""

from spotify_web_api.application.queries.ignore import Ignore, ignore
from spotify_web_api.application.queries.paged import (
    AsyncLazilyPagedIter,
    LazilyPagedIter,
    Paged,
    paged,
    paged_all,
    paged_with_limit,
    paged_with_limit_and_offset,
)
from spotify_web_api.application.queries.raw import Raw, raw
from spotify_web_api.application.queries.typed import Typed, typed

__all__ = [
    "Ignore",
    "ignore",
    "Raw",
    "raw",
    "Typed",
    "typed",
    "Paged",
    "paged",
    "paged_all",
    "paged_with_limit",
    "paged_with_limit_and_offset",
    "LazilyPagedIter",
    "AsyncLazilyPagedIter",
]
