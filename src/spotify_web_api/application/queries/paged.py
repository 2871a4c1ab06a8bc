"""Offset pagination over ``Pageable`` endpoints, eager and lazy, sync and async.

Hey future me - how a paged query walks Spotify:

- the FIRST request is the endpoint URL plus ``offset`` (from the policy) and ``limit``
  (``min(requested, 50)``)
- every LATER request uses the page's ``next`` link verbatim. We never recompute offsets, the
  server's link already carries them (and whatever else Spotify decided to put in there)
- we stop on a short page, when the policy's cap is reached, or when ``next`` is null

Pages are fetched strictly one after another, never fanned out. That keeps us inside Spotify's
rate limits and the next link needs the previous page anyway.

Usage:
    albums = paged_all(GetUserSavedAlbums(), item=SavedAlbum).query(client)

    for album in paged_with_limit(GetUserSavedAlbums(), 20).iter(client):
        ...

    async for album in paged_all(GetUserSavedAlbums()).aiter(async_client):
        ...
"""

import logging
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from spotify_web_api.application.queries.base import (
    decode_into,
    decode_json,
    endpoint_url,
    execute,
    execute_async,
)
from spotify_web_api.domain.dtos import Page
from spotify_web_api.domain.exceptions import UrlError
from spotify_web_api.domain.ports import (
    Endpoint,
    IAsyncClient,
    IClient,
    IRestClient,
    Pageable,
    RestResponse,
)
from spotify_web_api.domain.value_objects.pagination import (
    MAX_LIMIT,
    PageCursor,
    PageState,
    Pagination,
)
from spotify_web_api.infrastructure.integrations.params import QueryParams

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Paged(Generic[T]):
    """A pageable endpoint plus the pagination policy to walk it with.

    Attributes:
        endpoint: Endpoint that mixes in ``Pageable``
        pagination: How many items to collect
        item: Type each entry of ``items`` is decoded into (default: plain dict)
    """

    endpoint: Endpoint
    pagination: Pagination = field(default_factory=Pagination.all)
    item: Any = dict

    def __post_init__(self) -> None:
        if not isinstance(self.endpoint, Pageable):
            raise TypeError(f"{type(self.endpoint).__name__} is not a pageable endpoint")

    def page_url(self, client: IRestClient, cursor: PageCursor) -> httpx.URL:
        """URL for the page the cursor points at."""
        next_url = cursor.next_url
        if next_url is not None:
            return httpx.URL(next_url)

        page_params = (
            QueryParams()
            .push("offset", self.pagination.offset)
            .push("limit", self.pagination.page_size)
        )
        return page_params.add_to_url(endpoint_url(self.endpoint, client))

    def decode_page(self, response: RestResponse) -> Page[Any]:
        """Decode one page envelope.

        Raises:
            ServerError: If the body is not JSON
            DataTypeError: If it is not a page of ``item``
        """
        return decode_into(decode_json(response), Page[self.item])

    @staticmethod
    def next_link(page: Page[Any]) -> str | None:
        """The page's ``next`` link, validated as an absolute URL.

        Raises:
            UrlError: If Spotify sent something that is not an absolute URL
        """
        if page.next is None:
            return None
        try:
            url = httpx.URL(page.next)
        except httpx.InvalidURL as e:
            raise UrlError(page.next, str(e)) from e
        if not url.is_absolute_url:
            raise UrlError(page.next, "next link is not absolute")
        return page.next

    def record(self, state: PageState, page: Page[Any]) -> list[Any]:
        keep = state.advance(len(page.items), self.next_link(page))
        return page.items[:keep]

    def query(self, client: IClient) -> list[T]:
        """Collect every item the policy allows, in server order.

        Raises:
            ApiError: On any failed page (no partial result is returned)
        """
        return list(self.iter(client))

    async def query_async(self, client: IAsyncClient) -> list[T]:
        """Async variant of ``query``."""
        state = PageState(self.pagination)
        results: list[T] = []
        cursor = PageCursor.first()

        while not cursor.is_done:
            url = self.page_url(client, cursor)
            logger.debug("Fetching page %s", url)
            response = await execute_async(self.endpoint, client, url)
            results.extend(self.record(state, self.decode_page(response)))
            _, cursor = state.snapshot()

        return results

    def iter(self, client: IClient) -> "LazilyPagedIter[T]":
        """Iterate lazily, one HTTP request per exhausted page."""
        return LazilyPagedIter(self, client)

    def aiter(self, client: IAsyncClient) -> "AsyncLazilyPagedIter[T]":
        """Async variant of ``iter``."""
        return AsyncLazilyPagedIter(self, client)


class _LazyState(Generic[T]):
    """Page buffer and cursor shared by the sync and async lazy iterators."""

    def __init__(self, paged: Paged[T]) -> None:
        self.paged = paged
        self.state = PageState(paged.pagination)
        # Hey future me - the buffer holds the current page REVERSED so next() is a cheap
        # pop() from the tail, which hands items out in their original order.
        self.current_page: list[T] = []

    @property
    def is_done(self) -> bool:
        _, cursor = self.state.snapshot()
        return cursor.is_done

    def cursor(self) -> PageCursor:
        _, cursor = self.state.snapshot()
        return cursor

    def fill(self, page: Page[Any]) -> None:
        items = self.paged.record(self.state, page)
        items.reverse()
        self.current_page = items


class LazilyPagedIter(Iterator[T]):
    """Blocking iterator over the items of a paged query."""

    def __init__(self, paged: Paged[T], client: IClient) -> None:
        self._lazy: _LazyState[T] = _LazyState(paged)
        self._client = client

    def __iter__(self) -> "LazilyPagedIter[T]":
        return self

    def __next__(self) -> T:
        lazy = self._lazy
        while not lazy.current_page:
            if lazy.is_done:
                raise StopIteration
            url = lazy.paged.page_url(self._client, lazy.cursor())
            logger.debug("Fetching page %s", url)
            response = execute(lazy.paged.endpoint, self._client, url)
            lazy.fill(lazy.paged.decode_page(response))
        return lazy.current_page.pop()


class AsyncLazilyPagedIter(AsyncIterator[T]):
    """Async iterator over the items of a paged query."""

    def __init__(self, paged: Paged[T], client: IAsyncClient) -> None:
        self._lazy: _LazyState[T] = _LazyState(paged)
        self._client = client

    def __aiter__(self) -> "AsyncLazilyPagedIter[T]":
        return self

    async def __anext__(self) -> T:
        lazy = self._lazy
        while not lazy.current_page:
            if lazy.is_done:
                raise StopAsyncIteration
            url = lazy.paged.page_url(self._client, lazy.cursor())
            logger.debug("Fetching page %s", url)
            response = await execute_async(lazy.paged.endpoint, self._client, url)
            lazy.fill(lazy.paged.decode_page(response))
        return lazy.current_page.pop()


def paged(
    endpoint: Endpoint, pagination: Pagination | None = None, item: Any = dict
) -> Paged[Any]:
    return Paged(endpoint, pagination or Pagination.all(), item)


def paged_all(endpoint: Endpoint, item: Any = dict) -> Paged[Any]:
    """Every item of the collection."""
    return paged(endpoint, Pagination.all(), item)


def paged_with_limit(endpoint: Endpoint, limit: int, item: Any = dict) -> Paged[Any]:
    """The first ``limit`` items, ``limit`` capped at 50."""
    return paged(endpoint, Pagination.limit_to(min(limit, MAX_LIMIT)), item)


def paged_with_limit_and_offset(
    endpoint: Endpoint, limit: int, offset: int, item: Any = dict
) -> Paged[Any]:
    """``limit`` items (capped at 50) starting at ``offset``."""
    return paged(endpoint, Pagination.page(min(limit, MAX_LIMIT), offset), item)
