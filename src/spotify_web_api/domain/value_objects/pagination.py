"""Pagination policy and cursor bookkeeping for offset-paged Spotify collections.

Hey future me - Spotify caps EVERY paged endpoint at 50 items per request. A caller can ask for
"everything", "the first n" or "n items starting at offset k"; this module turns that wish into a
per-request page size and a stop predicate. The eager and lazy paginators in
``application/queries/paged.py`` share all of it, so fix stop-condition bugs HERE, not there.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum

MAX_LIMIT = 50


class PaginationKind(str, Enum):
    ALL = "all"
    LIMIT = "limit"
    PAGE = "page"


@dataclass(frozen=True)
class Pagination:
    """How many items a paged query should collect.

    Attributes:
        kind: ALL, LIMIT (first ``limit`` items) or PAGE (``limit`` items from ``offset``)
        limit: Item cap for LIMIT/PAGE, ignored for ALL
        offset: Start offset of the first request (PAGE only)
    """

    kind: PaginationKind = PaginationKind.ALL
    limit: int | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.kind is not PaginationKind.ALL and (self.limit is None or self.limit < 0):
            raise ValueError(f"{self.kind.value} pagination needs a non-negative limit")
        if self.offset < 0:
            raise ValueError("offset must be non-negative")

    @classmethod
    def all(cls) -> "Pagination":
        """Every item the server has."""
        return cls(PaginationKind.ALL)

    @classmethod
    def limit_to(cls, limit: int) -> "Pagination":
        """The first ``limit`` items."""
        return cls(PaginationKind.LIMIT, limit=limit)

    @classmethod
    def page(cls, limit: int, offset: int) -> "Pagination":
        """``limit`` items starting at ``offset``."""
        return cls(PaginationKind.PAGE, limit=limit, offset=offset)

    @property
    def page_size(self) -> int:
        """Per-request ``limit`` sent to Spotify, never above 50."""
        if self.kind is PaginationKind.ALL or self.limit is None:
            return MAX_LIMIT
        return min(self.limit, MAX_LIMIT)

    @property
    def cap(self) -> int | None:
        """Total number of items to collect, None for ALL."""
        return None if self.kind is PaginationKind.ALL else self.limit

    # Hey future me - a page SHORTER than what we asked for means the server ran out of items.
    # That also covers the empty page. ALL never stops on the count check, only on short pages
    # (and the missing ``next`` link, which the callers check themselves).
    def is_last_page(self, last_page_size: int, total_collected: int) -> bool:
        """Decide whether pagination stops after a page.

        Args:
            last_page_size: Number of items on the page just received
            total_collected: Items collected so far, including that page

        Returns:
            True if no further page should be requested
        """
        if last_page_size < self.page_size:
            return True
        cap = self.cap
        return cap is not None and total_collected >= cap

    def trim(self, collected: int) -> int:
        """How many items of ``collected`` the caller should actually see."""
        cap = self.cap
        return collected if cap is None else min(collected, cap)


class CursorKind(str, Enum):
    FIRST = "first"
    NEXT = "next"
    DONE = "done"


@dataclass(frozen=True)
class PageCursor:
    """Where the lazy paginator fetches next: the first page, a ``next`` link, or nowhere."""

    kind: CursorKind = CursorKind.FIRST
    url: str | None = None

    @classmethod
    def first(cls) -> "PageCursor":
        return cls(CursorKind.FIRST)

    @classmethod
    def next(cls, url: str) -> "PageCursor":
        return cls(CursorKind.NEXT, url)

    @classmethod
    def done(cls) -> "PageCursor":
        return cls(CursorKind.DONE)

    @property
    def is_done(self) -> bool:
        return self.kind is CursorKind.DONE

    @property
    def next_url(self) -> str | None:
        return self.url if self.kind is CursorKind.NEXT else None


@dataclass
class PageState:
    """Running total and cursor of one pagination session, guarded by a lock."""

    pagination: Pagination
    total: int = 0
    cursor: PageCursor = field(default_factory=PageCursor.first)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def snapshot(self) -> tuple[int, PageCursor]:
        """Read total and cursor together."""
        with self._lock:
            return self.total, self.cursor

    def advance(self, last_page_size: int, next_url: str | None) -> int:
        """Record a received page and move the cursor.

        Args:
            last_page_size: Number of items on the received page
            next_url: The page's ``next`` link, if any

        Returns:
            How many of the page's items the caller should keep (the cap may cut the last page)
        """
        with self._lock:
            before = self.total
            self.total += last_page_size
            if self.pagination.is_last_page(last_page_size, self.total) or next_url is None:
                self.cursor = PageCursor.done()
            else:
                self.cursor = PageCursor.next(next_url)
            return self.pagination.trim(self.total) - self.pagination.trim(before)
