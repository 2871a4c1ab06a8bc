"""Request parameter encoding (query string, form body, JSON body).

Hey future me - every endpoint builds its parameters through these helpers so the wire format is
decided in ONE place: booleans are ``true``/``false`` (not Python's ``True``), datetimes are
RFC 3339 UTC with seconds precision, enums send their wire token. Register new value types on
``param_value`` instead of formatting them inline in endpoints.
"""

import json
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from functools import singledispatch
from typing import Any
from urllib.parse import parse_qsl, urlencode

import httpx

from spotify_web_api.domain.exceptions import BodyError
from spotify_web_api.domain.value_objects.ids import SpotifyId

FORM_MIME = "application/x-www-form-urlencoded"
JSON_MIME = "application/json"

Body = tuple[str, bytes]


@singledispatch
def param_value(value: Any) -> str:
    """Serialize one parameter value into its canonical string form."""
    return str(value)


@param_value.register
def _(value: bool) -> str:
    return "true" if value else "false"


@param_value.register
def _(value: str) -> str:
    # str-based enums dispatch here before Enum (str comes first in their MRO).
    if isinstance(value, Enum):
        return str(value.value)
    return value


@param_value.register
def _(value: Enum) -> str:
    return param_value(value.value)


@param_value.register
def _(value: datetime) -> str:
    # Naive datetimes are taken as UTC, aware ones converted.
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


@param_value.register
def _(value: SpotifyId) -> str:
    return value.id


def comma_list(values: Iterable[Any]) -> str:
    """Join values into Spotify's comma separated list form (``ids=a,b,c``)."""
    return ",".join(param_value(value) for value in values)


class _Params:
    """Insertion ordered (key, value) pairs. Duplicate keys are kept."""

    def __init__(self) -> None:
        self._params: list[tuple[str, str]] = []

    def push(self, key: str, value: Any) -> "_Params":
        """Add a required parameter."""
        self._params.append((key, param_value(value)))
        return self

    def push_opt(self, key: str, value: Any | None) -> "_Params":
        """Add a parameter only if ``value`` is not None."""
        if value is not None:
            self._params.append((key, param_value(value)))
        return self

    def extend(self, pairs: Iterable[tuple[str, Any]]) -> "_Params":
        """Add many parameters at once, keeping their order."""
        self._params.extend((key, param_value(value)) for key, value in pairs)
        return self

    def items(self) -> list[tuple[str, str]]:
        return list(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __bool__(self) -> bool:
        return bool(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Params):
            return NotImplemented
        return type(self) is type(other) and self._params == other._params

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params!r})"


class QueryParams(_Params):
    """Parameters appended to a URL's query string."""

    # Hey future me - don't route this through httpx.QueryParams (or url.params)! It keeps a
    # key -> values map, so "ids=a&q=x&ids=b" comes back as "ids=a&ids=b&q=x". We parse and
    # rebuild the raw query ourselves to keep the pairs exactly in insertion order.
    def add_to_url(self, url: httpx.URL | str) -> httpx.URL:
        """Return ``url`` with these parameters appended after any it already has."""
        url = httpx.URL(url)
        if not self._params:
            return url
        merged = query_pairs(url) + self._params
        return url.copy_with(query=urlencode(merged).encode("ascii"))

    def to_query_string(self) -> str:
        return urlencode(self._params)


def query_pairs(url: httpx.URL) -> list[tuple[str, str]]:
    """Decode a URL's query into ordered (key, value) pairs, duplicates kept where they are."""
    return parse_qsl(url.query.decode("ascii"), keep_blank_values=True)


class FormParams(_Params):
    """Parameters sent as an ``application/x-www-form-urlencoded`` body."""

    def into_body(self) -> Body:
        try:
            return FORM_MIME, urlencode(self._params).encode("utf-8")
        except (TypeError, UnicodeEncodeError) as e:
            raise BodyError(f"failed to encode form body: {e}") from e


class JsonParams:
    """Helpers for endpoints that send a JSON body."""

    # Hey future me - clean() ONLY looks at the top level! A nested {"a": {"b": null}} keeps its
    # null. Spotify's write endpoints choke on top-level nulls/empties, nested ones are payload.
    @staticmethod
    def clean(value: Any) -> Any:
        """Drop top-level ``null``, ``[]`` and ``{}`` members of a JSON object."""
        if not isinstance(value, dict):
            return value
        return {
            key: item
            for key, item in value.items()
            if item is not None and item != [] and item != {}
        }

    @staticmethod
    def into_body(value: Any) -> Body:
        """Serialize to compact, key-sorted JSON bytes."""
        try:
            data = json.dumps(value, separators=(",", ":"), sort_keys=True)
        except (TypeError, ValueError) as e:
            raise BodyError(f"failed to encode JSON body: {e}") from e
        return JSON_MIME, data.encode("utf-8")
