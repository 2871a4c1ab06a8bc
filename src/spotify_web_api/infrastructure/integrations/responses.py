"""Classification and decoding of Spotify responses.

Shared by the query strategies and the token endpoint: both see the same error body shapes and
both must treat ``301 Moved Permanently`` as a failure (we never follow redirects).
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from spotify_web_api.domain.exceptions import (
    DataTypeError,
    MovedPermanentlyError,
    ServerError,
    SpotifyError,
    SpotifyUnrecognizedError,
    SpotifyWithStatusError,
)
from spotify_web_api.domain.ports import RestResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def classify_error_body(
    status: int, value: Any
) -> SpotifyError | SpotifyWithStatusError | SpotifyUnrecognizedError:
    """Map a decoded JSON error body onto one of the Spotify error shapes."""
    if isinstance(value, dict):
        error = value.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            error_status = error.get("status")
            if not isinstance(error_status, int):
                error_status = status
            return SpotifyError(error_status, error["message"])
        if isinstance(error, str):
            return SpotifyWithStatusError(status, error)
        message = value.get("message")
        if isinstance(message, str):
            return SpotifyWithStatusError(status, message)
    return SpotifyUnrecognizedError(status, value)


def check_response(response: RestResponse) -> RestResponse:
    """Raise the classified error for a failed response, return it untouched otherwise.

    Raises:
        MovedPermanentlyError: On status 301, whatever the body
        ServerError: On a non-2xx status with a non-JSON body
        SpotifyError: On ``{"error": {"status": ..., "message": ...}}``
        SpotifyWithStatusError: On ``{"error": "..."}`` or ``{"message": "..."}``
        SpotifyUnrecognizedError: On any other JSON error body
    """
    if response.status_code == 301:
        raise MovedPermanentlyError(response.location)

    if response.is_success:
        return response

    try:
        value = json.loads(response.content)
    except ValueError as e:
        raise ServerError(response.status_code, response.content) from e

    error = classify_error_body(response.status_code, value)
    logger.debug("Spotify returned HTTP %d: %s", response.status_code, error.message)
    raise error


def decode_json(response: RestResponse) -> Any:
    """Parse a successful body as JSON.

    Raises:
        ServerError: If the body is not JSON
    """
    try:
        return json.loads(response.content)
    except ValueError as e:
        raise ServerError(response.status_code, response.content) from e


def type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


def decode_into(value: Any, target: type[T] | Any) -> T:
    """Validate decoded JSON against ``target`` (pydantic model, dataclass, builtin...).

    Raises:
        DataTypeError: If ``value`` does not fit the target shape
    """
    try:
        return TypeAdapter(target).validate_python(value)
    except ValidationError as e:
        raise DataTypeError(type_name(target), e) from e
