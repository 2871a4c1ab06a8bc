"""Thread-safe holder of the current access token.

Hey future me - this is the SINGLE source of truth for the token of one Spotify client. Every
request reads it, every fetch/refresh writes it. A plain ``threading.Lock`` guards it; reads and
writes are tiny (no I/O under the lock) so sync threads and the event loop can share it.

KNOWN RACE (accepted): "is it expired? then refresh" is NOT atomic. Two concurrent callers can
both see a stale token and both refresh. Both refreshes return valid tokens and the last write
wins, so requests still succeed - we just pay one extra token call. Don't bolt a single-flight
lock on here unless that extra call becomes a real problem.
"""

import logging
import threading
from collections.abc import Callable

from spotify_web_api.domain.dtos import Token
from spotify_web_api.domain.exceptions import EmptyAccessTokenError

logger = logging.getLogger(__name__)

TokenCallback = Callable[[Token], None]


class TokenStore:
    """Lock-guarded ``Token | None`` plus an optional observer callback."""

    def __init__(self, token: Token | None = None) -> None:
        self._lock = threading.Lock()
        self._token = token
        self.callback: TokenCallback | None = None

    def get(self) -> Token | None:
        with self._lock:
            return self._token

    def require(self) -> Token:
        """Current token.

        Raises:
            EmptyAccessTokenError: If no token has been obtained yet, or its access token is empty
        """
        token = self.get()
        if token is None or not token.access_token:
            raise EmptyAccessTokenError()
        return token

    # Listen up: Spotify might NOT return a new refresh_token on refresh - keep the old one!
    # Dropping it would make the NEXT refresh impossible.
    def set(self, token: Token, previous: Token | None = None) -> Token:
        """Stamp the absolute expiry, notify the callback, then store.

        Args:
            token: Fresh token from the token endpoint
            previous: Token being replaced; its refresh token is kept if ``token`` has none

        Returns:
            The stored token
        """
        if token.refresh_token is None and previous is not None and previous.refresh_token:
            token = token.model_copy(update={"refresh_token": previous.refresh_token})
        token = token.with_expiry()

        if self.callback is not None:
            self.callback(token)

        with self._lock:
            self._token = token
        logger.debug("Stored new access token (expires at %s)", token.expires_at)
        return token

    def restore(self, token: Token) -> None:
        """Store a persisted token as-is (its ``expires_at`` is already absolute)."""
        with self._lock:
            self._token = token

    def to_json(self) -> str:
        """Serialize the current token (e.g. to persist it between runs).

        Raises:
            EmptyAccessTokenError: If there is no token
        """
        return self.require().model_dump_json()
